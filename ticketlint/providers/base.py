"""Abstract base classes for the issue tracker and the code host."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ticketlint.models import IssueDetails


class IssueNotFoundError(RuntimeError):
    """The tracker has no issue with the requested key."""


class IssueTracker(ABC):
    @abstractmethod
    def get_issue(self, key: str) -> IssueDetails: ...


class CodeHost(ABC):
    @abstractmethod
    def add_labels(self, number: int, labels: Sequence[str]) -> None: ...

    @abstractmethod
    def update_description(self, number: int, body: str) -> None: ...

    @abstractmethod
    def add_comment(self, number: int, body: str) -> None: ...
