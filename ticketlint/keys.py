"""Issue key extraction from branch names, PR titles and commit messages."""

import logging
import re
from collections.abc import Sequence

from ticketlint.models import IssueKey

logger = logging.getLogger(__name__)

# Matched against the *reversed*, uppercased input: digits, a hyphen, then at
# most 10 prefix characters. Scanning the reversed text keeps the prefix as
# short as the adjacent run allows, so "feature/newFeature--mojo-5611" yields
# MOJO-5611 rather than swallowing neighbouring words.
_REVERSED_KEY_RE = re.compile(r"([0-9]+)-([A-Z0-9]{1,10})")


def extract_keys(text: str) -> list[IssueKey]:
    """Return every issue key in ``text``, in left-to-right order.

    >>> [str(k) for k in extract_keys("MOJO-6789/task_with_underscores-ES-43")]
    ['MOJO-6789', 'ES-43']
    >>> [str(k) for k in extract_keys("ABCDEFGHIJKL-999")]
    ['CDEFGHIJKL-999']
    """
    if not text:
        return []
    reversed_text = text[::-1].upper()
    keys = [
        IssueKey(prefix=match.group(2)[::-1], number=match.group(1)[::-1])
        for match in _REVERSED_KEY_RE.finditer(reversed_text)
    ]
    keys.reverse()
    logger.debug("Extracted %d issue key(s) from %r", len(keys), text)
    return keys


def canonical_key(keys: Sequence[IssueKey]) -> IssueKey | None:
    """Pick the key for the run: the last one, since keys usually end a branch name."""
    return keys[-1] if keys else None
