"""Occurrence Query Rules — window validation and name-filter normalization.

Invariants:
    - validate_window raises InvalidWindowError when start > end, before any evaluation
    - normalize_name_filter returns None for blank, "undefined" and "null" values
    - Returned filters are stripped; matching is case-insensitive substring (storage side)

Design Decisions:
    - "undefined"/"null" are kept as "no filter": some clients serialize a missing
      value as those literals, and the intent is unclear, so the rule is preserved as-is
"""

from datetime import date

from recurring.core.domain_types import OccurrenceWindow
from recurring.core.errors import InvalidWindowError

NULL_FILTER_TOKENS: frozenset[str] = frozenset({"undefined", "null"})


def validate_window(start: date, end: date) -> OccurrenceWindow:
    """Return the inclusive window or raise InvalidWindowError."""
    if start > end:
        raise InvalidWindowError(start, end)
    return OccurrenceWindow(start=start, end=end)


def normalize_name_filter(name: str | None) -> str | None:
    if name is None:
        return None
    stripped = name.strip()
    if not stripped or stripped in NULL_FILTER_TOKENS:
        return None
    return stripped

