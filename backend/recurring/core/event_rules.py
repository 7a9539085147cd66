"""Event Lifecycle Rules — pure validation for create, update and cut-from.

Invariants:
    - A stored event always has a non-empty name, interval_days > 0, stop_at >= start_date
    - merge_event_patch validates the MERGED result, not the patch alone
    - stop_at in a patch is tri-state: key absent keeps, None clears, a date sets
    - None for name, start_date or interval_days keeps the current value
    - compute_cut_stop never moves an existing stop later

Design Decisions:
    - Patches are plain dicts of supplied fields (Pydantic model_dump(exclude_unset=True)):
      absence is the only way to tell "keep" from "clear" for stop_at
    - Rules raise EventValidationError; the shell maps it to 400
"""

from datetime import date

from recurring.core.errors import EventValidationError

PATCHABLE_FIELDS: tuple[str, ...] = ("name", "start_date", "interval_days", "stop_at")
CLEARABLE_FIELDS: frozenset[str] = frozenset({"stop_at"})


def validate_event_fields(
    name: str, start_date: date, interval_days: int, stop_at: date | None,
) -> str:
    """Check a full definition. Returns the stripped name."""
    stripped = name.strip()
    if not stripped:
        raise EventValidationError("name cannot be empty", "name")
    if interval_days <= 0:
        raise EventValidationError("interval_days must be > 0", "interval_days")
    if stop_at is not None and stop_at < start_date:
        raise EventValidationError("stop_at must be >= start_date", "stop_at")
    return stripped


def merge_event_patch(current: dict, patch: dict) -> dict:
    """Apply patch over current, validate the result, return the fields to write.

    current holds name, start_date, interval_days, stop_at. Unknown patch keys
    are ignored. None for a required field keeps the current value; only
    stop_at can be cleared. The returned dict only contains fields to write.
    """
    changes = {
        k: patch[k] for k in PATCHABLE_FIELDS
        if k in patch and (patch[k] is not None or k in CLEARABLE_FIELDS)
    }
    merged = {**current, **changes}

    stripped = validate_event_fields(
        merged["name"], merged["start_date"],
        merged["interval_days"], merged["stop_at"],
    )
    if "name" in changes:
        changes["name"] = stripped
    return changes


def compute_cut_stop(
    start_date: date, current_stop: date | None, from_date: date,
) -> date:
    """New exclusive stop so that from_date and everything after it disappear."""
    if from_date < start_date:
        raise EventValidationError(
            "from must be >= start_date", "from",
        )
    if current_stop is not None and current_stop < from_date:
        return current_stop
    return from_date
