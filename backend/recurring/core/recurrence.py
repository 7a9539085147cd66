"""Recurrence Evaluator — expands one definition into the dates inside a window.

Invariants:
    - Pure: output depends only on (definition, window_start, window_end)
    - Every emitted date d satisfies (d - start_date).days % interval_days == 0
    - Every emitted date lies in [window_start, window_end]
    - No emitted date is >= stop_date (exclusive cutoff)
    - interval_days <= 0 yields no occurrences, never an error or an endless loop

Design Decisions:
    - Jump straight to the first aligned date instead of walking from start_date:
      cost is proportional to the window, not to the age of the series
    - Arithmetic runs on proleptic ordinals (plain ints); a date is built only
      for ordinals already known to lie inside the window, so windows and
      intervals reaching past date.max never overflow
    - Python's % is already Euclidean for a positive divisor, so the remainder is
      never negative even though the day difference is >= 0 here by construction
"""

from datetime import date

from recurring.core.domain_types import Occurrence, RecurrenceDefinition


def _first_aligned_ordinal(
    start_date: date, interval_days: int, not_before: date,
) -> int:
    seed = max(not_before, start_date).toordinal()
    remainder = (seed - start_date.toordinal()) % interval_days
    if remainder == 0:
        return seed
    return seed + interval_days - remainder


def first_aligned_date(
    start_date: date, interval_days: int, not_before: date,
) -> date | None:
    """Earliest date >= max(start_date, not_before) on the series grid.

    None when that date would fall past date.max.
    """
    ordinal = _first_aligned_ordinal(start_date, interval_days, not_before)
    if ordinal > date.max.toordinal():
        return None
    return date.fromordinal(ordinal)


def evaluate(
    definition: RecurrenceDefinition, window_start: date, window_end: date,
) -> list[Occurrence]:
    """Occurrences of one definition within [window_start, window_end], ascending."""
    interval = definition.interval_days
    if interval <= 0:
        return []

    end = window_end.toordinal()
    stop_date = definition.stop_date
    stop = stop_date.toordinal() if stop_date is not None else None
    cursor = _first_aligned_ordinal(definition.start_date, interval, window_start)

    out: list[Occurrence] = []
    while cursor <= end:
        # Cutoff is monotonic: once reached, no later date can qualify.
        if stop is not None and cursor >= stop:
            break
        out.append(Occurrence(
            event_id=definition.id, name=definition.name,
            date=date.fromordinal(cursor),
        ))
        cursor += interval
    return out
