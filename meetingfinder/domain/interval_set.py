"""
Free-time table maintenance by interval subtraction.

A free-time table is a tuple of :class:`TimeSpan` objects sorted ascending by
start and pairwise non-overlapping. Adjacent spans are kept distinct, they
are never merged. Tables are treated as immutable values: every operation
returns a new table.
"""

import logging
from bisect import bisect_right
from typing import List, Sequence, Tuple

from .models import WHOLE_DAY, TimeSpan

logger = logging.getLogger(__name__)

FreeTimeTable = Tuple[TimeSpan, ...]

BEFORE_ALL_SPANS = -1


def new_table(window: TimeSpan = WHOLE_DAY) -> FreeTimeTable:
    """Create a table with a single free span covering the window."""
    return (window,)


def reverse_lower_bound(table: Sequence[TimeSpan], target: TimeSpan) -> int:
    """
    Return the index of the last span whose start is <= ``target.start``.

    Returns ``BEFORE_ALL_SPANS`` when every span in the table starts after the
    target.
    """
    starts = [span.start for span in table]
    return bisect_right(starts, target.start) - 1


def subtract(table: Sequence[TimeSpan], busy: TimeSpan) -> FreeTimeTable:
    """
    Remove a busy span from a free-time table.

    Possible cases, where ``idx`` is the last free span starting at or before
    the busy span:

    A. ``table[idx]`` contains the busy span:
       free:    [--------------------------]
       busy:               [-----]
       result:  [---------]       [--------]

    B. The busy span reaches past ``table[idx]``. It may cut the tail of
       ``table[idx]``, swallow any number of following spans and cut the head
       of the first span ending after it:
       free:    [------]   ...   [---------]
       busy:         [-------------]
       result:  [----]             [-------]

    A busy span that touches no free span leaves the table unchanged.
    """
    if not table:
        return tuple(table)

    idx = reverse_lower_bound(table, busy)
    result: List[TimeSpan] = list(table[:max(idx, 0)])

    if idx != BEFORE_ALL_SPANS and table[idx].contains(busy):
        original = table[idx]
        if original.start < busy.start:
            result.append(TimeSpan(start=original.start, end=busy.start))
        if busy.stop < original.stop:
            result.append(TimeSpan(start=busy.stop, end=original.stop))
        result.extend(table[idx + 1:])
        logger.debug("Split free span %s around busy span %s", original, busy)
        return tuple(result)

    position = 0
    if idx != BEFORE_ALL_SPANS:
        anchor = table[idx]
        if not anchor.overlaps(busy):
            result.append(anchor)
        elif anchor.start < busy.start:
            result.append(TimeSpan(start=anchor.start, end=busy.start))
        position = idx + 1

    # Spans swallowed whole by the busy span
    while position < len(table) and busy.contains(table[position]):
        position += 1

    if position < len(table) and table[position].overlaps(busy):
        trailing = table[position]
        result.append(TimeSpan(start=busy.stop, end=trailing.stop))
        position += 1

    result.extend(table[position:])
    logger.debug("Removed busy span %s: %d -> %d free spans", busy, len(table), len(result))
    return tuple(result)


def subtract_all(table: Sequence[TimeSpan], busy_spans: Sequence[TimeSpan]) -> FreeTimeTable:
    """Remove every busy span in turn from the table."""
    current = tuple(table)
    for busy in busy_spans:
        current = subtract(current, busy)
    return current


def filter_by_duration(table: Sequence[TimeSpan], min_duration: int) -> List[TimeSpan]:
    """Keep the spans lasting at least ``min_duration`` minutes, in order."""
    return [span for span in table if span.duration >= min_duration]


def is_well_formed(table: Sequence[TimeSpan]) -> bool:
    """Check that the table is sorted by start and free of overlaps."""
    return all(
        previous.stop <= current.start
        for previous, current in zip(table, table[1:])
    )
