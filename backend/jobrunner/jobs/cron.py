"""Cron expression matching against a single instant.

croniter is used only to parse an expression into the allowed values for each
field. Matching itself compares the fields of the given instant directly, so a
caller can ask coarser questions ("does this job run at some point during
this hour?") by raising the granularity.
"""

import logging
from datetime import datetime
from functools import lru_cache

from croniter import croniter

logger = logging.getLogger(__name__)

CRON_SCOPES = ("minute", "hour", "day", "month", "weekday")

WILDCARD = "*"


@lru_cache(maxsize=256)
def _parse_fields(expression: str) -> tuple[frozenset, ...]:
    expanded = croniter(expression).expanded
    fields = []
    for index, values in enumerate(expanded[: len(CRON_SCOPES)]):
        allowed = frozenset(values)
        # croniter accepts 7 for Sunday
        if index == 4 and 7 in allowed:
            allowed = allowed | {0}
        fields.append(allowed)
    return tuple(fields)


def _instant_fields(instant: datetime) -> tuple[int, ...]:
    return (
        instant.minute,
        instant.hour,
        instant.day,
        instant.month,
        instant.isoweekday() % 7,
    )


def is_valid_cron(expression: str) -> bool:
    """Return True if croniter can parse *expression*."""
    try:
        _parse_fields(expression)
    except Exception:
        return False
    return True


def matches(expression: str, instant: datetime, granularity: str = "minute") -> bool:
    """Return True if *expression* fires at *instant*.

    Only fields at or coarser than *granularity* are compared, in minute to
    weekday order, stopping at the first mismatch. An expression that cannot
    be parsed never matches.
    """
    if granularity not in CRON_SCOPES:
        raise ValueError(f"Unknown cron granularity: {granularity}")
    scope_index = CRON_SCOPES.index(granularity)

    try:
        fields = _parse_fields(expression)
    except Exception as e:
        logger.debug(f"Unparsable cron expression {expression!r}: {e}")
        return False

    actual = _instant_fields(instant)
    for index in range(scope_index, len(CRON_SCOPES)):
        allowed = fields[index]
        if WILDCARD in allowed:
            continue
        if actual[index] not in allowed:
            return False
    return True
