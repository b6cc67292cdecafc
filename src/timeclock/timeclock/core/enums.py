from __future__ import annotations

from enum import Enum


class EntryType(str, Enum):
    """Kind of a punch event as stored in time_entries.entry_type."""

    PUNCH_IN = "punch_in"
    PUNCH_OUT = "punch_out"


class RecordSource(str, Enum):
    """Where the times of a reconciled day came from."""

    ACTUAL = "actual"
    SCHEDULE = "schedule"
    NONE = "none"


class PunchKind(str, Enum):
    """Side of a shift a normalized punch belongs to."""

    IN = "in"
    OUT = "out"
