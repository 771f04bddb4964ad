"""Solver-Modul (deterministischer Greedy-Planer)."""

from .scheduler import (
    AssignmentRecord,
    ScheduleRecord,
    ScheduleResult,
    TimetableScheduler,
    UnassignedRecord,
    generate,
)

__all__ = [
    "generate",
    "TimetableScheduler",
    "ScheduleResult",
    "ScheduleRecord",
    "AssignmentRecord",
    "UnassignedRecord",
]
