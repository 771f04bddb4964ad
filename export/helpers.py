"""Gemeinsame Hilfsfunktionen für Terminal- und Excel-Export."""

from collections import defaultdict
from datetime import date
from typing import Union

from models.timetable_input import TimetableInput
from solver.scheduler import AssignmentRecord, ScheduleRecord, UnassignedRecord

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "assigned":   "B3D4FF",
    "unassigned": "FF9999",
    "free":       "F5F5F5",
    "header":     "4472C4",
}


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


# ─── Slot-Zuordnung ───────────────────────────────────────────────────────────

def build_slot_map(
    records: list[ScheduleRecord],
) -> dict[str, list[AssignmentRecord]]:
    """Ordnet jedem Slot die dort belegten Einträge zu (offene Reste fallen weg)."""
    slot_map: dict[str, list[AssignmentRecord]] = defaultdict(list)
    for r in records:
        if isinstance(r, AssignmentRecord):
            slot_map[r.slot].append(r)
    return slot_map


def count_teacher_hours(
    records: list[ScheduleRecord], teacher_id: Union[int, str]
) -> int:
    """Zählt belegte Slot-Einheiten einer Lehrkraft."""
    return sum(
        1 for r in records
        if isinstance(r, AssignmentRecord) and r.teacher_id == teacher_id
    )


def teacher_name(data: TimetableInput, teacher_id) -> str:
    """Anzeigename einer Lehrkraft, sonst die ID selbst."""
    for t in data.teachers:
        if t.id == teacher_id:
            return t.name or str(t.id)
    return "—" if teacher_id is None else str(teacher_id)


# ─── Zelleninhalt-Formatierung ────────────────────────────────────────────────

def format_record(record: ScheduleRecord, mode: str = "teacher") -> str:
    """Formatiert einen einzelnen Eintrag als Zelleninhalt.

    mode='teacher': "Code\nRaum"
    mode='room':    "Code\nLehrkraft"
    """
    if isinstance(record, UnassignedRecord):
        return f"{record.course_code}\n{record.note or 'nicht zugewiesen'}"

    room = record.room_name or str(record.room_id)
    if mode == "room":
        teacher = "—" if record.teacher_id is None else str(record.teacher_id)
        return f"{record.course_code}\n{teacher}"
    return f"{record.course_code}\n{room}"


def format_records(records: list[ScheduleRecord], mode: str = "teacher") -> str:
    """Formatiert mehrere Einträge für eine Zelle (getrennt durch ──)."""
    if not records:
        return ""
    return "\n──\n".join(format_record(r, mode) for r in records)
