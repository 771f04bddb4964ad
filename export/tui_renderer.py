"""Gemeinsamer Renderer für die Terminal-Anzeige des Kursplans.

Wird von `generate` und `show` (Rich) verwendet. Slots sind undurchsichtige
Bezeichner; jede Zeile entspricht einem Slot in Planungsreihenfolge.
"""

from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from solver.scheduler import ScheduleResult
    from models.timetable_input import TimetableInput


def render_schedule_rows(result: "ScheduleResult") -> list[list[str]]:
    """Eine Zeile pro Eintrag: [Code, Kurs, Lehrkraft, Slot, Raum, Hinweis]."""
    from solver.scheduler import UnassignedRecord

    rows: list[list[str]] = []
    for r in result.records:
        teacher = "—" if r.teacher_id is None else str(r.teacher_id)
        if isinstance(r, UnassignedRecord):
            rows.append([r.course_code, r.course_name, teacher, "—", "—", r.note])
        else:
            rows.append([
                r.course_code, r.course_name, teacher,
                r.slot, r.room_name or str(r.room_id), "",
            ])
    return rows


def render_teacher_rows(
    teacher_id: Union[int, str],
    result: "ScheduleResult",
    data: "TimetableInput",
) -> list[list[str]]:
    """Tabellenzeilen für den Plan einer Lehrkraft: [Slot, Kurs + Raum]."""
    from export.helpers import build_slot_map, format_records

    slot_map = build_slot_map(result.get_teacher_schedule(teacher_id))
    return [
        [slot, format_records(slot_map.get(slot, []), mode="teacher") or "—"]
        for slot in data.slots
    ]


def render_room_rows(
    room_id: Union[int, str],
    result: "ScheduleResult",
    data: "TimetableInput",
) -> list[list[str]]:
    """Tabellenzeilen für die Belegung eines Raums: [Slot, Kurs + Lehrkraft]."""
    from export.helpers import build_slot_map, format_records

    slot_map = build_slot_map(result.get_room_schedule(room_id))
    return [
        [slot, format_records(slot_map.get(slot, []), mode="room") or "frei"]
        for slot in data.slots
    ]
