"""Greedy-Stundenplan-Planer.

Architektur:
  - Ein einziger deterministischer Durchlauf, kein Backtracking
  - Kurse werden nach `code` sortiert abgearbeitet (frühere Kurse haben Vorrang)
  - Pro Kurs: Slots in gegebener Reihenfolge, erster freier Raum gewinnt
  - Belegung wird in zwei Maps geführt:
      teacher_busy[teacher_id] – bereits vergebene Slots der Lehrkraft
      room_busy[room_id]       – bereits vergebene Slots des Raums
  - Nicht platzierbare Reststunden werden als UnassignedRecord gemeldet,
    nie als Exception
"""

import json
import logging
import time
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from models.course import Course
from models.room import Room
from models.teacher import Teacher
from models.timetable_input import TimetableInput

logger = logging.getLogger(__name__)

EntityId = Union[int, str]


# ─── Ergebnis-Modelle ─────────────────────────────────────────────────────────

class AssignmentRecord(BaseModel):
    """Eine belegte Slot-Einheit: Kurs × Slot × Raum."""

    model_config = ConfigDict(populate_by_name=True)

    course_id: EntityId = Field(alias="courseId")
    course_code: str = Field(alias="courseCode")
    course_name: str = Field("", alias="courseName")
    teacher_id: Optional[EntityId] = Field(None, alias="teacherId")
    slot: str
    room_id: EntityId = Field(alias="roomId")
    room_name: str = Field("", alias="roomName")

    @property
    def is_assigned(self) -> bool:
        return True


class UnassignedRecord(BaseModel):
    """Rest eines Kurses, der im Durchlauf nicht platziert werden konnte."""

    model_config = ConfigDict(populate_by_name=True)

    course_id: EntityId = Field(alias="courseId")
    course_code: str = Field(alias="courseCode")
    course_name: str = Field("", alias="courseName")
    teacher_id: Optional[EntityId] = Field(None, alias="teacherId")
    slot: None = None
    room_id: None = Field(None, alias="roomId")
    room_name: None = Field(None, alias="roomName")
    remaining_count: int = Field(alias="remainingCount", ge=1)
    note: str = ""

    @property
    def is_assigned(self) -> bool:
        return False


ScheduleRecord = Union[AssignmentRecord, UnassignedRecord]


# ─── Kern-Algorithmus ─────────────────────────────────────────────────────────

def _busy_key(entity_id: Optional[EntityId]) -> Optional[str]:
    """Belegungsschlüssel: ID 1 und "1" bezeichnen dieselbe Lehrkraft bzw. denselben Raum."""
    return None if entity_id is None else str(entity_id)


def generate(
    courses: Sequence[Course],
    teachers: Sequence[Teacher],
    rooms: Sequence[Room],
    slots: Sequence[str],
) -> list[ScheduleRecord]:
    """Erzeugt den Stundenplan in einem einzigen Greedy-Durchlauf.

    Reine Funktion: die Belegungs-Maps leben nur während dieses Aufrufs.
    Unbekannte Lehrer-/Raum-IDs starten mit leerer Belegung; IDs werden
    für die Belegung als Text verglichen.
    """
    teacher_busy: dict[Optional[str], set[str]] = defaultdict(set)
    room_busy: dict[str, set[str]] = defaultdict(set)
    for t in teachers:
        teacher_busy[_busy_key(t.id)] = set()
    for r in rooms:
        room_busy[_busy_key(r.id)] = set()

    records: list[ScheduleRecord] = []

    # sorted() ist stabil: gleiche Codes behalten die Eingabereihenfolge
    for course in sorted(courses, key=lambda c: c.code):
        remaining = course.required_slots
        busy = teacher_busy[_busy_key(course.teacher_id)]

        for slot in slots:
            if remaining <= 0:
                break
            if slot in busy:
                continue

            room = next(
                (r for r in rooms if slot not in room_busy[_busy_key(r.id)]), None
            )
            if room is None:
                continue

            records.append(AssignmentRecord(
                course_id=course.id,
                course_code=course.code,
                course_name=course.name,
                teacher_id=course.teacher_id,
                slot=slot,
                room_id=room.id,
                room_name=room.name,
            ))
            busy.add(slot)
            room_busy[_busy_key(room.id)].add(slot)
            remaining -= 1

        if remaining > 0:
            records.append(UnassignedRecord(
                course_id=course.id,
                course_code=course.code,
                course_name=course.name,
                teacher_id=course.teacher_id,
                remaining_count=remaining,
                note=f"Unassigned {remaining} slot(s)",
            ))

    return records


# ─── Ergebnis ─────────────────────────────────────────────────────────────────

class ScheduleResult(BaseModel):
    """Vollständiges Ergebnis eines Planungslaufs."""

    records: list[ScheduleRecord]
    generated_at: datetime
    solve_time_seconds: float
    num_courses: int
    num_assigned: int = 0                 # belegte Slot-Einheiten
    num_unassigned_courses: int = 0       # Kurse mit offenen Reststunden

    @property
    def assignments(self) -> list[AssignmentRecord]:
        return [r for r in self.records if isinstance(r, AssignmentRecord)]

    @property
    def unassigned(self) -> list[UnassignedRecord]:
        return [r for r in self.records if isinstance(r, UnassignedRecord)]

    @property
    def is_complete(self) -> bool:
        """True wenn alle Kurse vollständig eingeplant wurden."""
        return not self.unassigned

    def get_teacher_schedule(self, teacher_id: EntityId) -> list[AssignmentRecord]:
        """Alle Belegungen einer Lehrkraft."""
        return [r for r in self.assignments if r.teacher_id == teacher_id]

    def get_room_schedule(self, room_id: EntityId) -> list[AssignmentRecord]:
        """Alle Belegungen eines Raums."""
        return [r for r in self.assignments if r.room_id == room_id]

    def get_course_records(self, course_id: EntityId) -> list[ScheduleRecord]:
        """Alle Einträge (belegt und offen) eines Kurses."""
        return [r for r in self.records if r.course_id == course_id]

    def schedule_payload(self) -> list[dict]:
        """Einträge in JSON-Form (camelCase, Slot/Raum offener Reste als null)."""
        return [r.model_dump(mode="json", by_alias=True) for r in self.records]

    def to_response(self) -> dict:
        """Antwort-Format der Generierung: {"ok": true, "schedule": [...]}."""
        return {"ok": True, "schedule": self.schedule_payload()}

    def save_json(self, path: Path) -> None:
        """Speichert das Ergebnis als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2, by_alias=True))

    @classmethod
    def load_json(cls, path: Path) -> "ScheduleResult":
        """Lädt ein gespeichertes Ergebnis aus JSON."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Ergebnis nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate(json.load(f))


# ─── Planer ───────────────────────────────────────────────────────────────────

class TimetableScheduler:
    """Führt `generate` für einen validierten Datensatz aus.

    Verwendung:
        scheduler = TimetableScheduler(data)
        result = scheduler.solve()
    """

    def __init__(self, data: TimetableInput) -> None:
        self.data = data

    def solve(self) -> ScheduleResult:
        """Plant alle Kurse ein und gibt das Ergebnis mit Laufzeit zurück."""
        data = self.data
        logger.info(
            f"Planung: {len(data.courses)} Kurse, {len(data.teachers)} Lehrkräfte, "
            f"{len(data.rooms)} Räume, {len(data.slots)} Slots"
        )
        if not data.rooms:
            logger.warning("Keine Räume vorhanden – alle Kurse bleiben offen")
        if not data.slots:
            logger.warning("Keine Slots vorhanden – alle Kurse bleiben offen")

        t0 = time.time()
        records = generate(data.courses, data.teachers, data.rooms, data.slots)
        elapsed = time.time() - t0

        num_assigned = sum(1 for r in records if r.is_assigned)
        result = ScheduleResult(
            records=records,
            generated_at=datetime.now(timezone.utc),
            solve_time_seconds=elapsed,
            num_courses=len(data.courses),
            num_assigned=num_assigned,
            num_unassigned_courses=len(records) - num_assigned,
        )
        for r in result.unassigned:
            logger.info(
                f"  Kurs {r.course_code}: {r.remaining_count} Slot(s) nicht zugewiesen"
            )
        logger.info(
            f"Fertig in {elapsed:.3f}s: {result.num_assigned} Belegungen, "
            f"{result.num_unassigned_courses} Kurse unvollständig"
        )
        return result
