"""TimetableInput: Eingabedatensatz des Planers + Payload-Validierung (Pydantic v2)."""

import json
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError

from models.course import Course
from models.room import Room
from models.teacher import Teacher

REQUIRED_FIELDS = ("courses", "teachers", "rooms", "slots")


class InvalidPayloadError(ValueError):
    """Payload hat nicht die erwartete Form (fehlende Felder, ungültige Einträge)."""


class TimetableInput(BaseModel):
    """Die vier Eingabe-Sammlungen eines Planungslaufs."""

    courses: list[Course]
    teachers: list[Teacher]
    rooms: list[Room]
    slots: list[str]

    # ─── Konstruktion ───

    @classmethod
    def empty(cls) -> "TimetableInput":
        """Leerer Datensatz (Zustand vor dem ersten Speichern)."""
        return cls(courses=[], teachers=[], rooms=[], slots=[])

    @classmethod
    def from_payload(cls, payload: Any) -> "TimetableInput":
        """Validiert ein rohes Payload (z.B. geladenes JSON).

        Alle vier Felder müssen vorhanden und nicht None sein, sonst wird
        InvalidPayloadError ausgelöst, bevor der Planer läuft.
        """
        if not isinstance(payload, Mapping):
            raise InvalidPayloadError(
                f"Payload muss ein Objekt sein, nicht {type(payload).__name__}"
            )
        missing = [f for f in REQUIRED_FIELDS if payload.get(f) is None]
        if missing:
            raise InvalidPayloadError(
                "courses, teachers, rooms and slots are required "
                f"(fehlend: {', '.join(missing)})"
            )
        try:
            return cls.model_validate(
                {f: payload[f] for f in REQUIRED_FIELDS}
            )
        except ValidationError as e:
            raise InvalidPayloadError(
                f"Payload ungültig ({e.error_count()} Fehler):\n{e}"
            ) from e

    # ─── Übersicht ───

    @property
    def total_hours(self) -> int:
        """Summe der benötigten Slot-Einheiten aller Kurse."""
        return sum(c.required_slots for c in self.courses)

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        return "\n".join([
            f"Kurse: {len(self.courses)} ({self.total_hours} Slot-Einheiten)",
            f"Lehrkräfte: {len(self.teachers)}",
            f"Räume: {len(self.rooms)}",
            f"Slots: {len(self.slots)}",
        ])

    def to_payload(self) -> dict:
        """Serialisiert in die JSON-Form der Eingabe (camelCase-Felder)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    # ─── Persistenz ───

    def save_json(self, path: Path) -> None:
        """Speichert den Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_payload(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load_json(cls, path: Path) -> "TimetableInput":
        """Lädt und validiert einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except ValueError as e:
                raise InvalidPayloadError(f"Kein gültiges JSON: {path} ({e})") from e
        return cls.from_payload(payload)
