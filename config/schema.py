from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator


def _minutes(hhmm: str) -> int:
    h, m = hhmm.split(":")
    return int(h) * 60 + int(m)


# ─── ZEITRASTER (erzeugt die Slot-Liste) ───

class LessonSlot(BaseModel):
    """Eine einzelne Unterrichtseinheit im Tagesraster."""
    # Laufende Nummer der Einheit, 1-basiert
    slot_number: int = Field(ge=1)
    # Beginn im Format "HH:MM"
    start_time: str
    # Ende im Format "HH:MM"
    end_time: str

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        parts = v.split(":")
        if (len(parts) != 2 or not all(p.isdigit() for p in parts)
                or not 0 <= int(parts[0]) <= 23 or not 0 <= int(parts[1]) <= 59):
            raise ValueError(f"Ungültige Uhrzeit '{v}' (erwartet HH:MM)")
        return f"{int(parts[0]):02d}:{int(parts[1]):02d}"

    @model_validator(mode='after')
    def validate_order(self):
        if _minutes(self.start_time) >= _minutes(self.end_time):
            raise ValueError(
                f"Einheit {self.slot_number}: Beginn {self.start_time} "
                f"liegt nicht vor Ende {self.end_time}")
        return self

    @property
    def label(self) -> str:
        return f"{self.start_time}-{self.end_time}"


class SlotGridConfig(BaseModel):
    """Wochenraster, aus dem die Slot-Liste für den Planer erzeugt wird.

    Die Reihenfolge der Slots ist tagweise (alle Einheiten von Tag 1,
    dann Tag 2, ...) und bestimmt, welche Slots der Planer zuerst vergibt.
    """
    # Namen der Unterrichtstage
    day_names: list[str] = Field(
        default=["Mo", "Di", "Mi", "Do", "Fr"],
        min_length=1,
        description="Namen der Unterrichtstage")
    # Alle Einheiten eines Tages mit Uhrzeiten
    lesson_slots: list[LessonSlot] = Field(
        min_length=1,
        description="Alle Einheiten eines Tages mit Uhrzeiten")

    @model_validator(mode='after')
    def validate_slots(self):
        """Einheiten aufsteigend nummeriert und ohne Überschneidung."""
        numbers = [s.slot_number for s in self.lesson_slots]
        if len(set(numbers)) != len(numbers):
            raise ValueError("Einheiten-Nummern sind nicht eindeutig")
        if numbers != sorted(numbers):
            raise ValueError("Einheiten müssen aufsteigend nummeriert sein")
        for prev, nxt in zip(self.lesson_slots, self.lesson_slots[1:]):
            if _minutes(nxt.start_time) < _minutes(prev.end_time):
                raise ValueError(
                    f"Einheit {nxt.slot_number} beginnt vor Ende "
                    f"von Einheit {prev.slot_number}")
        if len(set(self.day_names)) != len(self.day_names):
            raise ValueError("Tagesnamen sind nicht eindeutig")
        return self

    @property
    def slots_per_week(self) -> int:
        return len(self.day_names) * len(self.lesson_slots)

    def slot_labels(self) -> list[str]:
        """Slot-Bezeichner in Planungsreihenfolge, z.B. "Mo 08:00-08:45"."""
        return [
            f"{day} {slot.label}"
            for day in self.day_names
            for slot in self.lesson_slots
        ]


# ─── SPEICHER ───

class StorageConfig(BaseModel):
    """Ablageorte für gespeicherte Daten und Ergebnisse."""
    # Gespeicherter Eingabedatensatz (Kurse, Lehrkräfte, Räume, Slots)
    data_file: Path = Field(Path("data/saved.json"),
        description="Gespeicherter Eingabedatensatz")
    # Verzeichnis für Ergebnisse (JSON, Excel)
    output_dir: Path = Field(Path("output"),
        description="Verzeichnis für Ergebnisse")


# ─── LOGGING ───

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LoggingConfig(BaseModel):
    """Logging-Konfiguration der CLI."""
    level: LogLevel = Field(LogLevel.WARNING,
        description="Log-Level der Konsole")


# ─── GESAMT-CONFIG ───

class AppConfig(BaseModel):
    """Gesamtkonfiguration des Kursplan-Generators."""
    # Name der Einrichtung (für Überschriften und Exporte)
    institution_name: str = Field("Muster-Schule",
        description="Name der Einrichtung")
    # Wochenraster für erzeugte Slot-Listen
    slot_grid: SlotGridConfig
    # Speicherorte
    storage: StorageConfig = Field(default_factory=StorageConfig)
    # Logging
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
