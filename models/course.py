"""Datenmodell für einen Kurs (Pydantic v2)."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Course(BaseModel):
    """Ein Kurs, der eine Anzahl Slot-Einheiten bei einer Lehrkraft belegt."""

    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str]
    code: str                                         # Sortierschlüssel ("MA101")
    name: str = ""
    teacher_id: Optional[Union[int, str]] = Field(None, alias="teacherId")
    hours: Optional[int] = Field(None, ge=0)          # benötigte Slot-Einheiten

    @field_validator("hours", mode="before")
    @classmethod
    def empty_hours_to_none(cls, v):
        """Leere Formularwerte ("", False) zählen wie fehlende Stunden."""
        if v is None or v is False or v == "":
            return None
        return v

    @property
    def required_slots(self) -> int:
        """Tatsächlich benötigte Slots: fehlende, leere oder 0 Stunden zählen als 1."""
        return self.hours or 1
