"""Datenmodell für einen Raum (Pydantic v2)."""

from typing import Optional, Union

from pydantic import BaseModel, Field


class Room(BaseModel):
    """Repräsentiert einen Unterrichtsraum."""

    id: Union[int, str]                               # "R1", "A104"
    name: str = ""                                    # "Raum A104"
    capacity: Optional[int] = Field(None, ge=0)       # Plätze (vom Planer ignoriert)
