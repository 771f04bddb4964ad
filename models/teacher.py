"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from typing import Union

from pydantic import BaseModel


class Teacher(BaseModel):
    """Repräsentiert eine einzelne Lehrkraft."""

    id: Union[int, str]     # "T1" oder 17
    name: str = ""          # "Müller, Hans"
