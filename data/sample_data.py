"""Beispieldaten-Generator für den Kursplan-Generator.

Erzeugt einen reproduzierbaren Datensatz (Lehrkräfte, Räume, Kurse, Slots),
mit dem sich die CLI ohne eigene Daten ausprobieren lässt. Kurse werden
gleichmäßig auf die Lehrkräfte verteilt; bei knappen Slots bleiben gezielt
Reststunden offen.
"""

import random
from typing import Optional

from config.schema import SlotGridConfig
from models.course import Course
from models.room import Room
from models.teacher import Teacher
from models.timetable_input import TimetableInput

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Anna", "Birgit", "Christian", "Dieter", "Eva", "Franz", "Gabi",
    "Hans", "Iris", "Jürgen", "Kathrin", "Lena", "Markus", "Norbert",
    "Olga", "Peter", "Renate", "Stefan", "Tanja", "Ulrich", "Vera",
]

_LAST_NAMES = [
    "Müller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer",
    "Wagner", "Becker", "Schulz", "Hoffmann", "Schäfer", "Koch",
    "Bauer", "Richter", "Klein", "Wolf", "Schröder", "Neumann",
]

# (Kürzel, Kursname)
_SUBJECTS: list[tuple[str, str]] = [
    ("MA", "Mathematik"),
    ("DE", "Deutsch"),
    ("EN", "Englisch"),
    ("PH", "Physik"),
    ("CH", "Chemie"),
    ("BI", "Biologie"),
    ("GE", "Geschichte"),
    ("EK", "Erdkunde"),
    ("IF", "Informatik"),
    ("KU", "Kunst"),
    ("MU", "Musik"),
    ("SP", "Sport"),
]

_ROOM_CAPACITIES = [24, 28, 30, 32]


class SampleDataGenerator:
    """Generiert einen vollständigen Beispiel-Datensatz."""

    def __init__(self, slot_grid: SlotGridConfig, seed: Optional[int] = None) -> None:
        self.slot_grid = slot_grid
        self.rng = random.Random(seed)

    # ─── Lehrkräfte ───────────────────────────────────────────────────────────

    def _generate_teachers(self, count: int) -> list[Teacher]:
        teachers = []
        for i in range(1, count + 1):
            first = self.rng.choice(_FIRST_NAMES)
            last = self.rng.choice(_LAST_NAMES)
            teachers.append(Teacher(id=f"T{i}", name=f"{last}, {first}"))
        return teachers

    # ─── Räume ────────────────────────────────────────────────────────────────

    def _generate_rooms(self, count: int) -> list[Room]:
        return [
            Room(
                id=f"R{i}",
                name=f"Raum {100 + i}",
                capacity=self.rng.choice(_ROOM_CAPACITIES),
            )
            for i in range(1, count + 1)
        ]

    # ─── Kurse ────────────────────────────────────────────────────────────────

    def _generate_courses(self, count: int, teachers: list[Teacher]) -> list[Course]:
        """Kurse reihum auf Lehrkräfte verteilt, 1–3 Slot-Einheiten je Kurs."""
        courses = []
        per_subject: dict[str, int] = {}
        for i in range(count):
            short, name = self.rng.choice(_SUBJECTS)
            per_subject[short] = per_subject.get(short, 0) + 1
            n = per_subject[short]
            teacher = teachers[i % len(teachers)] if teachers else None
            courses.append(Course(
                id=i + 1,
                code=f"{short}{100 + n}",
                name=f"{name} {n}",
                teacher_id=teacher.id if teacher else None,
                hours=self.rng.randint(1, 3),
            ))
        return courses

    # ─── Gesamt ───────────────────────────────────────────────────────────────

    def generate(
        self,
        num_courses: int = 12,
        num_teachers: int = 4,
        num_rooms: int = 2,
    ) -> TimetableInput:
        """Erzeugt den Datensatz; die Slots stammen aus dem Wochenraster."""
        teachers = self._generate_teachers(num_teachers)
        rooms = self._generate_rooms(num_rooms)
        courses = self._generate_courses(num_courses, teachers)
        return TimetableInput(
            courses=courses,
            teachers=teachers,
            rooms=rooms,
            slots=self.slot_grid.slot_labels(),
        )
