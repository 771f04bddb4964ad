"""Post-Generate Validierung eines fertigen Kursplans.

Prüft das Ergebnis unabhängig vom Planer auf Doppelbelegungen und
Stunden-Bilanz als Sicherheitsnetz.
"""

from collections import defaultdict
from typing import Literal

from pydantic import BaseModel

from models.timetable_input import TimetableInput
from solver.scheduler import ScheduleResult


def _key(entity_id):
    """IDs wie im Planer als Text vergleichen (1 == "1")."""
    return None if entity_id is None else str(entity_id)


class ValidationViolation(BaseModel):
    """Eine einzelne Constraint-Verletzung."""

    severity: Literal["error", "warning"]
    constraint: str      # z.B. "teacher_double_booking"
    description: str
    entity: str          # teacher_id / room_id / course_code


class ValidationReport(BaseModel):
    """Ergebnis der Post-Generate Validierung."""

    violations: list[ValidationViolation]
    is_valid: bool       # True wenn keine Errors (Warnings ok)

    @property
    def errors(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "error"]

    @property
    def warnings(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "warning"]

    def by_constraint(self, constraint: str) -> list[ValidationViolation]:
        return [v for v in self.violations if v.constraint == constraint]

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        status = (
            "[bold green]✓ VALIDE[/bold green]"
            if self.is_valid
            else "[bold red]✗ VERLETZUNGEN GEFUNDEN[/bold red]"
        )
        lines = [status, f"Fehler: {len(self.errors)} | Warnungen: {len(self.warnings)}"]
        console.print(Panel("\n".join(lines), title="Kursplan-Validierung", border_style="cyan"))

        if not self.violations:
            console.print("[dim]Keine Verletzungen gefunden.[/dim]")
            return

        table = Table(box=box.ROUNDED, show_lines=True)
        table.add_column("Typ", width=8)
        table.add_column("Constraint", width=24)
        table.add_column("Entität", width=12)
        table.add_column("Beschreibung")

        for v in self.violations:
            color = "red" if v.severity == "error" else "yellow"
            table.add_row(
                f"[{color}]{v.severity.upper()}[/{color}]",
                v.constraint,
                v.entity,
                v.description,
            )
        console.print(table)


class SolutionValidator:
    """Prüft ein fertiges ScheduleResult gegen den Eingabedatensatz."""

    def validate(
        self, result: ScheduleResult, data: TimetableInput
    ) -> ValidationReport:
        """Führt alle Validierungschecks durch und gibt einen ValidationReport zurück."""
        violations: list[ValidationViolation] = []

        violations.extend(self._check_teacher_double_booking(result))
        violations.extend(self._check_room_double_booking(result))
        violations.extend(self._check_hours_balance(result, data))
        violations.extend(self._check_references(result, data))
        violations.extend(self._check_unassigned(result))

        has_errors = any(v.severity == "error" for v in violations)
        return ValidationReport(violations=violations, is_valid=not has_errors)

    # ── Einzelne Prüfungen ────────────────────────────────────────────────────

    def _check_teacher_double_booking(
        self, result: ScheduleResult
    ) -> list[ValidationViolation]:
        """Keine Lehrkraft darf im selben Slot zwei Kurse haben."""
        seen: dict[tuple, list[str]] = defaultdict(list)
        for r in result.assignments:
            seen[(_key(r.teacher_id), r.slot)].append(r.course_code)

        return [
            ValidationViolation(
                severity="error",
                constraint="teacher_double_booking",
                entity=str(teacher_id),
                description=f"Slot {slot}: gleichzeitig in {', '.join(codes)} eingeplant.",
            )
            for (teacher_id, slot), codes in seen.items()
            if len(codes) > 1
        ]

    def _check_room_double_booking(
        self, result: ScheduleResult
    ) -> list[ValidationViolation]:
        """Ein Raum darf pro Slot nur einmal belegt sein."""
        seen: dict[tuple, list[str]] = defaultdict(list)
        for r in result.assignments:
            seen[(_key(r.room_id), r.slot)].append(r.course_code)

        return [
            ValidationViolation(
                severity="error",
                constraint="room_double_booking",
                entity=str(room_id),
                description=f"Slot {slot}: gleichzeitig von {', '.join(codes)} belegt.",
            )
            for (room_id, slot), codes in seen.items()
            if len(codes) > 1
        ]

    def _check_hours_balance(
        self, result: ScheduleResult, data: TimetableInput
    ) -> list[ValidationViolation]:
        """Belegte + offene Einheiten müssen pro Kurs den Soll-Stunden entsprechen."""
        violations: list[ValidationViolation] = []
        assigned: dict = defaultdict(int)
        remaining: dict = defaultdict(int)
        for r in result.assignments:
            assigned[r.course_id] += 1
        for r in result.unassigned:
            remaining[r.course_id] += r.remaining_count

        for course in data.courses:
            got = assigned[course.id] + remaining[course.id]
            if got != course.required_slots:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="hours_mismatch",
                    entity=course.code,
                    description=(
                        f"Soll {course.required_slots}, belegt {assigned[course.id]}, "
                        f"offen {remaining[course.id]} (Differenz "
                        f"{got - course.required_slots:+d})."
                    ),
                ))
        return violations

    def _check_references(
        self, result: ScheduleResult, data: TimetableInput
    ) -> list[ValidationViolation]:
        """Räume und Slots müssen aus dem Datensatz stammen; Lehrkräfte sollten es."""
        violations: list[ValidationViolation] = []
        room_ids = {_key(r.id) for r in data.rooms}
        slots = set(data.slots)
        teacher_ids = {_key(t.id) for t in data.teachers}

        for r in result.assignments:
            if _key(r.room_id) not in room_ids:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="unknown_room",
                    entity=str(r.room_id),
                    description=f"Kurs {r.course_code} in unbekanntem Raum eingeplant.",
                ))
            if r.slot not in slots:
                violations.append(ValidationViolation(
                    severity="error",
                    constraint="unknown_slot",
                    entity=r.slot,
                    description=f"Kurs {r.course_code} in unbekanntem Slot eingeplant.",
                ))

        for course in data.courses:
            if _key(course.teacher_id) not in teacher_ids:
                violations.append(ValidationViolation(
                    severity="warning",
                    constraint="unknown_teacher",
                    entity=course.code,
                    description=(
                        f"Lehrkraft '{course.teacher_id}' ist nicht im Datensatz; "
                        f"Konflikte werden nur unter gleicher ID erkannt."
                    ),
                ))
        return violations

    def _check_unassigned(
        self, result: ScheduleResult
    ) -> list[ValidationViolation]:
        """Offene Reststunden sind kein Fehler, werden aber gemeldet."""
        return [
            ValidationViolation(
                severity="warning",
                constraint="course_unassigned",
                entity=r.course_code,
                description=f"{r.remaining_count} Slot(s) nicht zugewiesen.",
            )
            for r in result.unassigned
        ]
