"""Auslastungsbericht für fertige Kurspläne.

Analysiert Lehrkraft- und Raumauslastung sowie den Erfüllungsgrad
der angeforderten Slot-Einheiten.
"""

from pydantic import BaseModel

from models.timetable_input import TimetableInput
from solver.scheduler import ScheduleResult
from export.helpers import count_teacher_hours


# ─── Metriken-Modelle ─────────────────────────────────────────────────────────

class TeacherUtilization(BaseModel):
    """Auslastung einer einzelnen Lehrkraft."""

    teacher_id: str
    name: str
    requested_hours: int
    assigned_hours: int
    courses: list[str]


class RoomUtilization(BaseModel):
    """Belegung eines einzelnen Raums."""

    room_id: str
    name: str
    used_slots: int
    occupancy_rate: float   # 0.0–1.0 bezogen auf alle Slots


class UtilizationReport(BaseModel):
    """Vollständiger Auslastungsbericht für ein ScheduleResult."""

    teacher_metrics: list[TeacherUtilization]
    room_metrics: list[RoomUtilization]
    requested_hours: int
    assigned_hours: int
    fulfillment_rate: float  # 0.0–1.0
    unassigned_courses: int


# ─── Analyzer ─────────────────────────────────────────────────────────────────

class UtilizationAnalyzer:
    """Berechnet Auslastungsmetriken für ein fertiges ScheduleResult."""

    def analyze(
        self, result: ScheduleResult, data: TimetableInput
    ) -> UtilizationReport:
        """Hauptmethode: berechnet alle Metriken und gibt einen Report zurück."""
        requested = data.total_hours
        assigned = len(result.assignments)
        rate = assigned / requested if requested > 0 else 1.0

        return UtilizationReport(
            teacher_metrics=self._teacher_metrics(result, data),
            room_metrics=self._room_metrics(result, data),
            requested_hours=requested,
            assigned_hours=assigned,
            fulfillment_rate=round(rate, 4),
            unassigned_courses=len(result.unassigned),
        )

    def print_rich(self, report: UtilizationReport) -> None:
        """Gibt den Auslastungsbericht formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        rate_color = (
            "green" if report.fulfillment_rate >= 1.0
            else "yellow" if report.fulfillment_rate >= 0.9
            else "red"
        )
        console.print(Panel(
            f"Belegt: [bold]{report.assigned_hours}[/bold] von "
            f"{report.requested_hours} Einheiten "
            f"([{rate_color}]{report.fulfillment_rate:.1%}[/{rate_color}])\n"
            f"Unvollständige Kurse: [bold]{report.unassigned_courses}[/bold]",
            title="Auslastung – Übersicht",
            border_style="cyan",
        ))

        t_table = Table(title="Lehrkräfte", box=box.ROUNDED)
        t_table.add_column("ID", width=8)
        t_table.add_column("Name", width=25)
        t_table.add_column("Soll", justify="right", width=5)
        t_table.add_column("Ist", justify="right", width=5)
        t_table.add_column("Kurse")
        for m in report.teacher_metrics:
            color = "green" if m.assigned_hours >= m.requested_hours else "red"
            t_table.add_row(
                m.teacher_id, m.name, str(m.requested_hours),
                f"[{color}]{m.assigned_hours}[/{color}]",
                ", ".join(m.courses),
            )
        console.print(t_table)

        r_table = Table(title="Räume", box=box.ROUNDED)
        r_table.add_column("ID", width=8)
        r_table.add_column("Name", width=20)
        r_table.add_column("Belegt", justify="right", width=7)
        r_table.add_column("Quote", justify="right", width=7)
        for m in report.room_metrics:
            r_table.add_row(
                m.room_id, m.name, str(m.used_slots), f"{m.occupancy_rate:.0%}"
            )
        console.print(r_table)

    # ── Private Berechnungen ──────────────────────────────────────────────────

    def _teacher_metrics(
        self, result: ScheduleResult, data: TimetableInput
    ) -> list[TeacherUtilization]:
        metrics = []
        for teacher in data.teachers:
            courses = [c for c in data.courses if c.teacher_id == teacher.id]
            metrics.append(TeacherUtilization(
                teacher_id=str(teacher.id),
                name=teacher.name,
                requested_hours=sum(c.required_slots for c in courses),
                assigned_hours=count_teacher_hours(result.records, teacher.id),
                courses=sorted(c.code for c in courses),
            ))
        return metrics

    def _room_metrics(
        self, result: ScheduleResult, data: TimetableInput
    ) -> list[RoomUtilization]:
        num_slots = len(data.slots)
        metrics = []
        for room in data.rooms:
            used = len({r.slot for r in result.get_room_schedule(room.id)})
            metrics.append(RoomUtilization(
                room_id=str(room.id),
                name=room.name,
                used_slots=used,
                occupancy_rate=round(used / num_slots, 4) if num_slots else 0.0,
            ))
        return metrics
