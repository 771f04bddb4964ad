"""Tests für Validierung und Auslastungsbericht."""

from datetime import datetime, timezone

import pytest

from analysis.solution_validator import SolutionValidator, ValidationReport
from analysis.utilization_report import UtilizationAnalyzer, UtilizationReport
from models.course import Course
from models.room import Room
from models.teacher import Teacher
from models.timetable_input import TimetableInput
from solver.scheduler import (
    AssignmentRecord, ScheduleResult, TimetableScheduler, UnassignedRecord,
)


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _make_input() -> TimetableInput:
    return TimetableInput(
        courses=[
            Course(id=1, code="MA1", name="Mathe", teacher_id="T1", hours=2),
            Course(id=2, code="DE1", name="Deutsch", teacher_id="T2", hours=2),
            Course(id=3, code="EN1", name="Englisch", teacher_id="T1", hours=2),
        ],
        teachers=[Teacher(id="T1", name="Müller"), Teacher(id="T2", name="Schmidt")],
        rooms=[Room(id="R1", name="Raum 1"), Room(id="R2", name="Raum 2")],
        slots=["S1", "S2", "S3"],
    )


def _assign(course_id, code, teacher, slot, room) -> AssignmentRecord:
    return AssignmentRecord(course_id=course_id, course_code=code, teacher_id=teacher,
                            slot=slot, room_id=room)


def _result(records) -> ScheduleResult:
    return ScheduleResult(
        records=records,
        generated_at=datetime.now(timezone.utc),
        solve_time_seconds=0.0,
        num_courses=3,
    )


# ─── SolutionValidator ────────────────────────────────────────────────────────

class TestSolutionValidator:
    def test_generated_schedule_is_valid(self):
        data = _make_input()
        result = TimetableScheduler(data).solve()
        report = SolutionValidator().validate(result, data)
        assert isinstance(report, ValidationReport)
        assert report.is_valid
        assert report.errors == []

    def test_unassigned_reported_as_warning(self):
        """MA1 (T1) bekommt nur noch S3 → ein offener Slot, nur als Warnung."""
        data = _make_input()
        result = TimetableScheduler(data).solve()
        report = SolutionValidator().validate(result, data)
        warnings = report.by_constraint("course_unassigned")
        assert [w.entity for w in warnings] == ["MA1"]
        assert report.is_valid

    def test_teacher_double_booking_detected(self):
        data = _make_input()
        records = [
            _assign(1, "MA1", "T1", "S1", "R1"), _assign(1, "MA1", "T1", "S2", "R1"),
            _assign(2, "DE1", "T2", "S1", "R2"), _assign(2, "DE1", "T2", "S2", "R2"),
            _assign(3, "EN1", "T1", "S1", "R2"), _assign(3, "EN1", "T1", "S3", "R1"),
        ]
        report = SolutionValidator().validate(_result(records), data)
        assert not report.is_valid
        found = report.by_constraint("teacher_double_booking")
        assert len(found) == 1
        assert found[0].entity == "T1"
        assert "S1" in found[0].description

    def test_double_booking_across_id_types(self):
        """Lehrkraft 1 und "1" gelten auch bei der Prüfung als dieselbe Person."""
        data = _make_input()
        records = [_assign(1, "MA1", 1, "S1", "R1"), _assign(2, "DE1", "1", "S1", "R2")]
        found = SolutionValidator().validate(_result(records), data).by_constraint(
            "teacher_double_booking"
        )
        assert [v.entity for v in found] == ["1"]

    def test_room_double_booking_detected(self):
        data = _make_input()
        records = [
            _assign(1, "MA1", "T1", "S1", "R1"), _assign(1, "MA1", "T1", "S2", "R1"),
            _assign(2, "DE1", "T2", "S1", "R1"), _assign(2, "DE1", "T2", "S2", "R2"),
            _assign(3, "EN1", "T1", "S3", "R1"), _assign(3, "EN1", "T1", "S3", "R2"),
        ]
        report = SolutionValidator().validate(_result(records), data)
        rooms = report.by_constraint("room_double_booking")
        assert [v.entity for v in rooms] == ["R1"]

    def test_hours_mismatch_detected(self):
        data = _make_input()
        records = [
            _assign(1, "MA1", "T1", "S1", "R1"),
            _assign(2, "DE1", "T2", "S1", "R2"), _assign(2, "DE1", "T2", "S2", "R2"),
            UnassignedRecord(course_id=3, course_code="EN1", teacher_id="T1",
                             remaining_count=2),
        ]
        report = SolutionValidator().validate(_result(records), data)
        mismatch = report.by_constraint("hours_mismatch")
        assert [v.entity for v in mismatch] == ["MA1"]
        assert "-1" in mismatch[0].description

    def test_unknown_room_and_slot_detected(self):
        data = _make_input()
        records = [_assign(1, "MA1", "T1", "S9", "R9")]
        report = SolutionValidator().validate(_result(records), data)
        assert report.by_constraint("unknown_room")
        assert report.by_constraint("unknown_slot")

    def test_unknown_teacher_is_warning(self):
        data = _make_input()
        data.courses.append(Course(id=4, code="XX1", teacher_id="GHOST"))
        result = TimetableScheduler(data).solve()
        report = SolutionValidator().validate(result, data)
        assert [v.entity for v in report.by_constraint("unknown_teacher")] == ["XX1"]
        assert report.is_valid

    def test_print_rich_runs(self, capsys):
        data = _make_input()
        report = SolutionValidator().validate(TimetableScheduler(data).solve(), data)
        report.print_rich()
        out = capsys.readouterr().out
        assert "VALIDE" in out


# ─── UtilizationAnalyzer ──────────────────────────────────────────────────────

class TestUtilization:
    def test_totals(self):
        data = _make_input()
        report = UtilizationAnalyzer().analyze(TimetableScheduler(data).solve(), data)
        assert isinstance(report, UtilizationReport)
        assert report.requested_hours == 6
        assert report.assigned_hours == 5
        assert report.fulfillment_rate == pytest.approx(5 / 6, abs=1e-4)
        assert report.unassigned_courses == 1

    def test_teacher_metrics(self):
        data = _make_input()
        report = UtilizationAnalyzer().analyze(TimetableScheduler(data).solve(), data)
        by_id = {m.teacher_id: m for m in report.teacher_metrics}
        assert by_id["T1"].requested_hours == 4
        assert by_id["T1"].assigned_hours == 3
        assert by_id["T1"].courses == ["EN1", "MA1"]
        assert by_id["T2"].assigned_hours == 2

    def test_room_metrics(self):
        data = _make_input()
        report = UtilizationAnalyzer().analyze(TimetableScheduler(data).solve(), data)
        by_id = {m.room_id: m for m in report.room_metrics}
        # DE1: S1/R1, S2/R1; EN1: S1/R2, S2/R2; MA1: S3/R1
        assert by_id["R1"].used_slots == 3
        assert by_id["R1"].occupancy_rate == 1.0
        assert by_id["R2"].used_slots == 2

    def test_empty_input(self):
        data = TimetableInput.empty()
        report = UtilizationAnalyzer().analyze(TimetableScheduler(data).solve(), data)
        assert report.fulfillment_rate == 1.0
        assert report.room_metrics == []

    def test_print_rich_runs(self, capsys):
        data = _make_input()
        analyzer = UtilizationAnalyzer()
        analyzer.print_rich(analyzer.analyze(TimetableScheduler(data).solve(), data))
        out = capsys.readouterr().out
        assert "Auslastung" in out
