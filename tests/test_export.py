"""Tests für Terminal-Renderer und Excel-Export."""

import pytest

from export.helpers import (
    build_slot_map, count_teacher_hours, format_record, format_records, teacher_name,
)
from export.tui_renderer import render_room_rows, render_schedule_rows, render_teacher_rows
from export.excel_export import ExcelExporter
from models.course import Course
from models.room import Room
from models.teacher import Teacher
from models.timetable_input import TimetableInput
from solver.scheduler import ScheduleResult, TimetableScheduler


# ─── Testdaten-Hilfsfunktionen ────────────────────────────────────────────────

def _make_input() -> TimetableInput:
    return TimetableInput(
        courses=[
            Course(id=1, code="MA1", name="Mathe", teacher_id="T1", hours=2),
            Course(id=2, code="DE1", name="Deutsch", teacher_id="T2", hours=1),
            Course(id=3, code="PH1", name="Physik", teacher_id="T1", hours=3),
        ],
        teachers=[Teacher(id="T1", name="Müller"), Teacher(id="T2", name="Schmidt")],
        rooms=[Room(id="R1", name="Raum 1"), Room(id="R2", name="Raum 2")],
        slots=["Mo 1", "Mo 2", "Di 1"],
    )


@pytest.fixture(scope="module")
def solved() -> tuple[ScheduleResult, TimetableInput]:
    data = _make_input()
    return TimetableScheduler(data).solve(), data


# ─── Helpers ──────────────────────────────────────────────────────────────────

class TestHelpers:
    def test_build_slot_map_skips_unassigned(self, solved):
        result, _ = solved
        slot_map = build_slot_map(result.records)
        assert set(slot_map) == {"Mo 1", "Mo 2", "Di 1"}
        assert sum(len(v) for v in slot_map.values()) == len(result.assignments)

    def test_count_teacher_hours(self, solved):
        result, _ = solved
        # MA1: Mo 1, Mo 2 → PH1 nur noch Di 1
        assert count_teacher_hours(result.records, "T1") == 3
        assert count_teacher_hours(result.records, "T2") == 1
        assert count_teacher_hours(result.records, "T9") == 0

    def test_format_record_modes(self, solved):
        result, _ = solved
        rec = result.get_teacher_schedule("T2")[0]
        assert format_record(rec, "teacher") == "DE1\nRaum 1"
        assert format_record(rec, "room") == "DE1\nT2"

    def test_format_unassigned(self, solved):
        result, _ = solved
        assert format_record(result.unassigned[0]) == "PH1\nUnassigned 2 slot(s)"

    def test_format_records_joins(self, solved):
        result, _ = solved
        both = build_slot_map(result.records)["Mo 1"]
        assert "──" in format_records(both, "room")
        assert format_records([]) == ""

    def test_teacher_name(self, solved):
        _, data = solved
        assert teacher_name(data, "T1") == "Müller"
        assert teacher_name(data, "T9") == "T9"
        assert teacher_name(data, None) == "—"


# ─── Terminal-Renderer ────────────────────────────────────────────────────────

class TestTuiRenderer:
    def test_schedule_rows(self, solved):
        result, _ = solved
        rows = render_schedule_rows(result)
        assert len(rows) == len(result.records)
        assert rows[0] == ["DE1", "Deutsch", "T2", "Mo 1", "Raum 1", ""]
        assert rows[-1][0] == "PH1"
        assert rows[-1][3] == "—"
        assert rows[-1][5] == "Unassigned 2 slot(s)"

    def test_teacher_rows_one_per_slot(self, solved):
        result, data = solved
        rows = render_teacher_rows("T1", result, data)
        assert [r[0] for r in rows] == data.slots
        assert rows[0][1] == "MA1\nRaum 2"
        assert rows[2][1] == "PH1\nRaum 1"

    def test_teacher_rows_free_slots(self, solved):
        result, data = solved
        rows = render_teacher_rows("T2", result, data)
        assert rows[1][1] == "—"

    def test_room_rows(self, solved):
        result, data = solved
        rows = render_room_rows("R2", result, data)
        assert rows[0] == ["Mo 1", "MA1\nT1"]
        assert rows[2] == ["Di 1", "frei"]


# ─── Excel-Export ─────────────────────────────────────────────────────────────

class TestExcelExport:
    def test_creates_file_with_sheets(self, solved, tmp_path):
        from openpyxl import load_workbook

        result, data = solved
        path = tmp_path / "out" / "kursplan.xlsx"
        ExcelExporter(result, data, title="Test-Schule").export(path)
        assert path.exists()

        wb = load_workbook(path)
        assert wb.sheetnames == ["Übersicht", "Nicht zugewiesen", "L T1", "L T2", "Räume"]

    def test_overview_contents(self, solved, tmp_path):
        from openpyxl import load_workbook

        result, data = solved
        path = tmp_path / "kursplan.xlsx"
        ExcelExporter(result, data).export(path)
        ws = load_workbook(path)["Übersicht"]
        assert ws.cell(row=1, column=1).value.startswith("Kursplan")
        assert ws.cell(row=2, column=1).value == "Code"
        assert ws.cell(row=3, column=1).value == "DE1"
        assert ws.max_row == 2 + len(result.records)

    def test_teacher_names_in_sheets(self, solved, tmp_path):
        from openpyxl import load_workbook

        result, data = solved
        path = tmp_path / "kursplan.xlsx"
        ExcelExporter(result, data).export(path)
        wb = load_workbook(path)
        assert wb["Übersicht"].cell(row=3, column=3).value == "Schmidt"
        assert wb["Nicht zugewiesen"].cell(row=2, column=3).value == "Müller"
        assert wb["L T1"].cell(row=1, column=1).value.startswith("Müller")

    def test_room_matrix(self, solved, tmp_path):
        from openpyxl import load_workbook

        result, data = solved
        path = tmp_path / "kursplan.xlsx"
        ExcelExporter(result, data).export(path)
        ws = load_workbook(path)["Räume"]
        assert [c.value for c in ws[1]] == ["Slot", "Raum 1", "Raum 2"]
        assert ws.cell(row=2, column=2).value == "DE1\nT2"

    def test_complete_schedule_has_no_open_sheet(self, tmp_path):
        from openpyxl import load_workbook

        data = TimetableInput(
            courses=[Course(id=1, code="A", teacher_id="T1")],
            teachers=[Teacher(id="T1")],
            rooms=[Room(id="R1")],
            slots=["S1"],
        )
        path = tmp_path / "kursplan.xlsx"
        ExcelExporter(TimetableScheduler(data).solve(), data).export(path)
        assert "Nicht zugewiesen" not in load_workbook(path).sheetnames

    def test_sheet_title_sanitized(self):
        assert ExcelExporter._sheet_title("L a/b:c") == "L a_b_c"
        assert len(ExcelExporter._sheet_title("x" * 40)) == 31
