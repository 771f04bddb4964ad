"""Excel-Export für den Kursplan (openpyxl)."""

from pathlib import Path
from typing import Optional

from models.teacher import Teacher
from models.timetable_input import TimetableInput
from solver.scheduler import ScheduleResult

from export.helpers import (
    COLORS, build_slot_map, count_teacher_hours, format_records, teacher_name,
    today_str,
)


class ExcelExporter:
    """Exportiert ein ScheduleResult in eine Excel-Datei.

    Blätter:
      Übersicht         – alle Einträge in Ausgabereihenfolge
      Nicht zugewiesen  – offene Reststunden (nur wenn vorhanden)
      <Lehrkraft>       – ein Blatt pro Lehrkraft (Slot × Kurs/Raum)
      Räume             – Slot × Raum-Matrix
    """

    # Spaltenbreiten (Excel-Einheiten)
    COL_SLOT_W = 18
    COL_TEXT_W = 22

    # Zeilenhöhen (Punkte)
    ROW_HEADER_H = 22
    ROW_CELL_H = 32

    def __init__(
        self,
        result: ScheduleResult,
        data: TimetableInput,
        title: Optional[str] = None,
    ):
        self.result = result
        self.data = data
        self.title = title or "Kursplan"

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> None:
        """Erstellt die Excel-Datei mit allen Sheets."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_uebersicht(wb)
        if self.result.unassigned:
            self._sheet_offen(wb)
        for teacher in self.data.teachers:
            self._sheet_lehrer(wb, teacher)
        if self.data.rooms:
            self._sheet_raeume(wb)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)

    # ─── Style-Helpers ────────────────────────────────────────────────────────

    def _fill(self, hex_color: str):
        from openpyxl.styles import PatternFill
        return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")

    def _center_align(self, wrap: bool = True):
        from openpyxl.styles import Alignment
        return Alignment(wrap_text=wrap, horizontal="center", vertical="center")

    def _thin_border(self):
        from openpyxl.styles import Border, Side
        s = Side(border_style="thin", color="BBBBBB")
        return Border(left=s, right=s, top=s, bottom=s)

    def _write_header_row(self, ws, headers: list[str], row: int = 1) -> None:
        """Schreibt eine Kopfzeile und setzt die Spaltenbreiten."""
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
            width = self.COL_SLOT_W if col == 1 else self.COL_TEXT_W
            ws.column_dimensions[get_column_letter(col)].width = width
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    def _write_cell(self, ws, row: int, col: int, value, color: str) -> None:
        from openpyxl.styles import Font
        c = ws.cell(row=row, column=col, value=value)
        c.fill = self._fill(color)
        c.alignment = self._center_align()
        c.border = self._thin_border()
        c.font = Font(size=9)

    @staticmethod
    def _sheet_title(name: str) -> str:
        """Excel erlaubt max. 31 Zeichen und keine Sonderzeichen []:*?/\\."""
        for ch in "[]:*?/\\":
            name = name.replace(ch, "_")
        return name[:31]

    # ─── Sheets ───────────────────────────────────────────────────────────────

    def _sheet_uebersicht(self, wb) -> None:
        """Alle Einträge in der Reihenfolge des Planers."""
        ws = wb.create_sheet("Übersicht")
        ws.cell(row=1, column=1, value=f"{self.title} – Stand {today_str()}")
        headers = ["Code", "Kurs", "Lehrkraft", "Slot", "Raum", "Hinweis"]
        self._write_header_row(ws, headers, row=2)

        for i, r in enumerate(self.result.records, 3):
            teacher = teacher_name(self.data, r.teacher_id)
            if r.is_assigned:
                values = [r.course_code, r.course_name, teacher,
                          r.slot, r.room_name or str(r.room_id), ""]
                color = COLORS["assigned"]
            else:
                values = [r.course_code, r.course_name, teacher, "", "", r.note]
                color = COLORS["unassigned"]
            for col, v in enumerate(values, 1):
                self._write_cell(ws, i, col, v, color)
        ws.freeze_panes = "A3"

    def _sheet_offen(self, wb) -> None:
        """Kurse mit offenen Reststunden."""
        ws = wb.create_sheet("Nicht zugewiesen")
        self._write_header_row(ws, ["Code", "Kurs", "Lehrkraft", "Offen"])
        for i, r in enumerate(self.result.unassigned, 2):
            teacher = teacher_name(self.data, r.teacher_id)
            for col, v in enumerate(
                [r.course_code, r.course_name, teacher, r.remaining_count], 1
            ):
                self._write_cell(ws, i, col, v, COLORS["unassigned"])

    def _sheet_lehrer(self, wb, teacher: Teacher) -> None:
        """Plan einer Lehrkraft: eine Zeile pro Slot."""
        ws = wb.create_sheet(self._sheet_title(f"L {teacher.id}"))
        hours = count_teacher_hours(self.result.records, teacher.id)
        label = teacher_name(self.data, teacher.id)
        ws.cell(row=1, column=1, value=f"{label} – {hours} Einheit(en)")
        self._write_header_row(ws, ["Slot", "Kurs / Raum"], row=2)

        slot_map = build_slot_map(self.result.get_teacher_schedule(teacher.id))
        for i, slot in enumerate(self.data.slots, 3):
            here = slot_map.get(slot, [])
            self._write_cell(ws, i, 1, slot, COLORS["free"])
            self._write_cell(
                ws, i, 2, format_records(here, mode="teacher"),
                COLORS["assigned"] if here else COLORS["free"],
            )
            ws.row_dimensions[i].height = self.ROW_CELL_H

    def _sheet_raeume(self, wb) -> None:
        """Slot × Raum-Matrix."""
        ws = wb.create_sheet("Räume")
        headers = ["Slot"] + [r.name or str(r.id) for r in self.data.rooms]
        self._write_header_row(ws, headers)

        slot_map = build_slot_map(self.result.records)
        for i, slot in enumerate(self.data.slots, 2):
            self._write_cell(ws, i, 1, slot, COLORS["free"])
            by_room = {r.room_id: r for r in slot_map.get(slot, [])}
            for col, room in enumerate(self.data.rooms, 2):
                rec = by_room.get(room.id)
                if rec is None:
                    self._write_cell(ws, i, col, "", COLORS["free"])
                else:
                    self._write_cell(
                        ws, i, col, format_records([rec], mode="room"),
                        COLORS["assigned"],
                    )
            ws.row_dimensions[i].height = self.ROW_CELL_H
