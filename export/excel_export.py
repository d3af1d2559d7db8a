"""Excel-Export der Klasseneinteilung (openpyxl)."""

from pathlib import Path

from models.app_state import AppState
from board.conflicts import conflicting_student_ids
from board.stats import BoardStats, compute_stats

from export.helpers import (
    COLORS, GENDER_LABELS, class_title, tag_hex, tag_labels, today_str,
)


class ExcelExporter:
    """Exportiert einen AppState als Excel-Datei.

    Blätter:
      - "반편성": eine Spalte pro Klasse plus Spalte für Schüler ohne Klasse
      - "통계" (optional): Kennzahlen pro Klasse
    """

    COL_CLASS_W = 24
    ROW_HEADER_H = 22

    def __init__(self, state: AppState, include_stats: bool = False):
        self.state = state
        self.include_stats = include_stats
        self.tag_map = state.tag_map()

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def export(self, output_path: Path) -> Path:
        """Erstellt die Excel-Datei und gibt den Pfad zurück."""
        from openpyxl import Workbook
        wb = Workbook()
        wb.remove(wb.active)   # Leeres Standard-Sheet entfernen

        self._sheet_einteilung(wb)
        if self.include_stats:
            self._sheet_statistik(wb, compute_stats(self.state))

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

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

    def _write_header(self, ws, row: int, headers: list[str]) -> None:
        from openpyxl.styles import Font
        fill = self._fill(COLORS["header"])
        border = self._thin_border()
        for col, text in enumerate(headers, 1):
            cell = ws.cell(row=row, column=col, value=text)
            cell.fill = fill
            cell.font = Font(bold=True, color="FFFFFF", size=10)
            cell.alignment = self._center_align(wrap=False)
            cell.border = border
        ws.row_dimensions[row].height = self.ROW_HEADER_H

    # ─── Sheet: Einteilung ────────────────────────────────────────────────────

    def _sheet_einteilung(self, wb) -> None:
        from openpyxl.styles import Font
        from openpyxl.utils import get_column_letter

        ws = wb.create_sheet(title="반편성", index=0)
        ws.cell(row=1, column=1, value=f"반편성 결과 ({today_str()})").font = Font(bold=True, size=14)

        columns = [*self.state.class_ids, None]
        self._write_header(ws, 3, [class_title(cid) for cid in columns])

        conflict_ids = conflicting_student_ids(self.state.students, self.state.separation_rules)
        border = self._thin_border()
        for col, cid in enumerate(columns, 1):
            members = self.state.students_in_class(cid)
            for offset, student in enumerate(members):
                labels = tag_labels(student, self.tag_map)
                gender = GENDER_LABELS.get(student.gender, "")
                text = student.name + (f" ({gender})" if gender else "")
                if labels:
                    text += "\n" + ", ".join(labels)
                c = ws.cell(row=4 + offset, column=col, value=text)
                c.alignment = self._center_align()
                c.border = border
                if student.id in conflict_ids:
                    c.fill = self._fill(COLORS["conflict"])
                elif cid is None:
                    c.fill = self._fill(COLORS["unassigned"])
                elif student.tag_ids and student.tag_ids[0] in self.tag_map:
                    c.fill = self._fill(tag_hex(self.tag_map[student.tag_ids[0]]))
            ws.column_dimensions[get_column_letter(col)].width = self.COL_CLASS_W

    # ─── Sheet: Statistik ─────────────────────────────────────────────────────

    def _sheet_statistik(self, wb, stats: BoardStats) -> None:
        ws = wb.create_sheet(title="통계")
        tags = self.state.tags
        headers = ["반", "인원", "정원", "남", "여", "미입력", "부담 Tag", "분리 위반"]
        headers += [t.label for t in tags]
        self._write_header(ws, 1, headers)

        border = self._thin_border()
        rows = [*stats.classes, stats.unassigned]
        for r, cs in enumerate(rows, 2):
            values = [
                class_title(cs.class_id), cs.student_count,
                cs.capacity if cs.class_id is not None else "",
                cs.male_count, cs.female_count, cs.unknown_gender_count,
                cs.burden_tag_count, cs.conflict_count,
            ]
            values += [cs.tag_counts.get(t.id, 0) for t in tags]
            for col, value in enumerate(values, 1):
                c = ws.cell(row=r, column=col, value=value)
                c.border = border
            if cs.is_over_capacity:
                ws.cell(row=r, column=2).fill = self._fill(COLORS["over"])
