"""Tests für den Excel-Export und die Export-Hilfsfunktionen."""

from pathlib import Path

import pytest

from config.defaults import default_tags
from export.excel_export import ExcelExporter
from export.helpers import COLORS, class_title, format_student, tag_hex, tag_labels
from models.app_state import AppState
from models.separation_rule import SeparationRule
from models.student import Gender, Student


@pytest.fixture(scope="module")
def state() -> AppState:
    students = [
        Student(id="a", name="홍길동", gender=Gender.MALE,
                tag_ids=["tag-wheelchair"], assigned_class_id="1"),
        Student(id="b", name="김영희", gender=Gender.FEMALE, assigned_class_id="1"),
        Student(id="c", name="이철수", assigned_class_id="2"),
        Student(id="d", name="박민수", gender=Gender.MALE),
    ]
    return AppState(
        class_count=2,
        students=students,
        tags=default_tags(),
        separation_rules=[SeparationRule(id="r1", student_ids=["a", "b"])],
    )


# ─── HILFSFUNKTIONEN ──────────────────────────────────────────────────────────

class TestHelpers:
    def test_class_title(self):
        assert class_title("3") == "3반"
        assert class_title(None) == "미배정"

    def test_format_student(self, state: AppState):
        tag_map = state.tag_map()
        assert format_student(state.students[0], tag_map) == "홍길동 (남, 휠체어)"
        assert format_student(state.students[2], tag_map) == "이철수"
        assert format_student(state.students[0], tag_map, with_tags=False) == "홍길동 (남)"

    def test_tag_labels_skip_orphaned(self, state: AppState):
        s = Student(id="x", name="가", tag_ids=["tag-toilet", "weg"])
        assert tag_labels(s, state.tag_map()) == ["화장실지원"]

    def test_tag_hex_fallback(self, state: AppState):
        tag = state.tags[0].model_copy(update={"color_bg": "bg-unknown"})
        assert tag_hex(tag) == COLORS["tag"]


# ─── EXCEL ────────────────────────────────────────────────────────────────────

class TestExcelExport:
    def test_creates_file(self, tmp_path: Path, state: AppState):
        path = ExcelExporter(state).export(tmp_path / "out" / "board.xlsx")
        assert path.exists()
        assert path.stat().st_size > 0

    def test_sheets(self, tmp_path: Path, state: AppState):
        from openpyxl import load_workbook
        path = ExcelExporter(state).export(tmp_path / "a.xlsx")
        assert load_workbook(path).sheetnames == ["반편성"]

        path = ExcelExporter(state, include_stats=True).export(tmp_path / "b.xlsx")
        assert load_workbook(path).sheetnames == ["반편성", "통계"]

    def test_columns_per_class_and_pool(self, tmp_path: Path, state: AppState):
        from openpyxl import load_workbook
        path = ExcelExporter(state).export(tmp_path / "c.xlsx")
        ws = load_workbook(path)["반편성"]
        headers = [ws.cell(row=3, column=c).value for c in range(1, 4)]
        assert headers == ["1반", "2반", "미배정"]
        assert ws.cell(row=4, column=1).value.startswith("홍길동 (남)")
        assert "휠체어" in ws.cell(row=4, column=1).value
        assert ws.cell(row=4, column=2).value == "이철수"
        assert ws.cell(row=4, column=3).value == "박민수 (남)"

    def test_conflict_highlighted(self, tmp_path: Path, state: AppState):
        from openpyxl import load_workbook
        path = ExcelExporter(state).export(tmp_path / "d.xlsx")
        ws = load_workbook(path)["반편성"]
        fill = ws.cell(row=5, column=1).fill.start_color.rgb
        assert fill.endswith(COLORS["conflict"])

    def test_stats_sheet_values(self, tmp_path: Path, state: AppState):
        from openpyxl import load_workbook
        path = ExcelExporter(state, include_stats=True).export(tmp_path / "e.xlsx")
        ws = load_workbook(path)["통계"]
        assert ws.cell(row=1, column=1).value == "반"
        assert ws.cell(row=2, column=1).value == "1반"
        assert ws.cell(row=2, column=2).value == 2
        assert ws.cell(row=2, column=8).value == 2   # Konflikte
        assert ws.cell(row=4, column=1).value == "미배정"
