"""Tests für die Bedien-CLI (click CliRunner, isoliertes Arbeitsverzeichnis)."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from data.storage import BoardStorage
from main import cli


@pytest.fixture
def runner(tmp_path: Path, monkeypatch) -> CliRunner:
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def _stored(tmp_path: Path):
    return BoardStorage(tmp_path / "data_store").load()


class TestBoardCommands:
    def test_show_empty_board(self, runner: CliRunner):
        result = runner.invoke(cli, ["show"])
        assert result.exit_code == 0
        assert "Klassen: 3" in result.output

    def test_add_and_move_student(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["student", "add", "홍길동", "--gender", "male",
                                     "--tag", "휠체어"])
        assert result.exit_code == 0, result.output
        result = runner.invoke(cli, ["student", "move", "홍길동", "2"])
        assert result.exit_code == 0, result.output

        state = _stored(tmp_path)
        assert len(state.students) == 1
        assert state.students[0].assigned_class_id == "2"
        assert state.students[0].tag_ids == ["tag-wheelchair"]

    def test_move_unknown_student_fails(self, runner: CliRunner):
        result = runner.invoke(cli, ["student", "move", "niemand", "1"])
        assert result.exit_code == 1
        assert "nicht gefunden" in result.output

    def test_empty_name_rejected(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["student", "add", "   "])
        assert result.exit_code == 1
        assert _stored(tmp_path) is None

    def test_duplicate_tag(self, runner: CliRunner, tmp_path: Path):
        assert runner.invoke(cli, ["tag", "add", "공격성"]).exit_code == 0
        result = runner.invoke(cli, ["tag", "add", "공격성"])
        assert result.exit_code == 1
        assert "existiert bereits" in result.output
        labels = [t.label for t in _stored(tmp_path).tags]
        assert labels.count("공격성") == 1

    def test_rule_and_conflicts(self, runner: CliRunner):
        runner.invoke(cli, ["student", "add", "가나다"])
        runner.invoke(cli, ["student", "add", "라마바"])
        runner.invoke(cli, ["student", "move", "가나다", "1"])
        runner.invoke(cli, ["student", "move", "라마바", "1"])
        result = runner.invoke(cli, ["rule", "add", "가나다", "라마바"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, ["conflicts"])
        assert result.exit_code == 1
        assert "가나다" in result.output

        runner.invoke(cli, ["student", "move", "라마바", "2"])
        assert runner.invoke(cli, ["conflicts"]).exit_code == 0

    def test_settings(self, runner: CliRunner, tmp_path: Path):
        assert runner.invoke(cli, ["settings", "level", "HIGH"]).exit_code == 0
        assert runner.invoke(cli, ["settings", "classes", "5"]).exit_code == 0
        assert runner.invoke(cli, ["settings", "classes", "0"]).exit_code == 1
        state = _stored(tmp_path)
        assert state.class_count == 5
        assert state.school_level.value == "HIGH"

    def test_sample_and_stats(self, runner: CliRunner, tmp_path: Path):
        result = runner.invoke(cli, ["sample", "--yes"])
        assert result.exit_code == 0, result.output
        assert len(_stored(tmp_path).students) == 18
        assert runner.invoke(cli, ["stats"]).exit_code == 0

    def test_reset(self, runner: CliRunner, tmp_path: Path):
        runner.invoke(cli, ["sample", "--yes"])
        assert runner.invoke(cli, ["reset", "--yes"]).exit_code == 0
        assert _stored(tmp_path).students == []


class TestImportExport:
    def test_json_roundtrip(self, runner: CliRunner, tmp_path: Path):
        runner.invoke(cli, ["sample", "--yes"])
        result = runner.invoke(cli, ["export-json", "-o", "projekt.json"])
        assert result.exit_code == 0, result.output
        exported = json.loads((tmp_path / "projekt.json").read_text(encoding="utf-8"))
        assert len(exported["students"]) == 18

        runner.invoke(cli, ["reset", "--yes"])
        result = runner.invoke(cli, ["import", "projekt.json", "--yes"])
        assert result.exit_code == 0, result.output
        assert len(_stored(tmp_path).students) == 18

    def test_import_invalid(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / "kaputt.json").write_text('{"students": []}', encoding="utf-8")
        result = runner.invoke(cli, ["import", "kaputt.json", "--yes"])
        assert result.exit_code == 1
        assert "Import fehlgeschlagen" in result.output

    def test_export_excel(self, runner: CliRunner, tmp_path: Path):
        runner.invoke(cli, ["sample", "--yes"])
        result = runner.invoke(cli, ["export-excel", "-o", "out.xlsx", "--stats"])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "out.xlsx").exists()


class TestAnalyzeAndShell:
    def test_analyze_without_key(self, runner: CliRunner, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        result = runner.invoke(cli, ["analyze"])
        assert result.exit_code == 0
        assert "API 키" in result.output

    def test_shell_undo_redo(self, runner: CliRunner, tmp_path: Path):
        script = "add 홍길동 male\nadd 김영희\nundo\nredo\nundo\nsave\nquit\n"
        result = runner.invoke(cli, ["shell"], input=script)
        assert result.exit_code == 0, result.output
        names = [s.name for s in _stored(tmp_path).students]
        assert names == ["홍길동"]

    def test_shell_reports_validation_error(self, runner: CliRunner):
        result = runner.invoke(cli, ["shell"], input="add ''\nquit\n")
        assert result.exit_code == 0
        assert "leer" in result.output
