"""Tests für das Konfigurationssystem und die Datenmodelle."""

from pathlib import Path

import pytest

from config.defaults import (
    BUILTIN_TAG_METADATA,
    MAX_CAPACITY,
    RELIEF_TAG_IDS,
    TAG_COLOR_HEX,
    TAG_COLORS,
    default_board_config,
    default_tags,
)
from config.manager import ConfigManager
from config.schema import AnalysisConfig, BoardConfig, SchoolLevel
from models.app_state import AppState
from models.separation_rule import SeparationRule
from models.student import Gender, Student


# ─── DEFAULT-KONFIGURATION ────────────────────────────────────────────────────

class TestDefaultConfig:
    def test_default_board_config_valid(self):
        config = default_board_config()
        assert config.default_school_level == SchoolLevel.ELEMENTARY_MIDDLE
        assert config.default_class_count == 3
        assert config.sample_seed is None
        assert config.storage.storage_key == "classHelperData"
        assert config.analysis.api_key_env == "GEMINI_API_KEY"

    def test_capacity_table(self):
        assert MAX_CAPACITY[SchoolLevel.ELEMENTARY_MIDDLE] == 6
        assert MAX_CAPACITY[SchoolLevel.HIGH] == 7

    def test_default_tags_unique(self):
        tags = default_tags()
        assert len(tags) == len(BUILTIN_TAG_METADATA)
        assert len({t.label for t in tags}) == len(tags)
        assert len({t.id for t in tags}) == len(tags)

    def test_relief_tags_are_builtin(self):
        assert RELIEF_TAG_IDS <= set(BUILTIN_TAG_METADATA)

    def test_palette_has_hex_for_every_color(self):
        for bg, _ in TAG_COLORS:
            assert bg in TAG_COLOR_HEX, f"Farbe '{bg}' fehlt in TAG_COLOR_HEX"


# ─── PYDANTIC-VALIDIERUNG ─────────────────────────────────────────────────────

class TestPydanticValidation:
    def test_class_count_bounds(self):
        with pytest.raises(Exception):
            BoardConfig(default_class_count=0)
        with pytest.raises(Exception):
            BoardConfig(default_class_count=21)

    def test_timeout_bounds(self):
        with pytest.raises(Exception):
            AnalysisConfig(timeout_seconds=1)

    def test_student_tag_ids_deduped(self):
        s = Student(id="s1", name="가", tagIds=["a", "b", "a"])
        assert s.tag_ids == ["a", "b"]

    def test_student_is_frozen(self):
        s = Student(id="s1", name="가")
        with pytest.raises(Exception):
            s.name = "나"

    def test_student_gender_values(self):
        assert Student(id="s1", name="가", gender="female").gender == Gender.FEMALE
        with pytest.raises(Exception):
            Student(id="s1", name="가", gender="other")

    def test_rule_min_two_after_dedupe(self):
        with pytest.raises(Exception):
            SeparationRule(id="r1", student_ids=["a", "a"])

    def test_app_state_class_count_bounds(self):
        with pytest.raises(Exception):
            AppState(class_count=0)

    def test_app_state_rejects_duplicate_tag_labels(self):
        tags = default_tags()
        clash = tags[0].model_copy(update={"id": "custom-1"})
        with pytest.raises(Exception, match="Tag-Bezeichnung"):
            AppState(tags=[*tags, clash])

    def test_app_state_queries(self):
        state = AppState(
            class_count=2,
            students=[
                Student(id="a", name="가", assigned_class_id="1"),
                Student(id="b", name="나"),
                Student(id="c", name="다", assigned_class_id="5"),
            ],
        )
        assert state.class_ids == ["1", "2"]
        assert [s.id for s in state.students_in_class("1")] == ["a"]
        assert [s.id for s in state.unassigned_students()] == ["b"]
        assert [s.id for s in state.orphaned_students()] == ["c"]
        assert "Schüler: 3" in state.summary()


# ─── CONFIG-MANAGER ───────────────────────────────────────────────────────────

class TestConfigManager:
    def test_save_and_load_roundtrip(self, tmp_path: Path):
        """Config speichern und wieder laden ergibt identische Daten."""
        config = default_board_config().model_copy(update={
            "default_school_level": SchoolLevel.HIGH,
            "default_class_count": 8,
            "sample_seed": 42,
        })
        path = tmp_path / "test_config.yaml"
        mgr = ConfigManager()
        mgr.save(config, path)
        assert path.exists()

        loaded = mgr.load(path)
        assert loaded.default_school_level == SchoolLevel.HIGH
        assert loaded.default_class_count == 8
        assert loaded.sample_seed == 42
        assert loaded.analysis.model == config.analysis.model

    def test_saved_yaml_has_comments(self, tmp_path: Path):
        path = tmp_path / "c.yaml"
        ConfigManager().save(default_board_config(), path)
        text = path.read_text(encoding="utf-8")
        assert "# Klassenbrett" in text
        assert "KI-Analyse" in text
        assert "GEMINI_API_KEY" in text

    def test_load_missing_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            ConfigManager().load(tmp_path / "nicht_da.yaml")

    def test_load_invalid_raises_value_error(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("default_class_count: 99\n", encoding="utf-8")
        with pytest.raises(ValueError, match="default_class_count"):
            ConfigManager().load(path)

    def test_load_or_default_without_file(self, tmp_path: Path):
        config = ConfigManager().load_or_default(tmp_path / "nicht_da.yaml")
        assert config == default_board_config()
