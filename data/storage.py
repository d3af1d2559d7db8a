"""Persistenz: ein einziger JSON-Datensatz unter einem festen Schlüssel.

Beim Laden werden fehlende Felder einzeln durch Standardwerte ersetzt
(Tags → eingebaute Menge, Regeln → leer, Einstellungen → Config).
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from config.defaults import default_tags
from config.schema import BoardConfig, SchoolLevel
from models.app_state import AppState

logger = logging.getLogger(__name__)


class BoardStorage:
    """Liest und schreibt den gesamten Brett-Zustand als eine Datei."""

    def __init__(self, data_dir: Path, key: str = "classHelperData",
                 default_school_level: SchoolLevel = SchoolLevel.ELEMENTARY_MIDDLE,
                 default_class_count: int = 3) -> None:
        self.data_dir = Path(data_dir)
        self.key = key
        self.default_school_level = default_school_level
        self.default_class_count = default_class_count

    @classmethod
    def from_config(cls, config: BoardConfig) -> "BoardStorage":
        return cls(
            data_dir=Path(config.storage.data_dir),
            key=config.storage.storage_key,
            default_school_level=config.default_school_level,
            default_class_count=config.default_class_count,
        )

    @property
    def path(self) -> Path:
        return self.data_dir / f"{self.key}.json"

    def exists(self) -> bool:
        return self.path.exists()

    def _backfill(self, raw: dict) -> dict:
        """Ersetzt fehlende Felder durch Standardwerte, Feld für Feld."""
        defaults = {
            "schoolLevel": self.default_school_level.value,
            "classCount": self.default_class_count,
            "students": [],
            "tags": [t.model_dump(mode="json", by_alias=True) for t in default_tags()],
            "separationRules": [],
        }
        filled = dict(raw)
        for field, value in defaults.items():
            if filled.get(field) is None:
                filled[field] = value
        return filled

    def load(self) -> Optional[AppState]:
        """Lädt den gespeicherten Zustand; None wenn nichts (Lesbares) vorliegt."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, dict):
                raise ValueError("Objekt auf oberster Ebene erwartet")
            return AppState.model_validate(self._backfill(raw))
        except (OSError, ValueError, ValidationError) as e:
            logger.warning("Gespeicherter Zustand %s nicht lesbar: %s", self.path, e)
            return None

    def save(self, state: AppState) -> Path:
        """Schreibt den Zustand (atomar über eine temporäre Datei)."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".json.tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            f.write(state.to_json(indent=2))
        tmp.replace(self.path)
        return self.path

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
