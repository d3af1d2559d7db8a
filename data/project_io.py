"""Projektdatei-Import und -Export (JSON).

Export: AppState unverändert als camelCase-JSON.
Import: JSON → Pflichtfelder prüfen → fehlende Einstellungen auffüllen →
vollständige Pydantic-Validierung. Entweder wird der ganze Schnappschuss
übernommen oder gar nichts.
"""

import json
import logging
from datetime import date
from typing import Optional

from pydantic import ValidationError

from config.schema import SchoolLevel
from models.app_state import AppState

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("students", "tags")

DEFAULT_SCHOOL_LEVEL = SchoolLevel.ELEMENTARY_MIDDLE.value
DEFAULT_CLASS_COUNT = 3


class ProjectImportError(Exception):
    """Projektdatei kann nicht übernommen werden (einziges Fehlersignal)."""


def export_project(state: AppState) -> str:
    """Serialisiert den Zustand als eingerücktes JSON."""
    return state.to_json(indent=2)


def default_export_filename(today: Optional[date] = None) -> str:
    """Dateiname für den Export, z.B. 반편성프로젝트_2025-03-02.json."""
    today = today or date.today()
    return f"반편성프로젝트_{today.isoformat()}.json"


def parse_project(text: str) -> AppState:
    """Prüft und wandelt Projekt-JSON in einen AppState.

    Raises:
        ProjectImportError: Bei ungültigem JSON, fehlenden Pflichtfeldern
            oder Schema-Verletzungen.
    """
    try:
        raw = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ProjectImportError(f"Datei ist kein gültiges JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ProjectImportError("Ungültiges Dateiformat: Objekt auf oberster Ebene erwartet.")
    missing = [f for f in REQUIRED_FIELDS if raw.get(f) is None]
    if missing:
        raise ProjectImportError(
            f"Ungültiges Dateiformat: Pflichtfeld(er) fehlen: {', '.join(missing)}"
        )

    payload = dict(raw)
    # Falsy-Werte (0, "", null) gelten wie fehlende Felder
    payload["schoolLevel"] = raw.get("schoolLevel") or DEFAULT_SCHOOL_LEVEL
    payload["classCount"] = raw.get("classCount") or DEFAULT_CLASS_COUNT
    payload["separationRules"] = raw.get("separationRules") or []

    try:
        return AppState.model_validate(payload)
    except ValidationError as e:
        raise ProjectImportError(f"Ungültiges Dateiformat:\n{e}") from e


def import_project(board, text: str) -> AppState:
    """Parst die Projektdatei und lädt sie ins Brett (ein Verlaufseintrag).

    Bei einem Fehler bleiben Brett und Verlauf unverändert.
    """
    state = parse_project(text)
    board.load_data(state)
    logger.info("Projekt importiert: %d Schüler, %d Tags",
                len(state.students), len(state.tags))
    return state
