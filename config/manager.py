"""Konfigurationsmanager für das Klassenbrett.

Die Konfiguration liegt als kommentiertes YAML (ruamel.yaml) in
config/board_config.yaml. Fehlt die Datei, gelten die eingebauten
Standardwerte; ein API-Schlüssel wird nie hineingeschrieben.
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import BoardConfig
from config.defaults import default_board_config

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


def _header() -> str:
    return (
        "# Klassenbrett · Brett-Einstellungen\n"
        f"# Zuletzt gespeichert: {date.today().isoformat()}\n"
        "# Änderungen wirken beim nächsten Aufruf von main.py.\n"
    )


# Feld → (Abschnittstitel, Erläuterung)
_SECTIONS: dict[str, tuple[str, Optional[str]]] = {
    "default_school_level": (
        "Neue Bretter",
        "ELEMENTARY_MIDDLE: 6 Plätze je Klasse, HIGH: 7 Plätze je Klasse.",
    ),
    "sample_seed": (
        "Beispieldaten",
        "Zahl = reproduzierbare Beispiel-Jahrgänge, leer = jedes Mal neu gewürfelt.",
    ),
    "storage": ("Ablage des Bretts", None),
    "analysis": (
        "KI-Analyse (Gemini)",
        "Hier steht nur der NAME der Umgebungsvariable, nie der Schlüssel selbst.",
    ),
}


def _describe_errors(error: ValidationError) -> str:
    """Pydantic-Fehler als eine Zeile je Feld."""
    lines = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "(Wurzel)"
        lines.append(f"  - {location}: {item['msg']}")
    return "\n".join(lines)


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "board_config.yaml"

    def first_run_check(self) -> bool:
        """True, solange noch keine Brett-Konfiguration gespeichert wurde."""
        return not self.DEFAULT_CONFIG.exists()

    def load(self, path: Optional[Path] = None) -> BoardConfig:
        """Liest die YAML-Datei und prüft sie gegen BoardConfig.

        Raises:
            FileNotFoundError: Datei fehlt.
            ValueError: Inhalt verletzt das Schema.
        """
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Keine Brett-Konfiguration unter {target}. "
                f"Mit 'python main.py setup' anlegen."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f) or {}
        try:
            return BoardConfig.model_validate(dict(raw))
        except ValidationError as e:
            raise ValueError(
                f"Brett-Konfiguration {target} ist fehlerhaft:\n{_describe_errors(e)}"
            ) from e

    def load_or_default(self, path: Optional[Path] = None) -> BoardConfig:
        """Wie load(), aber ohne Datei gelten die eingebauten Standardwerte."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            return default_board_config()
        return self.load(target)

    def save(self, config: BoardConfig, path: Optional[Path] = None) -> None:
        """Schreibt die Konfiguration mit Abschnittskommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(_header() + "\n")
            yaml.dump(self._to_commented_map(config), f)
        console.print(f"[green]✓[/green] Brett-Konfiguration gespeichert: {target}")

    def _to_commented_map(self, config: BoardConfig) -> CommentedMap:
        data = CommentedMap(json.loads(config.model_dump_json()))
        for key, (title, note) in _SECTIONS.items():
            text = f"\n{title}" + (f"\n{note}" if note else "")
            data.yaml_set_comment_before_after_key(key, before=text)

        analysis = CommentedMap(data["analysis"])
        analysis.yaml_add_eol_comment("Sekunden pro Anfrage", "timeout_seconds")
        data["analysis"] = analysis
        return data
