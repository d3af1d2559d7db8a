from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class SchoolLevel(str, Enum):
    ELEMENTARY_MIDDLE = "ELEMENTARY_MIDDLE"
    HIGH = "HIGH"


# ─── PERSISTENZ ───

class StorageConfig(BaseModel):
    """Ablageort für den gespeicherten Brett-Zustand."""
    # Verzeichnis, in dem der Zustand als JSON liegt
    data_dir: str = Field("data_store",
        description="Verzeichnis für den gespeicherten Zustand")
    # Einziger, fester Schlüssel des gespeicherten Datensatzes
    storage_key: str = Field("classHelperData",
        description="Schlüssel (Dateiname ohne .json)")


# ─── KI-ANALYSE ───

class AnalysisConfig(BaseModel):
    """Einstellungen für den externen KI-Analysedienst."""
    # Modellname beim Gemini-Dienst
    model: str = Field("gemini-2.5-flash",
        description="Modellname")
    # Name der Umgebungsvariable mit dem API-Schlüssel
    api_key_env: str = Field("GEMINI_API_KEY",
        description="Umgebungsvariable mit dem API-Schlüssel")
    # Basis-URL der REST-Schnittstelle
    endpoint: str = Field(
        "https://generativelanguage.googleapis.com/v1beta/models",
        description="Basis-URL der REST-Schnittstelle")
    # Zeitlimit pro Anfrage
    timeout_seconds: int = Field(60, ge=5, le=600,
        description="Zeitlimit pro Anfrage (Sekunden)")


# ─── GESAMT-CONFIG ───

class BoardConfig(BaseModel):
    """Gesamtkonfiguration des Klassenbretts."""
    # Schulstufe für neue Bretter
    default_school_level: SchoolLevel = Field(SchoolLevel.ELEMENTARY_MIDDLE)
    # Anzahl Klassen für neue Bretter
    default_class_count: int = Field(3, ge=1, le=20,
        description="Anzahl Klassen für neue Bretter")
    # Fester Seed für Beispieldaten (None = zufällig)
    sample_seed: Optional[int] = Field(None,
        description="Seed für Beispieldaten (leer = zufällig)")
    storage: StorageConfig = Field(default_factory=StorageConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
