"""Datenmodell für eine Schülerin / einen Schüler (Pydantic v2)."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Drop-Zone-ID des Pools ohne Klasse (nur als Eingabe; gespeichert wird None)
UNASSIGNED_ID = "unassigned"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Student(BaseModel):
    """Repräsentiert eine Schülerin / einen Schüler auf dem Brett.

    Unveränderlich: Änderungen erzeugen über model_copy() eine neue Instanz,
    damit Schnappschüsse in der Historie gefahrlos geteilt werden können.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    gender: Optional[Gender] = None
    tag_ids: list[str] = Field(default_factory=list, alias="tagIds")
    # Klassennummer als String ("1".."classCount"); None = nicht zugeordnet
    assigned_class_id: Optional[str] = Field(None, alias="assignedClassId")

    @field_validator("tag_ids")
    @classmethod
    def _dedupe_tag_ids(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    @field_validator("assigned_class_id", mode="before")
    @classmethod
    def _normalize_class_id(cls, v):
        if v is None:
            return None
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str) and v.strip() in ("", UNASSIGNED_ID):
            return None
        return v

    @property
    def is_assigned(self) -> bool:
        return self.assigned_class_id is not None
