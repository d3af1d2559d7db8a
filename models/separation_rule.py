"""Datenmodell für Trennungsregeln (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SeparationRule(BaseModel):
    """Trennungsregel: Keine zwei Mitglieder dürfen in derselben Klasse sitzen.

    Geprüft wird paarweise. Schüler ohne Klasse verletzen die Regel nie.
    Eine Regel mit weniger als zwei Mitgliedern ist bedeutungslos und wird
    vom Brett gelöscht.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    student_ids: list[str] = Field(alias="studentIds", min_length=2)

    @field_validator("student_ids", mode="before")
    @classmethod
    def _dedupe_members(cls, v):
        # geordnete Menge: erste Nennung gewinnt
        if isinstance(v, (list, tuple)):
            return list(dict.fromkeys(v))
        return v
