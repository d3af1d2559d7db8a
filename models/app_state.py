"""AppState: Vollständiger Schnappschuss eines Klassenbretts (Pydantic v2).

Einheit für Persistenz, Undo/Redo, Import und Export. Klassen selbst sind
keine Entitäten: Klasse k ist die Menge aller Schüler mit
assigned_class_id == str(k), 1 ≤ k ≤ class_count.
"""

from collections import Counter
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from config.schema import SchoolLevel
from models.student import Student
from models.tag import Tag
from models.separation_rule import SeparationRule


class AppState(BaseModel):
    """Schnappschuss: Einstellungen, Schüler, Tags und Trennungsregeln."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    school_level: SchoolLevel = Field(SchoolLevel.ELEMENTARY_MIDDLE, alias="schoolLevel")
    class_count: int = Field(3, ge=1, le=20, alias="classCount")
    students: list[Student] = Field(default_factory=list)
    tags: list[Tag] = Field(default_factory=list)
    separation_rules: list[SeparationRule] = Field(
        default_factory=list, alias="separationRules")

    @model_validator(mode="after")
    def validate_unique_keys(self):
        """Prüfe dass IDs je Entitätsart und Tag-Bezeichnungen eindeutig sind."""
        checks = [
            ("Schüler-ID", [s.id for s in self.students]),
            ("Tag-ID", [t.id for t in self.tags]),
            ("Tag-Bezeichnung", [t.label for t in self.tags]),
            ("Regel-ID", [r.id for r in self.separation_rules]),
        ]
        for what, values in checks:
            duplicates = sorted(v for v, n in Counter(values).items() if n > 1)
            if duplicates:
                raise ValueError(f"{what} mehrfach vergeben: {', '.join(duplicates)}")
        return self

    # ─── Abfragen ───

    @property
    def class_ids(self) -> list[str]:
        """Angezeigte Klassen-IDs "1".."class_count"."""
        return [str(i) for i in range(1, self.class_count + 1)]

    def student_map(self) -> dict[str, Student]:
        return {s.id: s for s in self.students}

    def tag_map(self) -> dict[str, Tag]:
        return {t.id: t for t in self.tags}

    def get_student(self, student_id: str) -> Optional[Student]:
        for s in self.students:
            if s.id == student_id:
                return s
        return None

    def students_in_class(self, class_id: Optional[str]) -> list[Student]:
        """Schüler einer Klasse; None liefert den Pool ohne Klasse."""
        return [s for s in self.students if s.assigned_class_id == class_id]

    def unassigned_students(self) -> list[Student]:
        return self.students_in_class(None)

    def orphaned_students(self) -> list[Student]:
        """Schüler mit einer Klassen-ID, die nicht (mehr) angezeigt wird."""
        visible = set(self.class_ids)
        return [
            s for s in self.students
            if s.assigned_class_id is not None and s.assigned_class_id not in visible
        ]

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Zustand."""
        assigned = sum(1 for s in self.students if s.is_assigned)
        lines = [
            f"Schulstufe: {self.school_level.value}",
            f"Klassen: {self.class_count}",
            f"Schüler: {len(self.students)} "
            f"({assigned} zugeordnet, {len(self.students) - assigned} ohne Klasse)",
            f"Tags: {len(self.tags)}",
            f"Trennungsregeln: {len(self.separation_rules)}",
        ]
        return "\n".join(lines)

    # ─── Serialisierung ───

    def to_json(self, indent: Optional[int] = 2) -> str:
        """camelCase-JSON, kompatibel mit exportierten Projektdateien."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
