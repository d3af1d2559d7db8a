"""Klassenstatistik: Belegung, Geschlechterverteilung und Tag-Last pro Klasse."""

from collections import Counter
from typing import Optional

from pydantic import BaseModel

from config.defaults import RELIEF_TAG_IDS
from models.app_state import AppState
from models.student import Gender, Student
from board.capacity import capacity_for
from board.conflicts import detect_conflicts


class ClassStats(BaseModel):
    """Kennzahlen einer Klasse (oder des Pools ohne Klasse)."""

    class_id: Optional[str]       # None = ohne Klasse
    student_count: int
    capacity: int
    male_count: int
    female_count: int
    unknown_gender_count: int
    tag_counts: dict[str, int]    # Tag-ID → Anzahl Schüler
    burden_tag_count: int         # Tags ohne Entlastungswirkung
    conflict_count: int

    @property
    def is_over_capacity(self) -> bool:
        return self.class_id is not None and self.student_count > self.capacity

    @property
    def free_seats(self) -> int:
        return self.capacity - self.student_count


class BoardStats(BaseModel):
    """Gesamtstatistik eines Bretts."""

    classes: list[ClassStats]
    unassigned: ClassStats
    orphaned_student_ids: list[str]
    total_conflicts: int

    @property
    def over_capacity_class_ids(self) -> list[str]:
        return [c.class_id for c in self.classes if c.is_over_capacity]


def _stats_for(class_id: Optional[str], members: list[Student], capacity: int,
               conflict_ids: set[str]) -> ClassStats:
    genders = Counter(s.gender for s in members)
    tag_counts: Counter = Counter()
    for s in members:
        tag_counts.update(s.tag_ids)
    burden = sum(n for tid, n in tag_counts.items() if tid not in RELIEF_TAG_IDS)
    return ClassStats(
        class_id=class_id,
        student_count=len(members),
        capacity=capacity,
        male_count=genders.get(Gender.MALE, 0),
        female_count=genders.get(Gender.FEMALE, 0),
        unknown_gender_count=genders.get(None, 0),
        tag_counts=dict(tag_counts),
        burden_tag_count=burden,
        conflict_count=sum(1 for s in members if s.id in conflict_ids),
    )


def compute_stats(state: AppState) -> BoardStats:
    """Berechnet die Statistik für alle angezeigten Klassen und den Pool."""
    capacity = capacity_for(state.school_level)
    conflicts = detect_conflicts(state.students, state.separation_rules)
    conflict_ids = {sid for pair in conflicts for sid in pair}

    classes = [
        _stats_for(cid, state.students_in_class(cid), capacity, conflict_ids)
        for cid in state.class_ids
    ]
    unassigned = _stats_for(None, state.unassigned_students(), capacity, conflict_ids)
    return BoardStats(
        classes=classes,
        unassigned=unassigned,
        orphaned_student_ids=[s.id for s in state.orphaned_students()],
        total_conflicts=len(conflicts),
    )
