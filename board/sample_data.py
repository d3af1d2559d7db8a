"""Beispieldaten-Generator für das Klassenbrett.

Erzeugt genau class_count × Kapazität Schüler und verteilt sie der Reihe nach
auf die Klassen: Schüler i landet in Klasse ⌈(i+1)/Kapazität⌉, jede Klasse ist
also exakt voll.

Verteilungen:
  - Geschlecht: 60 % männlich, 40 % weiblich
  - Tags: ≈15 % genau ein Tag, ≈15 % genau zwei Tags, sonst keins
    (nur eingebaute Tags)
  - Namen: Nachname + Vorname, ohne Dubletten
"""

import random
from typing import Optional

from config.defaults import (
    SAMPLE_FIRST_NAMES,
    SAMPLE_LAST_NAMES,
    SAMPLE_NAME_ATTEMPTS,
)
from config.schema import SchoolLevel
from models.student import Gender, Student
from models.tag import Tag
from board.capacity import capacity_for
from board.ids import IdGenerator

ONE_TAG_PROBABILITY = 0.15
TWO_TAGS_PROBABILITY = 0.15
MALE_PROBABILITY = 0.6


class SampleDataGenerator:
    """Generiert einen vollständig zugeordneten Beispiel-Jahrgang."""

    def __init__(self, rng: Optional[random.Random] = None,
                 ids: Optional[IdGenerator] = None) -> None:
        self.rng = rng or random.Random()
        self.ids = ids or IdGenerator(self.rng)

    # ─── Einzelteile ──────────────────────────────────────────────────────────

    def _unique_name(self, index: int, used: set[str]) -> str:
        for _ in range(SAMPLE_NAME_ATTEMPTS):
            candidate = self.rng.choice(SAMPLE_LAST_NAMES) + self.rng.choice(SAMPLE_FIRST_NAMES)
            if candidate not in used:
                used.add(candidate)
                return candidate
        # Fallback, falls der Namensraum erschöpft ist
        name = f"학생{index + 1}"
        used.add(name)
        return name

    def _gender(self) -> Gender:
        return Gender.MALE if self.rng.random() < MALE_PROBABILITY else Gender.FEMALE

    def _tag_count(self) -> int:
        r = self.rng.random()
        if r < ONE_TAG_PROBABILITY:
            return 1
        if r < ONE_TAG_PROBABILITY + TWO_TAGS_PROBABILITY:
            return 2
        return 0

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def generate(self, class_count: int, school_level: SchoolLevel,
                 tags: list[Tag]) -> list[Student]:
        """Erzeugt class_count × Kapazität zugeordnete Schüler."""
        capacity = capacity_for(school_level)
        total = class_count * capacity
        tag_ids = [t.id for t in tags]
        used_names: set[str] = set()

        students = []
        for i in range(total):
            count = min(self._tag_count(), len(tag_ids))
            students.append(Student(
                id=self.ids.new_id("sample"),
                name=self._unique_name(i, used_names),
                gender=self._gender(),
                tag_ids=self.rng.sample(tag_ids, count),
                assigned_class_id=str(i // capacity + 1),
            ))
        return students
