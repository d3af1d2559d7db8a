"""ClassBoard: Zustand und Änderungs-API eines Klassenbretts.

Jede Änderung läuft in drei Schritten ab:
  1. Eingabe prüfen (Validierungsfehler → Exception, keine Änderung)
  2. Schnappschuss des aktuellen Zustands in den Verlauf legen
  3. neuen Zustand übernehmen

Operationen auf unbekannte IDs sind stille No-Ops (Rückgabe False) und
erzeugen keinen Verlaufseintrag. Trennungsregeln werden beim Verschieben
nicht geprüft; Konflikte sind nur ein Hinweis (siehe conflicts()).
"""

import logging
import random
from typing import Iterable, Optional, Union

from config.defaults import TAG_COLORS, default_tags
from config.schema import SchoolLevel
from models.app_state import AppState
from models.separation_rule import SeparationRule
from models.student import Gender, Student, UNASSIGNED_ID
from models.tag import Tag
from board.capacity import capacity_for
from board.conflicts import ConflictPair, detect_conflicts
from board.errors import (
    DuplicateTagError,
    EmptyNameError,
    InvalidClassCountError,
    InvalidGenderError,
    RuleTooSmallError,
)
from board.history import History
from board.ids import IdGenerator
from board.sample_data import SampleDataGenerator

logger = logging.getLogger(__name__)

MAX_CLASS_COUNT = 20


def normalize_target(target_class_id: Optional[str]) -> Optional[str]:
    """Drop-Ziel → Klassen-ID; None, "" und "unassigned" bedeuten: ohne Klasse."""
    if target_class_id is None:
        return None
    target = str(target_class_id).strip()
    if target in ("", UNASSIGNED_ID):
        return None
    return target


def initial_state(school_level: SchoolLevel = SchoolLevel.ELEMENTARY_MIDDLE,
                  class_count: int = 3) -> AppState:
    """Leeres Brett mit den eingebauten Tags."""
    return AppState(
        school_level=school_level,
        class_count=class_count,
        students=[],
        tags=default_tags(),
        separation_rules=[],
    )


def _parse_gender(gender: Union[Gender, str, None]) -> Optional[Gender]:
    if not gender:
        return None
    try:
        return Gender(gender)
    except ValueError:
        raise InvalidGenderError(gender) from None


class ClassBoard:
    """Ein Klassenbrett mit Undo/Redo.

    Kein globaler Zustand: mehrere Bretter im selben Prozess sind unabhängig.
    """

    def __init__(self, state: Optional[AppState] = None,
                 rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        self.ids = IdGenerator(self.rng)
        self.history = History()
        self._state = state if state is not None else initial_state()

    # ─── Lesen ────────────────────────────────────────────────────────────────

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def students(self) -> list[Student]:
        return self._state.students

    @property
    def tags(self) -> list[Tag]:
        return self._state.tags

    @property
    def separation_rules(self) -> list[SeparationRule]:
        return self._state.separation_rules

    @property
    def school_level(self) -> SchoolLevel:
        return self._state.school_level

    @property
    def class_count(self) -> int:
        return self._state.class_count

    @property
    def capacity(self) -> int:
        return capacity_for(self._state.school_level)

    def get_student(self, student_id: str) -> Optional[Student]:
        return self._state.get_student(student_id)

    def conflicts(self) -> set[ConflictPair]:
        """Aktuelle Verletzungen von Trennungsregeln (bei jedem Aufruf neu berechnet)."""
        return detect_conflicts(self._state.students, self._state.separation_rules)

    def orphaned_students(self) -> list[Student]:
        return self._state.orphaned_students()

    # ─── Verlauf ──────────────────────────────────────────────────────────────

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def _commit(self, new_state: AppState, action: str) -> None:
        """Schnappschuss des alten Zustands, danach neuen Zustand übernehmen."""
        self.history.snapshot(self._state)
        self._state = new_state
        logger.info("Brett geändert: %s", action)

    def undo(self) -> bool:
        previous = self.history.undo(self._state)
        if previous is None:
            return False
        self._state = previous
        return True

    def redo(self) -> bool:
        nxt = self.history.redo(self._state)
        if nxt is None:
            return False
        self._state = nxt
        return True

    # ─── Schüler ──────────────────────────────────────────────────────────────

    def move_student(self, student_id: str, target_class_id: Optional[str] = None) -> bool:
        """Setzt die Klasse eines Schülers; leeres Ziel = Pool ohne Klasse.

        Gibt False zurück, wenn der Schüler nicht existiert oder bereits dort ist.
        """
        target = normalize_target(target_class_id)
        student = self._state.get_student(student_id)
        if student is None:
            logger.warning("move_student: unbekannte ID %r ignoriert", student_id)
            return False
        if student.assigned_class_id == target:
            return False

        moved = student.model_copy(update={"assigned_class_id": target})
        students = [moved if s.id == student_id else s for s in self._state.students]
        self._commit(
            self._state.model_copy(update={"students": students}),
            f"verschiebe {student_id} → {target or UNASSIGNED_ID}",
        )
        return True

    def _clean_tag_ids(self, tag_ids: Iterable[str]) -> list[str]:
        known = {t.id for t in self._state.tags}
        return [tid for tid in dict.fromkeys(tag_ids) if tid in known]

    def add_or_update_student(
        self,
        name: str,
        gender: Union[Gender, str, None] = None,
        tag_ids: Iterable[str] = (),
        student_id: Optional[str] = None,
    ) -> Student:
        """Legt einen Schüler an oder überschreibt Name, Geschlecht und Tags.

        Die Klassenzuordnung eines vorhandenen Schülers bleibt unverändert.
        Unbekannte Tag-IDs werden verworfen.
        """
        clean_name = (name or "").strip()
        if not clean_name:
            raise EmptyNameError("Der Name darf nicht leer sein.")
        gender_value = _parse_gender(gender)
        clean_tags = self._clean_tag_ids(tag_ids)

        existing = self._state.get_student(student_id) if student_id else None
        if existing is not None:
            updated = existing.model_copy(update={
                "name": clean_name,
                "gender": gender_value,
                "tag_ids": clean_tags,
            })
            students = [updated if s.id == existing.id else s for s in self._state.students]
            self._commit(self._state.model_copy(update={"students": students}),
                         f"bearbeite Schüler {existing.id}")
            return updated

        created = Student(
            id=self.ids.new_id("student"),
            name=clean_name,
            gender=gender_value,
            tag_ids=clean_tags,
            assigned_class_id=None,
        )
        self._commit(
            self._state.model_copy(update={"students": [*self._state.students, created]}),
            f"neuer Schüler {created.id}",
        )
        return created

    def delete_student(self, student_id: str) -> bool:
        """Entfernt den Schüler und ihn aus allen Regeln; Regeln < 2 entfallen."""
        if self._state.get_student(student_id) is None:
            return False

        students = [s for s in self._state.students if s.id != student_id]
        rules = []
        for rule in self._state.separation_rules:
            if student_id not in rule.student_ids:
                rules.append(rule)
                continue
            remaining = [sid for sid in rule.student_ids if sid != student_id]
            if len(remaining) >= 2:
                rules.append(rule.model_copy(update={"student_ids": remaining}))

        self._commit(
            self._state.model_copy(update={"students": students, "separation_rules": rules}),
            f"lösche Schüler {student_id}",
        )
        return True

    # ─── Tags ─────────────────────────────────────────────────────────────────

    def pick_tag_color(self) -> tuple[str, str]:
        """Bevorzugt Palettenfarben, deren Hintergrund noch kein Tag nutzt."""
        used = {t.color_bg for t in self._state.tags}
        available = [c for c in TAG_COLORS if c[0] not in used]
        return self.rng.choice(available or TAG_COLORS)

    def add_tag(self, label: str, color_bg: Optional[str] = None,
                color_text: Optional[str] = None) -> Tag:
        """Neues Tag; doppelte Bezeichnung (exakter Vergleich) wird abgelehnt."""
        clean_label = (label or "").strip()
        if not clean_label:
            raise EmptyNameError("Die Tag-Bezeichnung darf nicht leer sein.")
        if any(t.label == clean_label for t in self._state.tags):
            logger.warning("add_tag: Tag %r existiert bereits", clean_label)
            raise DuplicateTagError(clean_label)

        if not color_bg or not color_text:
            color_bg, color_text = self.pick_tag_color()
        tag = Tag(
            id=self.ids.new_id("custom"),
            label=clean_label,
            color_bg=color_bg,
            color_text=color_text,
        )
        self._commit(
            self._state.model_copy(update={"tags": [*self._state.tags, tag]}),
            f"neues Tag {clean_label!r}",
        )
        return tag

    def delete_tag(self, tag_id: str) -> bool:
        """Entfernt das Tag und seine ID bei allen Schülern."""
        if tag_id not in self._state.tag_map():
            return False
        tags = [t for t in self._state.tags if t.id != tag_id]
        students = [
            s.model_copy(update={"tag_ids": [tid for tid in s.tag_ids if tid != tag_id]})
            if tag_id in s.tag_ids else s
            for s in self._state.students
        ]
        self._commit(
            self._state.model_copy(update={"tags": tags, "students": students}),
            f"lösche Tag {tag_id}",
        )
        return True

    # ─── Trennungsregeln ──────────────────────────────────────────────────────

    def add_separation_rule(self, student_ids: Iterable[str]) -> SeparationRule:
        """Neue Regel aus mindestens zwei (vorhandenen, verschiedenen) Schülern."""
        known = self._state.student_map()
        members = [sid for sid in dict.fromkeys(student_ids) if sid in known]
        if len(members) < 2:
            raise RuleTooSmallError(len(members))

        rule = SeparationRule(id=self.ids.new_id("rule"), student_ids=members)
        self._commit(
            self._state.model_copy(
                update={"separation_rules": [*self._state.separation_rules, rule]}),
            f"neue Trennungsregel {rule.id}",
        )
        return rule

    def delete_separation_rule(self, rule_id: str) -> bool:
        rules = [r for r in self._state.separation_rules if r.id != rule_id]
        if len(rules) == len(self._state.separation_rules):
            return False
        self._commit(self._state.model_copy(update={"separation_rules": rules}),
                     f"lösche Trennungsregel {rule_id}")
        return True

    # ─── Einstellungen ────────────────────────────────────────────────────────

    def set_school_level(self, level: Union[SchoolLevel, str]) -> bool:
        level = SchoolLevel(level)
        if level == self._state.school_level:
            return False
        self._commit(self._state.model_copy(update={"school_level": level}),
                     f"Schulstufe {level.value}")
        return True

    def set_class_count(self, count: int) -> bool:
        """Ändert die Klassenanzahl.

        Bei einer Verkleinerung wandern Schüler aus wegfallenden Klassen in den
        Pool ohne Klasse, im selben Verlaufseintrag.
        """
        if not 1 <= count <= MAX_CLASS_COUNT:
            raise InvalidClassCountError(
                f"Klassenanzahl muss zwischen 1 und {MAX_CLASS_COUNT} liegen (erhalten: {count})."
            )
        if count == self._state.class_count:
            return False

        students = self._state.students
        if count < self._state.class_count:
            visible = {str(i) for i in range(1, count + 1)}
            students = [
                s.model_copy(update={"assigned_class_id": None})
                if s.assigned_class_id is not None and s.assigned_class_id not in visible
                else s
                for s in students
            ]
        self._commit(
            self._state.model_copy(update={"class_count": count, "students": students}),
            f"Klassenanzahl {count}",
        )
        return True

    # ─── Gesamtzustand ────────────────────────────────────────────────────────

    def reset_data(self) -> None:
        """Schüler und Regeln leeren, Tags auf die eingebaute Menge zurücksetzen."""
        self._commit(
            self._state.model_copy(update={
                "students": [],
                "separation_rules": [],
                "tags": default_tags(),
            }),
            "Zurücksetzen",
        )

    def load_data(self, state: AppState) -> None:
        """Übernimmt einen vollständigen, bereits validierten Schnappschuss."""
        self._commit(state, "Schnappschuss geladen")

    def load_sample_data(self) -> list[Student]:
        """Ersetzt Schüler durch einen vollständig verteilten Beispiel-Jahrgang."""
        tags = default_tags()
        generator = SampleDataGenerator(rng=self.rng, ids=self.ids)
        students = generator.generate(self._state.class_count, self._state.school_level, tags)
        self._commit(
            self._state.model_copy(update={
                "students": students,
                "separation_rules": [],
                "tags": tags,
            }),
            f"Beispieldaten ({len(students)} Schüler)",
        )
        return students
