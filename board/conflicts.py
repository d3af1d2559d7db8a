"""Konflikterkennung für Trennungsregeln.

Reine Funktionen ohne Seiteneffekte. Das Ergebnis wird bei Bedarf neu
berechnet (z.B. für Warnsymbole) und nicht zwischengespeichert.
"""

from itertools import combinations
from typing import Iterable

from models.student import Student
from models.separation_rule import SeparationRule

ConflictPair = tuple[str, str]


def _pair(a: str, b: str) -> ConflictPair:
    """Ungeordnetes Paar in kanonischer Reihenfolge."""
    return (a, b) if a <= b else (b, a)


def detect_conflicts(
    students: Iterable[Student], rules: Iterable[SeparationRule]
) -> set[ConflictPair]:
    """Alle Schülerpaare, die gemeinsam in einer Regel und derselben Klasse sind.

    Schüler ohne Klasse verletzen keine Regel. Unbekannte IDs in einer Regel
    werden ignoriert. Paare sind kanonisch sortiert: (min_id, max_id).
    """
    placement = {s.id: s.assigned_class_id for s in students}
    conflicts: set[ConflictPair] = set()
    for rule in rules:
        for a, b in combinations(rule.student_ids, 2):
            class_a = placement.get(a)
            if class_a is None:
                continue
            if class_a == placement.get(b):
                conflicts.add(_pair(a, b))
    return conflicts


def conflicting_student_ids(
    students: Iterable[Student], rules: Iterable[SeparationRule]
) -> set[str]:
    """Alle Schüler-IDs, die an mindestens einem Konflikt beteiligt sind."""
    ids: set[str] = set()
    for a, b in detect_conflicts(students, rules):
        ids.add(a)
        ids.add(b)
    return ids


def conflicts_by_rule(
    students: Iterable[Student], rules: Iterable[SeparationRule]
) -> dict[str, set[ConflictPair]]:
    """Konflikte gruppiert nach Regel-ID (nur Regeln mit Verletzungen)."""
    students = list(students)
    result: dict[str, set[ConflictPair]] = {}
    for rule in rules:
        pairs = detect_conflicts(students, [rule])
        if pairs:
            result[rule.id] = pairs
    return result
