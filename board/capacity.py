"""Kapazitätsregel: Plätze pro Klasse je Schulstufe.

Nur beratend. move_student erzwingt sie nicht; Überbelegung wird lediglich in
der Statistik markiert.
"""

from config.defaults import MAX_CAPACITY
from config.schema import SchoolLevel


def capacity_for(level: SchoolLevel) -> int:
    """Maximale Schülerzahl pro Klasse für die Schulstufe."""
    return MAX_CAPACITY[SchoolLevel(level)]


def is_over_capacity(level: SchoolLevel, count: int) -> bool:
    return count > capacity_for(level)
