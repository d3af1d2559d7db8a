"""Gemeinsame Hilfsfunktionen für Excel-Export und Konsolenausgabe."""

from datetime import date
from typing import Optional

from config.defaults import TAG_COLOR_HEX
from models.student import Gender, Student
from models.tag import Tag

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "header":     "4472C4",
    "male":       "DBEAFE",
    "female":     "FCE7F3",
    "unknown":    "F5F5F5",
    "conflict":   "FF9999",
    "over":       "FFCCCC",
    "unassigned": "E0E0E0",
    "tag":        "E0E0E0",
}

GENDER_LABELS: dict[Optional[Gender], str] = {
    Gender.MALE: "남",
    Gender.FEMALE: "여",
    None: "",
}


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def class_title(class_id: Optional[str]) -> str:
    """Anzeigename einer Klasse ("1반") bzw. des Pools ("미배정")."""
    return f"{class_id}반" if class_id is not None else "미배정"


def tag_hex(tag: Tag) -> str:
    """Hex-Füllfarbe für die Tailwind-Hintergrundklasse eines Tags."""
    return TAG_COLOR_HEX.get(tag.color_bg, COLORS["tag"])


def tag_labels(student: Student, tag_map: dict[str, Tag]) -> list[str]:
    """Bezeichnungen der Tags eines Schülers; verwaiste IDs werden übersprungen."""
    return [tag_map[tid].label for tid in student.tag_ids if tid in tag_map]


def format_student(student: Student, tag_map: dict[str, Tag],
                   with_tags: bool = True) -> str:
    """Formatiert einen Schüler als "Name (남, 휠체어, 분쇄식)"."""
    info = []
    gender = GENDER_LABELS.get(student.gender, "")
    if gender:
        info.append(gender)
    if with_tags:
        info.extend(tag_labels(student, tag_map))
    return f"{student.name} ({', '.join(info)})" if info else student.name
