from config.schema import (
    AnalysisConfig,
    BoardConfig,
    SchoolLevel,
    StorageConfig,
)
from models.tag import Tag


# ─── Kapazität pro Klasse ─────────────────────────────────────────────────────
# Förderschul-Klassengrößen: Primar-/Sekundarstufe I 6, Oberstufe 7 Plätze.

MAX_CAPACITY: dict[SchoolLevel, int] = {
    SchoolLevel.ELEMENTARY_MIDDLE: 6,
    SchoolLevel.HIGH: 7,
}

SCHOOL_LEVEL_LABELS: dict[SchoolLevel, str] = {
    SchoolLevel.ELEMENTARY_MIDDLE: "초/중등",
    SchoolLevel.HIGH: "고등",
}


# ─── Farbpalette (Tailwind-Klassen bg/text) ──────────────────────────────────

TAG_COLORS: list[tuple[str, str]] = [
    ("bg-red-100", "text-red-800"),
    ("bg-orange-100", "text-orange-800"),
    ("bg-amber-100", "text-amber-800"),
    ("bg-yellow-100", "text-yellow-800"),
    ("bg-lime-100", "text-lime-800"),
    ("bg-green-100", "text-green-800"),
    ("bg-emerald-100", "text-emerald-800"),
    ("bg-teal-100", "text-teal-800"),
    ("bg-cyan-100", "text-cyan-800"),
    ("bg-sky-100", "text-sky-800"),
    ("bg-blue-100", "text-blue-800"),
    ("bg-indigo-100", "text-indigo-800"),
    ("bg-violet-100", "text-violet-800"),
    ("bg-purple-100", "text-purple-800"),
    ("bg-fuchsia-100", "text-fuchsia-800"),
    ("bg-pink-100", "text-pink-800"),
]

# Tailwind-Hintergrund → RRGGBB (für Excel-Füllungen)
TAG_COLOR_HEX: dict[str, str] = {
    "bg-red-100": "FEE2E2",
    "bg-orange-100": "FFEDD5",
    "bg-amber-100": "FEF3C7",
    "bg-yellow-100": "FEF9C3",
    "bg-lime-100": "ECFCCB",
    "bg-green-100": "DCFCE7",
    "bg-emerald-100": "D1FAE5",
    "bg-teal-100": "CCFBF1",
    "bg-cyan-100": "CFFAFE",
    "bg-sky-100": "E0F2FE",
    "bg-blue-100": "DBEAFE",
    "bg-indigo-100": "E0E7FF",
    "bg-violet-100": "EDE9FE",
    "bg-purple-100": "F3E8FF",
    "bg-fuchsia-100": "FAE8FF",
    "bg-pink-100": "FCE7F3",
}


# ─── Eingebaute Tags ──────────────────────────────────────────────────────────
# Förderbedarfs-Merkmale. "relief" = entlastet die Lehrkraft eher, statt sie
# zusätzlich zu fordern.

BUILTIN_TAG_METADATA: dict[str, dict] = {
    "tag-wheelchair":   {"label": "휠체어",     "color": 10, "relief": False},
    "tag-walking":      {"label": "보행지원",   "color": 9,  "relief": False},
    "tag-toilet":       {"label": "화장실지원", "color": 3,  "relief": False},
    "tag-pureed-meal":  {"label": "분쇄식",     "color": 7,  "relief": False},
    "tag-parent-care":  {"label": "학부모예민", "color": 15, "relief": False},
    "tag-absence":      {"label": "잦은결석",   "color": 5,  "relief": True},
    "tag-peer-helper":  {"label": "교사보조가능", "color": 12, "relief": True},
}

RELIEF_TAG_IDS: frozenset[str] = frozenset(
    tag_id for tag_id, meta in BUILTIN_TAG_METADATA.items() if meta["relief"]
)


def default_tags() -> list[Tag]:
    """Eingebaute Tag-Menge (Ausgangszustand und Ziel von reset/sample)."""
    tags = []
    for tag_id, meta in BUILTIN_TAG_METADATA.items():
        bg, text = TAG_COLORS[meta["color"]]
        tags.append(Tag(id=tag_id, label=meta["label"], color_bg=bg, color_text=text))
    return tags


# ─── Namens-Listen für Beispieldaten ──────────────────────────────────────────

SAMPLE_LAST_NAMES = [
    "김", "이", "박", "최", "정", "강", "조", "윤", "장", "임", "한", "오", "서",
    "신", "권", "황", "안", "송", "전", "홍", "문", "손", "배", "백", "허",
]

SAMPLE_FIRST_NAMES = [
    "민준", "서준", "도윤", "예준", "시우", "하준", "지호", "주원", "지후", "준우",
    "서윤", "서연", "지우", "지유", "하윤", "서현", "민서", "하은", "지아", "수아",
    "은지", "지원", "현우", "민재", "채원", "다은", "가은", "준영", "현준", "예은",
    "유진", "시현", "건우", "우진", "민규", "예원", "윤우", "서아", "연우", "하율",
    "다인", "연주", "승우", "지민", "유나", "가윤", "시은", "준호", "동현",
]

# Versuche, bevor auf "학생{n}" ausgewichen wird
SAMPLE_NAME_ATTEMPTS = 50


def default_board_config() -> BoardConfig:
    """Vollständige Standardkonfiguration."""
    return BoardConfig(
        default_school_level=SchoolLevel.ELEMENTARY_MIDDLE,
        default_class_count=3,
        storage=StorageConfig(),
        analysis=AnalysisConfig(),
    )
