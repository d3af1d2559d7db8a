"""Datentypen und Prompt für die KI-Analyse der Klasseneinteilung.

Der Analysedienst ist eine Blackbox: Er erhält einen schreibgeschützten
Schnappschuss und liefert entweder einen AnalysisReport oder einen
lesbaren Fehlertext. Vorgeschlagene Verschiebungen werden nie automatisch
angewendet, sondern laufen bei Bedarf über ClassBoard.move_student().
"""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from config.defaults import MAX_CAPACITY, RELIEF_TAG_IDS
from config.schema import SchoolLevel
from models.app_state import AppState
from models.separation_rule import SeparationRule
from models.student import Gender, Student
from models.tag import Tag

logger = logging.getLogger(__name__)

# Bezeichnung des Pools ohne Klasse in Antworten des Dienstes
UNASSIGNED_LABEL = "미배정"


def mask_name(name: str) -> str:
    """Anonymisiert einen Namen: 홍길동 → 홍○동, 남궁민수 → 남○민수, 이산 → 이○."""
    if not name:
        return ""
    if len(name) <= 1:
        return name
    if len(name) == 2:
        return name[0] + "○"
    return name[0] + "○" + name[2:]


# ─── Anfrage ──────────────────────────────────────────────────────────────────

class AnalysisRequest(BaseModel):
    """Schreibgeschützter Schnappschuss zum Zeitpunkt der Anfrage."""

    model_config = ConfigDict(frozen=True)

    students: list[Student]
    tags: list[Tag]
    separation_rules: list[SeparationRule]
    class_count: int
    school_level: SchoolLevel

    @classmethod
    def from_state(cls, state: AppState) -> "AnalysisRequest":
        return cls(
            students=state.students,
            tags=state.tags,
            separation_rules=state.separation_rules,
            class_count=state.class_count,
            school_level=state.school_level,
        )


# ─── Antwort ──────────────────────────────────────────────────────────────────

class ClassAssessment(BaseModel):
    """Bewertung einer einzelnen Klasse."""

    model_config = ConfigDict(populate_by_name=True)

    class_id: str = Field(alias="classId")
    risk_score: float = Field(alias="riskScore")        # 0–100, höher = belastender
    balance_score: float = Field(alias="balanceScore")  # 0–100, höher = ausgewogener
    comment: str


class SuggestedMove(BaseModel):
    """Vorschlag: Schüler in eine andere Klasse verschieben."""

    model_config = ConfigDict(populate_by_name=True)

    student_name: str = Field(alias="studentName")   # ggf. maskiert
    current_class: str = Field(alias="currentClass")
    target_class: str = Field(alias="targetClass")
    reason: str


class AnalysisReport(BaseModel):
    """Strukturierte Antwort des Analysedienstes."""

    model_config = ConfigDict(populate_by_name=True)

    overall_score: float = Field(alias="overallScore")
    overall_comment: str = Field(alias="overallComment")
    classes: list[ClassAssessment]
    recommendations: list[str]
    suggested_moves: list[SuggestedMove] = Field(alias="suggestedMoves")
    predicted_score: Optional[float] = Field(None, alias="predictedScore")


# Antwortschema für den Dienst (OpenAPI-Untermenge der Gemini-REST-API)
RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "overallScore": {
            "type": "NUMBER",
            "description": "전체적인 반 편성 균형 점수 (0~100점). 높을수록 좋음.",
        },
        "overallComment": {
            "type": "STRING",
            "description": "전체적인 편성 상태에 대한 종합적인 평가 및 총평 (3~4문장).",
        },
        "classes": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "classId": {"type": "STRING", "description": "반 번호 (예: '1')"},
                    "riskScore": {
                        "type": "NUMBER",
                        "description": "해당 반의 지도 난이도/위험도 점수 (0~100점). 높을수록 교사의 부담이 큼.",
                    },
                    "balanceScore": {
                        "type": "NUMBER",
                        "description": "해당 반의 구성원 조화 및 균형 점수 (0~100점). 높을수록 좋음.",
                    },
                    "comment": {"type": "STRING", "description": "해당 반에 대한 상세 분석 코멘트."},
                },
                "required": ["classId", "riskScore", "balanceScore", "comment"],
            },
        },
        "recommendations": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "전반적인 개선 제안 사항",
        },
        "suggestedMoves": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "studentName": {"type": "STRING", "description": "이동 대상 학생의 이름 (제공된 이름 그대로 사용)"},
                    "currentClass": {"type": "STRING", "description": f"현재 반 (미배정인 경우 '{UNASSIGNED_LABEL}')"},
                    "targetClass": {"type": "STRING", "description": "이동할 목표 반"},
                    "reason": {"type": "STRING", "description": "이동 제안 사유"},
                },
                "required": ["studentName", "currentClass", "targetClass", "reason"],
            },
            "description": "균형을 맞추기 위해 이동이 필요한 학생들의 목록",
        },
        "predictedScore": {
            "type": "NUMBER",
            "description": "제안된 이동을 모두 수행했을 때 예상되는 전체 균형 점수",
        },
    },
    "required": ["overallScore", "overallComment", "classes", "recommendations", "suggestedMoves"],
}


# ─── Prompt ───────────────────────────────────────────────────────────────────

def _gender_short(student: Student) -> str:
    if student.gender == Gender.FEMALE:
        return "여"
    if student.gender == Gender.MALE:
        return "남"
    return ""


def _describe_student(student: Student, tag_map: dict[str, Tag]) -> str:
    info = []
    gender = _gender_short(student)
    if gender:
        info.append(gender)
    info.extend(tag_map[tid].label for tid in student.tag_ids if tid in tag_map)
    return f"{mask_name(student.name)}({', '.join(info)})"


def build_prompt(request: AnalysisRequest) -> str:
    """Erzeugt den Analyse-Prompt; Namen werden nur maskiert übertragen."""
    tag_map = {t.id: t for t in request.tags}
    limit = MAX_CAPACITY[request.school_level]
    level_text = (
        f"초/중학교 (정원 {limit}명)" if request.school_level == SchoolLevel.ELEMENTARY_MIDDLE
        else f"고등학교 (정원 {limit}명)"
    )
    burden = [t.label for t in request.tags if t.id not in RELIEF_TAG_IDS]
    relief = [t.label for t in request.tags if t.id in RELIEF_TAG_IDS]

    class_blocks = []
    for i in range(1, request.class_count + 1):
        cid = str(i)
        members = [s for s in request.students if s.assigned_class_id == cid]
        males = sum(1 for s in members if s.gender == Gender.MALE)
        females = sum(1 for s in members if s.gender == Gender.FEMALE)
        roster = " / ".join(_describe_student(s, tag_map) for s in members)
        class_blocks.append(
            f"[{cid}반] (총 {len(members)}명 - 남:{males} / 여:{females})\n"
            f"학생들: {roster}"
        )

    unassigned = [s for s in request.students if s.assigned_class_id is None]
    unassigned_text = ", ".join(_describe_student(s, tag_map) for s in unassigned) or "없음"

    names = {s.id: s.name for s in request.students}
    rule_lines = []
    for idx, rule in enumerate(request.separation_rules, 1):
        members = [mask_name(names[sid]) for sid in rule.student_ids if sid in names]
        rule_lines.append(f"{idx}. {', '.join(members)}")
    rules_text = "\n".join(rule_lines) or "없음"

    return f"""당신은 특수학교 반편성 전문가입니다.
현재 반 편성 상황을 분석하고, 개선이 필요하다면 구체적인 학생 이동 제안을 포함한 리포트를 JSON 형식으로 제공해주세요.

**설정 정보:**
- 학교 급: {level_text}
- 총 학급 수: {request.class_count}개
- 반 정원 제한: {limit}명

**특성 Tag 해석 가이드:**
1. 부담 가중 요소: {', '.join(burden) or '없음'} -> 교사의 지도 부담을 높임. 특정 반에 몰리면 안 됨.
2. 부담 경감 요소: {', '.join(relief) or '없음'} -> 지도 부담을 다소 완화함.
3. 목표: 모든 반의 Risk Score를 비슷하게 유지, 성별 균형 고려, 분리 배정 규칙 준수 필수

**현재 편성 현황:**
{chr(10).join(class_blocks)}

**{UNASSIGNED_LABEL} 학생:**
{unassigned_text}

**분리 배정 규칙(서로 같은 반이 되면 안됨):**
{rules_text}

**요청 사항:**
1. 현재 상태의 점수(overallScore)와 반별 점수를 계산하세요.
2. 불균형이 심하거나 {UNASSIGNED_LABEL} 학생이 있다면 suggestedMoves 배열에 구체적인 이동/배정 제안을 담아주세요.
3. 제안된 이동을 적용했을 때 예상되는 predictedScore를 예측해주세요.
"""


# ─── Vorschläge anwenden ──────────────────────────────────────────────────────

def resolve_suggested_student(students: list[Student], name: str) -> Optional[Student]:
    """Findet den Schüler zu einem (ggf. maskierten) Namen aus der Antwort.

    Ein exakter Name hat Vorrang vor dem maskierten. Passen mehrere Schüler,
    ist der Vorschlag mehrdeutig und es wird None geliefert.
    """
    exact = [s for s in students if s.name == name]
    if exact:
        return exact[0] if len(exact) == 1 else None
    masked = [s for s in students if mask_name(s.name) == name]
    if len(masked) == 1:
        return masked[0]
    if masked:
        logger.warning("Maskierter Name %r passt auf %d Schüler", name, len(masked))
    return None


def apply_suggestion(board, move: SuggestedMove) -> bool:
    """Wendet einen Vorschlag über die normale Änderungs-API an.

    Gibt False zurück, wenn der Schüler nicht eindeutig gefunden wurde oder
    sich nichts ändert.
    """
    student = resolve_suggested_student(board.students, move.student_name)
    if student is None:
        logger.warning("Vorschlag für unbekannten oder mehrdeutigen Schüler %r ignoriert", move.student_name)
        return False
    target = move.target_class.strip().removesuffix("반")
    if target == UNASSIGNED_LABEL:
        target = None
    return board.move_student(student.id, target)
