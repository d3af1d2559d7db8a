"""Tests für die KI-Analyse: Prompt, Client, Fehlertexte und Hintergrund-Runner."""

import json
import random
import threading
import time

import pytest
import requests

from analysis.gemini_client import (
    AnalysisFailure,
    GeminiClient,
    classify_error,
    failure_narrative,
    parse_report,
)
from analysis.report import (
    AnalysisReport,
    AnalysisRequest,
    SuggestedMove,
    apply_suggestion,
    build_prompt,
    mask_name,
    resolve_suggested_student,
)
from analysis.runner import AnalysisRunner
from board.board import ClassBoard, initial_state
from config.schema import AnalysisConfig


REPORT_PAYLOAD = {
    "overallScore": 72,
    "overallComment": "전반적으로 균형이 양호합니다.",
    "classes": [
        {"classId": "1", "riskScore": 60, "balanceScore": 70, "comment": "부담이 다소 큼"},
        {"classId": "2", "riskScore": 30, "balanceScore": 80, "comment": "양호"},
    ],
    "recommendations": ["1반의 휠체어 학생을 분산하세요."],
    "suggestedMoves": [
        {"studentName": "홍○동", "currentClass": "1", "targetClass": "2반", "reason": "부담 분산"},
    ],
    "predictedScore": 81,
}


@pytest.fixture
def board() -> ClassBoard:
    b = ClassBoard(initial_state(class_count=2), rng=random.Random(9))
    a = b.add_or_update_student("홍길동", "male", ["tag-wheelchair"])
    c = b.add_or_update_student("김영희", "female", ["tag-peer-helper"])
    b.add_or_update_student("남궁민수")
    b.move_student(a.id, "1")
    b.move_student(c.id, "1")
    b.add_separation_rule([a.id, c.id])
    return b


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str = ""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or json.dumps(payload or {})

    def json(self):
        if self._payload is None:
            raise ValueError("kein JSON")
        return self._payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


def _candidate(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


# ─── NAMEN UND PROMPT ─────────────────────────────────────────────────────────

class TestMaskName:
    @pytest.mark.parametrize("name,masked", [
        ("홍길동", "홍○동"),
        ("남궁민수", "남○민수"),
        ("이산", "이○"),
        ("김", "김"),
        ("", ""),
    ])
    def test_mask(self, name: str, masked: str):
        assert mask_name(name) == masked


class TestPrompt:
    def test_names_masked(self, board: ClassBoard):
        prompt = build_prompt(AnalysisRequest.from_state(board.state))
        assert "홍길동" not in prompt
        assert "홍○동" in prompt
        assert "남○민수" in prompt

    def test_contains_settings_and_classes(self, board: ClassBoard):
        prompt = build_prompt(AnalysisRequest.from_state(board.state))
        assert "총 학급 수: 2개" in prompt
        assert "반 정원 제한: 6명" in prompt
        assert "[1반] (총 2명 - 남:1 / 여:1)" in prompt
        assert "[2반] (총 0명" in prompt

    def test_tags_split_by_relief(self, board: ClassBoard):
        prompt = build_prompt(AnalysisRequest.from_state(board.state))
        burden_line = next(l for l in prompt.splitlines() if l.startswith("1. 부담 가중"))
        relief_line = next(l for l in prompt.splitlines() if l.startswith("2. 부담 경감"))
        assert "휠체어" in burden_line
        assert "교사보조가능" in relief_line

    def test_rules_listed(self, board: ClassBoard):
        prompt = build_prompt(AnalysisRequest.from_state(board.state))
        assert "1. 홍○동, 김○희" in prompt


# ─── FEHLERKLASSIFIKATION ─────────────────────────────────────────────────────

class TestClassifyError:
    def test_referrer(self):
        assert classify_error("API_KEY_HTTP_REFERRER_BLOCKED") == AnalysisFailure.REFERRER_BLOCKED
        assert classify_error("403 Requests from referer are blocked") == \
            AnalysisFailure.REFERRER_BLOCKED

    def test_quota(self):
        assert classify_error("429 RESOURCE_EXHAUSTED") == AnalysisFailure.QUOTA_EXCEEDED

    def test_other(self):
        assert classify_error("500 internal") == AnalysisFailure.TRANSPORT

    def test_narrative_contains_detail(self):
        assert "kaputt" in failure_narrative(AnalysisFailure.TRANSPORT, "kaputt")


# ─── CLIENT ───────────────────────────────────────────────────────────────────

class TestGeminiClient:
    def test_no_api_key(self, board: ClassBoard):
        session = FakeSession()
        client = GeminiClient(api_key="", session=session)
        result = client.analyze(AnalysisRequest.from_state(board.state))
        assert result == failure_narrative(AnalysisFailure.NO_CREDENTIALS)
        assert session.calls == []

    def test_success(self, board: ClassBoard):
        session = FakeSession(FakeResponse(payload=_candidate(json.dumps(REPORT_PAYLOAD))))
        config = AnalysisConfig(model="test-model", timeout_seconds=30)
        client = GeminiClient(config, api_key="secret", session=session)
        result = client.analyze(AnalysisRequest.from_state(board.state))

        assert isinstance(result, AnalysisReport)
        assert result.overall_score == 72
        assert result.suggested_moves[0].student_name == "홍○동"
        call = session.calls[0]
        assert call["url"].endswith("/test-model:generateContent")
        assert call["headers"]["x-goog-api-key"] == "secret"
        assert call["timeout"] == 30
        assert call["json"]["generationConfig"]["responseMimeType"] == "application/json"

    def test_quota_error(self, board: ClassBoard):
        session = FakeSession(FakeResponse(429, text="RESOURCE_EXHAUSTED"))
        result = GeminiClient(api_key="k", session=session).analyze(
            AnalysisRequest.from_state(board.state))
        assert result == failure_narrative(AnalysisFailure.QUOTA_EXCEEDED)

    def test_transport_error_never_raises(self, board: ClassBoard):
        session = FakeSession(exc=requests.ConnectionError("Verbindung abgelehnt"))
        result = GeminiClient(api_key="k", session=session).analyze(
            AnalysisRequest.from_state(board.state))
        assert isinstance(result, str)
        assert "Verbindung abgelehnt" in result

    def test_empty_response(self, board: ClassBoard):
        session = FakeSession(FakeResponse(payload={"candidates": []}))
        result = GeminiClient(api_key="k", session=session).analyze(
            AnalysisRequest.from_state(board.state))
        assert result == failure_narrative(AnalysisFailure.EMPTY_RESPONSE)

    def test_parse_report_malformed(self):
        result = parse_report('{"overallScore": 1}')
        assert isinstance(result, str)
        assert "형식 오류" in result

    def test_board_untouched(self, board: ClassBoard):
        before = board.state
        session = FakeSession(FakeResponse(payload=_candidate(json.dumps(REPORT_PAYLOAD))))
        GeminiClient(api_key="k", session=session).analyze(AnalysisRequest.from_state(board.state))
        assert board.state is before


# ─── VORSCHLÄGE ───────────────────────────────────────────────────────────────

class TestSuggestions:
    def test_resolve_masked_name(self, board: ClassBoard):
        s = resolve_suggested_student(board.students, "홍○동")
        assert s is not None and s.name == "홍길동"
        assert resolve_suggested_student(board.students, "없는사람") is None

    def test_apply_suggestion_moves_via_board(self, board: ClassBoard):
        move = SuggestedMove(studentName="홍○동", currentClass="1", targetClass="2반", reason="")
        depth = len(board.history)
        assert apply_suggestion(board, move) is True
        hong = resolve_suggested_student(board.students, "홍길동")
        assert hong.assigned_class_id == "2"
        assert len(board.history) == depth + 1
        assert board.conflicts() == set()

    def test_apply_suggestion_to_pool(self, board: ClassBoard):
        move = SuggestedMove(studentName="김영희", currentClass="1", targetClass="미배정", reason="")
        assert apply_suggestion(board, move) is True
        assert resolve_suggested_student(board.students, "김영희").assigned_class_id is None

    def test_apply_unknown_student(self, board: ClassBoard):
        move = SuggestedMove(studentName="없음", currentClass="1", targetClass="2", reason="")
        assert apply_suggestion(board, move) is False

    def test_ambiguous_masked_name_not_applied(self):
        """김민준 und 김서준 maskieren beide zu 김○준 → kein Schüler wird verschoben."""
        b = ClassBoard(initial_state(class_count=2), rng=random.Random(1))
        minjun = b.add_or_update_student("김민준")
        seojun = b.add_or_update_student("김서준")
        depth = len(b.history)

        assert resolve_suggested_student(b.students, "김○준") is None
        move = SuggestedMove(studentName="김○준", currentClass="미배정", targetClass="2", reason="")
        assert apply_suggestion(b, move) is False
        assert b.get_student(minjun.id).assigned_class_id is None
        assert b.get_student(seojun.id).assigned_class_id is None
        assert len(b.history) == depth

    def test_exact_name_wins_over_masked(self):
        b = ClassBoard(initial_state(class_count=2), rng=random.Random(1))
        b.add_or_update_student("김민준")
        literal = b.add_or_update_student("김○준")
        assert resolve_suggested_student(b.students, "김○준") is literal


# ─── RUNNER ───────────────────────────────────────────────────────────────────

class GatedClient:
    """Client, dessen Antworten einzeln freigegeben werden."""

    def __init__(self):
        self.gates: list[threading.Event] = []
        self.started = threading.Semaphore(0)

    def analyze(self, request: AnalysisRequest):
        gate = threading.Event()
        self.gates.append(gate)
        self.started.release()
        gate.wait(timeout=5)
        return f"Ergebnis für {request.class_count} Klassen"


class TestAnalysisRunner:
    def test_delivers_result(self, board: ClassBoard):
        client = GatedClient()
        received = []
        runner = AnalysisRunner(client, on_result=received.append)
        future = runner.submit(board.state)
        assert client.started.acquire(timeout=5)
        client.gates[0].set()
        future.result(timeout=5)
        runner.shutdown()
        assert received == ["Ergebnis für 2 Klassen"]
        assert runner.latest_result == "Ergebnis für 2 Klassen"

    def test_stale_result_discarded(self, board: ClassBoard):
        """Nur das Ergebnis der jüngsten Anfrage wird ausgeliefert."""
        client = GatedClient()
        received = []
        runner = AnalysisRunner(client, on_result=received.append)

        old = runner.submit(board.state)
        assert client.started.acquire(timeout=5)
        board.set_class_count(4)
        new = runner.submit(board.state)
        assert client.started.acquire(timeout=5)

        client.gates[1].set()
        new.result(timeout=5)
        client.gates[0].set()
        old.result(timeout=5)
        runner.shutdown()

        assert received == ["Ergebnis für 4 Klassen"]

    def test_snapshot_taken_at_submit(self, board: ClassBoard):
        client = GatedClient()
        runner = AnalysisRunner(client)
        future = runner.submit(board.state)
        assert client.started.acquire(timeout=5)
        board.set_class_count(5)
        client.gates[0].set()
        assert future.result(timeout=5) == "Ergebnis für 2 Klassen"
        runner.shutdown()

    def test_submit_while_delivery_waits_wins(self, board: ClassBoard):
        """Eine Anfrage, die vor der Übernahme eintrifft, macht das ältere Ergebnis ungültig."""
        client = GatedClient()
        received = []
        runner = AnalysisRunner(client, on_result=received.append)

        old = runner.submit(board.state)
        assert client.started.acquire(timeout=5)
        with runner._lock:
            client.gates[0].set()
            time.sleep(0.05)   # Worker wartet jetzt auf die Sperre
            board.set_class_count(3)
            new = runner.submit(board.state)
        assert client.started.acquire(timeout=5)
        client.gates[1].set()
        old.result(timeout=5)
        new.result(timeout=5)
        runner.shutdown()

        assert received == ["Ergebnis für 3 Klassen"]
        assert runner.latest_result == "Ergebnis für 3 Klassen"

    def test_callback_may_submit_again(self, board: ClassBoard):
        client = GatedClient()
        received = []
        runner = AnalysisRunner(client)

        def resubmit(result):
            received.append(result)
            if len(received) == 1:
                runner.submit(board.state)

        runner.on_result = resubmit
        first = runner.submit(board.state)
        assert client.started.acquire(timeout=5)
        client.gates[0].set()
        first.result(timeout=5)
        assert client.started.acquire(timeout=5)
        client.gates[1].set()
        runner.shutdown()

        assert len(received) == 2
