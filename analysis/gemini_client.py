"""Client für den Gemini-Analysedienst (REST über requests).

analyze() wirft nie: Jeder Fehler wird klassifiziert und als lesbarer Text
zurückgegeben. Das Brett bleibt davon in jedem Fall unberührt.
"""

import json
import logging
import os
from enum import Enum
from typing import Optional, Union

import requests
from pydantic import ValidationError

from config.schema import AnalysisConfig
from analysis.report import (
    RESPONSE_SCHEMA,
    AnalysisReport,
    AnalysisRequest,
    build_prompt,
)

logger = logging.getLogger(__name__)


class AnalysisFailure(str, Enum):
    NO_CREDENTIALS = "no_credentials"
    REFERRER_BLOCKED = "referrer_blocked"
    QUOTA_EXCEEDED = "quota_exceeded"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_RESPONSE = "empty_response"


_NARRATIVES: dict[AnalysisFailure, str] = {
    AnalysisFailure.NO_CREDENTIALS: (
        "🚫 **API 키 미설정**\n\n"
        "시스템 설정에서 API 키를 확인할 수 없습니다. 관리자에게 문의하거나 설정을 확인해주세요."
    ),
    AnalysisFailure.REFERRER_BLOCKED: (
        "🚫 **API 키 설정 오류**\n\n"
        "현재 도메인(Referer)이 API 키 허용 목록에 포함되지 않았습니다.\n"
        "Google Cloud Console 또는 AI Studio에서 API 키 설정을 확인해주세요."
    ),
    AnalysisFailure.QUOTA_EXCEEDED: (
        "⚠️ **API 사용량 초과**\n\n잠시 후 다시 시도해 주세요. (Quota Exceeded)"
    ),
    AnalysisFailure.TRANSPORT: (
        "⚠️ **AI 분석 중 오류 발생**\n\n오류 내용: {detail}\n\n"
        "잠시 후 다시 시도하거나, 문제가 지속되면 관리자에게 문의하세요."
    ),
    AnalysisFailure.MALFORMED_RESPONSE: (
        "⚠️ **분석 결과 형식 오류**\n\n응답을 해석할 수 없습니다.\n\n{detail}"
    ),
    AnalysisFailure.EMPTY_RESPONSE: "분석 결과를 생성할 수 없습니다.",
}


def classify_error(message: str) -> AnalysisFailure:
    """Ordnet eine Fehlermeldung des Dienstes einer Fehlerart zu."""
    if (
        "API_KEY_HTTP_REFERRER_BLOCKED" in message
        or "Requests from referer" in message
        or ("403" in message and "blocked" in message)
    ):
        return AnalysisFailure.REFERRER_BLOCKED
    if "429" in message or "Quota" in message or "RESOURCE_EXHAUSTED" in message:
        return AnalysisFailure.QUOTA_EXCEEDED
    return AnalysisFailure.TRANSPORT


def failure_narrative(kind: AnalysisFailure, detail: str = "") -> str:
    return _NARRATIVES[kind].format(detail=detail)


def _extract_text(payload: dict) -> Optional[str]:
    """Text des ersten Kandidaten aus einer generateContent-Antwort."""
    try:
        parts = payload["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return None
    text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
    return text or None


class GeminiClient:
    """Schickt eine AnalysisRequest an Gemini und liefert Report oder Fehlertext."""

    def __init__(self, config: Optional[AnalysisConfig] = None,
                 api_key: Optional[str] = None,
                 session: Optional[requests.Session] = None) -> None:
        self.config = config or AnalysisConfig()
        self.api_key = api_key if api_key is not None else os.environ.get(self.config.api_key_env, "")
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.config.endpoint}/{self.config.model}:generateContent"

    def _body(self, request: AnalysisRequest) -> dict:
        return {
            "contents": [{"role": "user", "parts": [{"text": build_prompt(request)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }

    def analyze(self, request: AnalysisRequest) -> Union[AnalysisReport, str]:
        """Führt die Analyse aus. Gibt nie eine Exception weiter."""
        if not self.api_key:
            logger.warning("KI-Analyse ohne API-Schlüssel (%s)", self.config.api_key_env)
            return failure_narrative(AnalysisFailure.NO_CREDENTIALS)

        try:
            resp = self.session.post(
                self.url,
                headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
                json=self._body(request),
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.warning("KI-Analyse: Transportfehler: %s", e)
            return failure_narrative(classify_error(str(e)), detail=str(e))

        if resp.status_code >= 400:
            message = f"{resp.status_code} {resp.text}"
            kind = classify_error(message)
            logger.warning("KI-Analyse fehlgeschlagen (%s): %s", kind.value, message[:200])
            return failure_narrative(kind, detail=message)

        try:
            text = _extract_text(resp.json())
        except ValueError as e:
            return failure_narrative(AnalysisFailure.MALFORMED_RESPONSE, detail=str(e))
        if text is None:
            return failure_narrative(AnalysisFailure.EMPTY_RESPONSE)

        return parse_report(text)


def parse_report(text: str) -> Union[AnalysisReport, str]:
    """JSON-Antworttext → AnalysisReport; bei Formfehlern ein Fehlertext."""
    try:
        return AnalysisReport.model_validate(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning("KI-Analyse: Antwort nicht auswertbar: %s", e)
        return failure_narrative(AnalysisFailure.MALFORMED_RESPONSE, detail=text)
