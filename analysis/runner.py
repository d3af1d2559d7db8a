"""Asynchrone KI-Analyse nach dem Prinzip "abschicken und vergessen".

Jede Anfrage arbeitet auf einem Schnappschuss vom Zeitpunkt des Absendens;
das Brett bleibt währenddessen voll bedienbar. Eine neue Anfrage macht alle
älteren Ergebnisse ungültig: sie werden beim Eintreffen verworfen, nicht
abgebrochen.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, Union

from models.app_state import AppState
from analysis.report import AnalysisReport, AnalysisRequest

logger = logging.getLogger(__name__)

AnalysisResult = Union[AnalysisReport, str]


class AnalysisRunner:
    """Führt Analysen im Hintergrund aus und liefert nur das jüngste Ergebnis."""

    def __init__(self, client, on_result: Optional[Callable[[AnalysisResult], None]] = None,
                 max_workers: int = 2) -> None:
        self.client = client
        self.on_result = on_result
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix="analysis")
        self._lock = threading.RLock()
        self._generation = 0
        self.latest_result: Optional[AnalysisResult] = None

    def submit(self, state: AppState) -> Future:
        """Startet eine Analyse für den aktuellen Zustand."""
        request = AnalysisRequest.from_state(state)
        with self._lock:
            self._generation += 1
            generation = self._generation
        future = self._executor.submit(self.client.analyze, request)
        future.add_done_callback(lambda f: self._deliver(generation, f))
        return future

    def _deliver(self, generation: int, future: Future) -> None:
        exc = future.exception()
        if exc is not None:
            result: AnalysisResult = f"⚠️ **AI 분석 중 오류 발생**\n\n오류 내용: {exc}"
        else:
            result = future.result()

        # Prüfung, Übernahme und Rückruf unter derselben Sperre
        with self._lock:
            if generation != self._generation:
                logger.info("Veraltetes Analyseergebnis #%d verworfen", generation)
                return
            self.latest_result = result
            if self.on_result is not None:
                self.on_result(result)
        if exc is not None:
            logger.warning("Analyse #%d fehlgeschlagen: %s", generation, exc)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
