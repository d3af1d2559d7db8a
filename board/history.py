"""Undo/Redo-Verlauf auf Basis vollständiger Schnappschüsse.

Zwei unbegrenzte Stapel: past (ältester zuerst) und future (nächster Redo-
Schritt zuerst). Da AppState unveränderlich ist, teilen sich die
Schnappschüsse unveränderte Schüler-, Tag- und Regelobjekte.
"""

from typing import Optional

from models.app_state import AppState


class History:
    """Linearer Verlauf ohne Verzweigungen."""

    def __init__(self) -> None:
        self.past: list[AppState] = []
        self.future: list[AppState] = []

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def snapshot(self, current: AppState) -> None:
        """Merkt den Zustand VOR einer Änderung; verwirft alle Redo-Schritte."""
        self.past.append(current)
        self.future.clear()

    def undo(self, current: AppState) -> Optional[AppState]:
        """Liefert den vorherigen Zustand oder None am Anfang des Verlaufs."""
        if not self.past:
            return None
        previous = self.past.pop()
        self.future.insert(0, current)
        return previous

    def redo(self, current: AppState) -> Optional[AppState]:
        """Liefert den nächsten Zustand oder None am Ende des Verlaufs."""
        if not self.future:
            return None
        nxt = self.future.pop(0)
        self.past.append(current)
        return nxt

    def clear(self) -> None:
        self.past.clear()
        self.future.clear()

    def __len__(self) -> int:
        return len(self.past)
