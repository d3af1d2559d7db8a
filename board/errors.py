"""Fehlerklassen des Klassenbretts.

Validierungsfehler werden synchron an den Aufrufer gemeldet; der Zustand
bleibt dabei unverändert. Operationen auf nicht (mehr) vorhandene IDs sind
dagegen stille No-Ops und lösen keinen Fehler aus.
"""


class BoardError(Exception):
    """Basisklasse aller Brett-Fehler."""


class BoardValidationError(BoardError, ValueError):
    """Eingabe abgelehnt, keine Zustandsänderung."""


class EmptyNameError(BoardValidationError):
    """Name bzw. Bezeichnung ist nach dem Trimmen leer."""


class DuplicateTagError(BoardValidationError):
    """Ein Tag mit dieser Bezeichnung existiert bereits."""

    def __init__(self, label: str):
        super().__init__(f"Tag '{label}' existiert bereits.")
        self.label = label


class RuleTooSmallError(BoardValidationError):
    """Trennungsregel mit weniger als zwei Schülern."""

    def __init__(self, count: int):
        super().__init__(
            f"Eine Trennungsregel braucht mindestens 2 Schüler (erhalten: {count})."
        )
        self.count = count


class InvalidClassCountError(BoardValidationError):
    """Klassenanzahl außerhalb des erlaubten Bereichs."""


class InvalidGenderError(BoardValidationError):
    """Geschlecht ist weder "male" noch "female"."""

    def __init__(self, value):
        super().__init__(f"Unbekanntes Geschlecht: {value!r} (erlaubt: male, female).")
        self.value = value
