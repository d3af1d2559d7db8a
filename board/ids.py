"""ID-Erzeugung für Schüler, Tags und Regeln."""

import itertools
import random
import string
import time
from typing import Optional

_ALPHABET = string.ascii_lowercase + string.digits


class IdGenerator:
    """Erzeugt innerhalb einer Sitzung eindeutige String-IDs.

    Aufbau: <präfix>-<ms-zeitstempel>-<zähler>-<zufall>. Der Zähler trennt IDs
    aus demselben Millisekunden-Tick, der Zufallsanteil solche aus parallelen
    Sitzungen. Importierte IDs werden nicht geprüft.
    """

    def __init__(self, rng: Optional[random.Random] = None, suffix_length: int = 6) -> None:
        self.rng = rng or random.Random()
        self.suffix_length = suffix_length
        self._counter = itertools.count()

    def new_id(self, prefix: str) -> str:
        stamp = int(time.time() * 1000)
        seq = next(self._counter)
        suffix = "".join(self.rng.choices(_ALPHABET, k=self.suffix_length))
        return f"{prefix}-{stamp}-{seq}-{suffix}"
