"""Ablage für Eingabedatensätze (Speichern / Laden als JSON-Blob).

Der Datensatz wird unverändert gespeichert; eine Schema-Prüfung findet erst
statt, wenn daraus ein TimetableInput gebaut wird.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def empty_payload() -> dict:
    """Datensatz vor dem ersten Speichern."""
    return {"courses": [], "teachers": [], "rooms": [], "slots": []}


class StoreError(Exception):
    """Fehler beim Lesen oder Schreiben der Datendatei."""


class DataStore:
    """Speichert und lädt genau einen Datensatz in einer JSON-Datei."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def save(self, payload: dict) -> None:
        """Schreibt das Payload unverändert (eingerückt) in die Datendatei."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Konnte nicht speichern: {self.path} ({e})") from e
        logger.info(f"Datensatz gespeichert: {self.path}")

    def load(self) -> dict:
        """Lädt den gespeicherten Datensatz.

        Existiert noch keine Datei, wird ein leerer Datensatz zurückgegeben.
        """
        if not self.path.exists():
            logger.debug(f"Keine Datendatei unter {self.path}, liefere leeren Datensatz")
            return empty_payload()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        # ValueError deckt JSONDecodeError und UnicodeDecodeError ab
        except (OSError, ValueError) as e:
            raise StoreError(f"Konnte nicht laden: {self.path} ({e})") from e
