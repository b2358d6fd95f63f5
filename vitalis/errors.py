# vitalis/errors.py


class VitalisError(Exception):
    """Basisklasse für alle Fehler der Anwendung."""


class ValidationError(VitalisError, ValueError):
    """Ungültige Eingabe: Pflichtfeld fehlt, Datum/Blutgruppe nicht lesbar, DNI doppelt."""

    def __init__(self, message: str, errors: dict[str, list[str]] | None = None):
        super().__init__(message)
        self.errors = errors or {}


class StorageError(VitalisError):
    """Fehler der Persistenzschicht (Verbindung, Constraint, SQL)."""
