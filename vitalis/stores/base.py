# vitalis/stores/base.py
from __future__ import annotations

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vitalis.errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def unit_of_work(session: Session):
    """
    Transaktionsklammer für mehrere Store-Aufrufe mit ``commit=False``.
    Commit am Ende, Rollback bei jedem Fehler; SQLAlchemy-Fehler werden zu StorageError.
    """
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("Transaktion fehlgeschlagen")
        raise StorageError(f"Error de base de datos: {e}") from e
    except Exception:
        session.rollback()
        raise


class BaseStore:
    """Gemeinsame Fehler-/Transaktionsbehandlung der Stores. Eine Session für alle Stores."""

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _reading(self, what: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Lesen fehlgeschlagen: %s", what)
            raise StorageError(f"Error al leer {what}: {e}") from e

    @contextmanager
    def _writing(self, what: str, commit: bool):
        try:
            yield
            if commit:
                self.session.commit()
            else:
                self.session.flush()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Schreiben fehlgeschlagen: %s", what)
            raise StorageError(f"Error al guardar {what}: {e}") from e

    def _detach(self, *entities) -> None:
        # Rückgabewerte sind reine Datenobjekte; Änderungen daran laufen nur über update()
        for e in entities:
            if e is not None and e in self.session:
                self.session.expunge(e)
