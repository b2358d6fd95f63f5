# vitalis/extensions.py
import sqlite3

from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Entities bleiben nach dem Commit lesbar (Stores geben sie losgelöst zurück)
db = SQLAlchemy(session_options={"expire_on_commit": False})
migrate = Migrate(compare_type=True, render_as_batch=True)


@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(dbapi_conn, conn_record):
    # SQLite prüft Fremdschlüssel nur mit diesem Pragma
    if not isinstance(dbapi_conn, sqlite3.Connection):
        return
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
