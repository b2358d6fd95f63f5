# vitalis/__init__.py
import os
from flask import Flask
from dotenv import load_dotenv
from vitalis.extensions import db, migrate
import logging
from logging.handlers import RotatingFileHandler

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "migrations")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d %(message)s"

# (Datei, Level, nur im Debug-Modus)
LOG_FILES = (
    ("app.log", logging.INFO, False),
    ("error.log", logging.ERROR, False),
    ("debug.log", logging.DEBUG, True),
)

def create_app(test_config=None):
    load_dotenv()

    app = Flask(__name__, instance_relative_config=True)
    os.makedirs(app.instance_path, exist_ok=True)

    # Basis-Konfiguration
    app.config["SECRET_KEY"] = os.getenv("FLASK_SECRET_KEY", "dev-key")
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(app.instance_path, "vitalis.db")
    )
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

    # Formulare validieren nur Konsolen-Eingaben, kein CSRF nötig
    app.config["WTF_CSRF_ENABLED"] = False

    app.config["CLINIC_NAME"] = os.getenv("CLINIC_NAME", "Vitalis")
    app.config["LOG_DIR"] = os.getenv("LOG_DIR", os.path.join(app.instance_path, "logs"))
    app.config["LOG_MAX_BYTES"] = int(os.getenv("LOG_MAX_BYTES", str(2 * 1024 * 1024)))
    app.config["LOG_BACKUP_COUNT"] = int(os.getenv("LOG_BACKUP_COUNT", "5"))

    if test_config:
        app.config.update(test_config)

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR)

    # Modelle registrieren (Metadata für create_all/Migrationen)
    from vitalis import models  # noqa: F401

    # Logging konfigurieren
    _configure_logging(app)

    # CLI-Kommandos (z. B. flask menu)
    from cli import register_cli
    register_cli(app)

    return app

def _configure_logging(app: Flask) -> None:
    """
    Root-Logger neu aufsetzen: rotierende Dateien unter LOG_DIR.
    Konsole nur im Debug-Modus, sonst gehört sie dem Menü.
    """
    log_dir = app.config["LOG_DIR"]
    os.makedirs(log_dir, exist_ok=True)

    handlers = []
    for filename, level, debug_only in LOG_FILES:
        if debug_only and not app.debug:
            continue
        handler = RotatingFileHandler(
            os.path.join(log_dir, filename),
            maxBytes=app.config["LOG_MAX_BYTES"],
            backupCount=app.config["LOG_BACKUP_COUNT"],
            encoding="utf-8",
        )
        handler.setLevel(level)
        handlers.append(handler)
    if app.debug:
        handlers.append(logging.StreamHandler())

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    root.setLevel(logging.DEBUG if app.debug else logging.INFO)

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # Flask-Logger schreibt nur über den Root-Logger
    app.logger.handlers.clear()
    app.logger.propagate = True
    app.logger.setLevel(root.level)

    app.logger.info("Logging initialisiert (debug=%s, dir=%s).", app.debug, log_dir)
