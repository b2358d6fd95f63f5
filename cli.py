# cli.py
import click
from flask import current_app
from vitalis.extensions import db
from seed import seed_data


def build_menu_handler():
    """Stores/Services verdrahten; alle teilen sich die eine Session."""
    from vitalis.menu import MenuHandler
    from vitalis.services import ClinicalHistoryService, PatientService
    from vitalis.stores import ClinicalHistoryStore, PatientStore

    patient_store = PatientStore(db.session)
    history_store = ClinicalHistoryStore(db.session)
    return MenuHandler(
        PatientService(patient_store, history_store),
        ClinicalHistoryService(history_store, patient_store),
    )


def _dev_only(app):
    if not app.debug and not app.config.get("TESTING", False):
        click.echo("❌ Nur im Debug-/Test-Modus erlaubt.")
        raise click.Abort()


def register_cli(app):
    @app.cli.command("menu")
    def menu():
        """Interaktives Konsolenmenü (Pacientes / Historias clínicas)."""
        from vitalis.menu import run_menu
        run_menu(build_menu_handler(), current_app.config["CLINIC_NAME"])

    @app.cli.command("init-db")
    def init_db():
        """Tabellen anlegen (ohne Migrationen), bestehende bleiben unverändert."""
        db.create_all()
        click.echo("✅ Tabellen angelegt.")

    @app.cli.command("dev-seed")
    @click.option("--count", default=10, show_default=True, help="Anzahl Patienten.")
    def dev_seed(count):
        """Nur Seed-Daten einfügen, ohne Schema-Reset/Migrationen."""
        _dev_only(app)

        click.echo("🌱 Füge Seed-Daten hinzu ...")
        patients = seed_data(count)
        click.echo(f"✅ {len(patients)} Patienten angelegt.")

    @app.cli.command("dev-reset")
    @click.option("--count", default=10, show_default=True, help="Anzahl Patienten.")
    def dev_reset(count):
        """
        Dev-Datenbank komplett leeren, Migrationen ausführen und Seed-Daten anlegen.
        ⚠️ Nur für Development gedacht!
        """
        _dev_only(app)

        click.echo("⚠️ Lösche alle Tabellen ...")
        db.drop_all()
        with db.engine.begin() as conn:
            conn.exec_driver_sql("DROP TABLE IF EXISTS alembic_version")

        click.echo("✅ Tabellen gelöscht. Führe Migrationen aus ...")

        from flask_migrate import upgrade
        upgrade()

        click.echo("✅ Migrationen ausgeführt. Lege Seed-Daten an ...")
        seed_data(count)

        click.echo("🎉 Fertig! Dev-DB ist zurückgesetzt und mit Testdaten befüllt.")
