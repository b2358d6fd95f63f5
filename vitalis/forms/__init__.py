# vitalis/forms/__init__.py
from werkzeug.datastructures import MultiDict

from vitalis.errors import ValidationError
from .patient import PatientForm
from .clinical_history import ClinicalHistoryForm


def bind_form(form_cls, data: dict):
    """
    Konsolen-Eingaben (dict Feld -> Text) durch ein Formular validieren.
    Gibt das validierte Formular zurück, sonst ValidationError mit allen Feldfehlern.
    """
    formdata = MultiDict({k: ("" if v is None else v) for k, v in data.items()})
    form = form_cls(formdata=formdata, meta={"csrf": False})
    if not form.validate():
        errors = {name: list(msgs) for name, msgs in form.errors.items()}
        parts = [f"{form[name].label.text}: {' '.join(msgs)}" for name, msgs in errors.items()]
        raise ValidationError("; ".join(parts), errors=errors)
    return form


__all__ = ["PatientForm", "ClinicalHistoryForm", "bind_form"]
