# vitalis/forms/clinical_history.py
from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional
from vitalis.forms.patient import strip_or_none
from vitalis.models import BloodType

def coerce_blood_type(v):
    # ValidationError ist ein ValueError -> WTForms übernimmt die Meldung als Feldfehler
    return BloodType.parse(v)

class ClinicalHistoryForm(FlaskForm):
    history_number     = StringField("Nro. historia", validators=[DataRequired(message="Nro. de historia es obligatorio."), Length(max=50)], filters=[strip_or_none])
    blood_type         = StringField("Grupo sanguíneo", validators=[Optional()], filters=[coerce_blood_type])
    medical_history    = TextAreaField("Antecedentes", validators=[Optional(), Length(max=10_000)], filters=[strip_or_none])
    current_medication = TextAreaField("Medicación actual", validators=[Optional(), Length(max=10_000)], filters=[strip_or_none])
    notes              = TextAreaField("Observaciones", validators=[Optional(), Length(max=10_000)], filters=[strip_or_none])
