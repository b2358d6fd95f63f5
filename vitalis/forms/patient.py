# vitalis/forms/patient.py
from flask_wtf import FlaskForm
from wtforms import StringField, DateField
from wtforms.validators import DataRequired, Length, Optional, Regexp

def strip_or_none(v):
    return v.strip() if isinstance(v, str) and v.strip() != "" else None

class PatientForm(FlaskForm):
    national_id = StringField(
        "DNI",
        validators=[
            DataRequired(message="DNI es obligatorio."),
            Length(max=20),
            Regexp(r"^\d+$", message="El DNI sólo admite dígitos."),
        ],
        filters=[strip_or_none],
    )
    first_name = StringField("Nombre", validators=[DataRequired(message="Nombre es obligatorio."), Length(max=120)], filters=[strip_or_none])
    last_name  = StringField("Apellido", validators=[DataRequired(message="Apellido es obligatorio."), Length(max=120)], filters=[strip_or_none])
    birth_date = DateField("Fecha de nacimiento", validators=[Optional()], format="%Y-%m-%d")
