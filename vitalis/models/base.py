# vitalis/models/base.py
from sqlalchemy.sql import false
from vitalis.extensions import db

class IDMixin:
    id = db.Column(db.Integer, primary_key=True)

class SoftDeleteMixin:
    deleted = db.Column(db.Boolean, nullable=False, default=False, server_default=false())
