import uuid
from datetime import datetime
from klip.extensions import db

class User(db.Model):
    __tablename__ = "user"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    firstname = db.Column(db.String(120), nullable=False, default="")
    lastname = db.Column(db.String(120), nullable=False, default="")

    # One of klip.helpers.roles.USER_ROLES
    role = db.Column(db.String(20), nullable=False, default="CONTRIBUTOR")

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    reports = db.relationship("Report", back_populates="reporter")
