import uuid
from datetime import datetime
from klip.extensions import db

class Report(db.Model):
    __tablename__ = "report"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    pitch_id = db.Column(
        db.String(36),
        db.ForeignKey("pitch.id"),
        nullable=False,
        index=True,
    )
    reporter_id = db.Column(
        db.String(36),
        db.ForeignKey("user.id"),
        nullable=False,
        index=True,
    )

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    # Maintenance checklist; None = not filled in
    visual_check = db.Column(db.Boolean, nullable=True)
    anchor_check = db.Column(db.Boolean, nullable=True)
    cleaning_done = db.Column(db.Boolean, nullable=True)
    trundle_done = db.Column(db.Boolean, nullable=True)
    total_rebolting_done = db.Column(db.Boolean, nullable=True)

    comment = db.Column(db.Text, nullable=True)

    pitch = db.relationship("Pitch", back_populates="reports")
    reporter = db.relationship("User", back_populates="reports")
