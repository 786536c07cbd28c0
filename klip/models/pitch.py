import uuid
from klip.extensions import db

class Pitch(db.Model):
    __tablename__ = "pitch"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # 1-based order along the route (L1, L2, ...)
    position = db.Column(db.Integer, nullable=False, default=1)

    description = db.Column(db.Text, nullable=True)
    length = db.Column(db.Integer, nullable=True)
    nb_bolts = db.Column(db.Integer, nullable=True)
    cotation = db.Column(db.String(10), nullable=True)

    route_id = db.Column(
        db.String(36),
        db.ForeignKey("route.id"),
        nullable=False,
        index=True,
    )
    route = db.relationship("Route", back_populates="pitches")

    reports = db.relationship(
        "Report",
        back_populates="pitch",
        lazy=True,
        order_by="Report.created_at.desc()",
        cascade="all, delete-orphan",
    )
