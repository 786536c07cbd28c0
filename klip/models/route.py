import uuid
from klip.extensions import db

class Route(db.Model):
    __tablename__ = "route"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Number painted at the foot of the route; 0 when the topo gives none
    number = db.Column(db.Integer, nullable=False, default=0)
    name = db.Column(db.String(200), nullable=True)
    description = db.Column(db.Text, nullable=True)

    # Explicit total length in metres; overrides the sum of pitch lengths
    length = db.Column(db.Integer, nullable=True)

    sector_id = db.Column(
        db.String(36),
        db.ForeignKey("sector.id"),
        nullable=False,
        index=True,
    )
    sector = db.relationship("Sector", back_populates="routes")

    pitches = db.relationship(
        "Pitch",
        back_populates="route",
        lazy=True,
        order_by="Pitch.position",
        cascade="all, delete-orphan",
    )
