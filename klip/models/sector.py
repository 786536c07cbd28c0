import uuid
from klip.extensions import db

class Sector(db.Model):
    __tablename__ = "sector"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(200), nullable=False)

    crag_id = db.Column(
        db.String(36),
        db.ForeignKey("crag.id"),
        nullable=False,
        index=True,
    )
    crag = db.relationship("Crag", back_populates="sectors")

    routes = db.relationship(
        "Route",
        back_populates="sector",
        lazy=True,
        cascade="all, delete-orphan",
    )
