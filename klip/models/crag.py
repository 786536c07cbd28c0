import uuid
from datetime import datetime
from klip.extensions import db

class Crag(db.Model):
    __tablename__ = "crag"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Public name of the site, e.g. "Buoux". Not unique at the DB level:
    # the importer dedupes by name itself.
    name = db.Column(db.String(200), nullable=False, index=True)

    # Whether a maintenance agreement exists with the landowner (unknown = None)
    convention = db.Column(db.Boolean, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    sectors = db.relationship(
        "Sector",
        back_populates="crag",
        lazy=True,
        cascade="all, delete-orphan",
    )
