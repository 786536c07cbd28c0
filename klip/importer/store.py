from typing import Callable, Mapping, Optional

from klip.extensions import db
from klip.models import Crag, Sector, Route, Pitch, Report


def resolve(
    cache: Mapping,
    key,
    find: Callable[[], Optional[str]],
    create: Callable[[], str],
) -> tuple[str, dict]:
    """
    Find-or-create with an in-run cache.

    A cache hit is trusted without touching the store. On a miss the store
    is searched first and only then is a new row created, so re-running
    against a non-empty store reuses what is already there. Returns the id
    and a new cache; the one passed in is left untouched.
    """
    if key in cache:
        return cache[key], dict(cache)

    found = find()
    entity_id = found if found is not None else create()
    return entity_id, {**cache, key: entity_id}


class TopoStore:
    """Writes the imported topo through the Flask-SQLAlchemy session."""

    def __init__(self, session=None):
        self.session = session or db.session

    def _add(self, obj):
        self.session.add(obj)
        # flush so the generated id is available to child rows
        self.session.flush()
        return obj.id

    def find_crag_id(self, name: str) -> Optional[str]:
        crag = self.session.query(Crag).filter(Crag.name == name).first()
        return crag.id if crag else None

    def create_crag(self, name: str, convention: Optional[bool]) -> str:
        return self._add(Crag(name=name, convention=convention))

    def find_sector_id(self, crag_id: str, name: str) -> Optional[str]:
        sector = (
            self.session.query(Sector)
            .filter(Sector.crag_id == crag_id, Sector.name == name)
            .first()
        )
        return sector.id if sector else None

    def create_sector(self, crag_id: str, name: str) -> str:
        return self._add(Sector(crag_id=crag_id, name=name))

    def create_route(self, sector_id: str, number: int, name: Optional[str]) -> str:
        return self._add(Route(sector_id=sector_id, number=number, name=name))

    def create_pitch(
        self,
        route_id: str,
        position: int,
        cotation: Optional[str],
        nb_bolts: Optional[int],
    ) -> str:
        return self._add(
            Pitch(
                route_id=route_id,
                position=position,
                cotation=cotation,
                nb_bolts=nb_bolts,
            )
        )

    def wipe(self) -> None:
        # children first: no reliance on DB-level cascades
        for model in (Report, Pitch, Route, Sector, Crag):
            self.session.query(model).delete(synchronize_session=False)
        self.session.commit()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def counts(self) -> dict:
        return {
            "crags": self.session.query(Crag).count(),
            "sectors": self.session.query(Sector).count(),
            "routes": self.session.query(Route).count(),
            "pitches": self.session.query(Pitch).count(),
        }
