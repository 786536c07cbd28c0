from typing import Optional

from klip.extensions import db
from klip.models import Crag, Sector, Route
from klip.helpers.topo import summarize_route
from klip.helpers.validation import NotFoundError


def get_all_crags() -> list[dict]:
    """
    Every crag, ordered by name, with sector and route counts.
    Crags without sectors are listed with zero counts.
    """
    sector_counts = dict(
        db.session.query(Sector.crag_id, db.func.count(Sector.id))
        .group_by(Sector.crag_id)
        .all()
    )
    route_counts = dict(
        db.session.query(Sector.crag_id, db.func.count(Route.id))
        .join(Route, Route.sector_id == Sector.id)
        .group_by(Sector.crag_id)
        .all()
    )

    crags = Crag.query.order_by(Crag.name.asc()).all()

    return [
        {
            "id": c.id,
            "name": c.name,
            "convention": c.convention,
            "sector_count": sector_counts.get(c.id, 0),
            "route_count": route_counts.get(c.id, 0),
        }
        for c in crags
    ]


def _pitch_brief(p) -> dict:
    return {"id": p.id, "length": p.length, "cotation": p.cotation}


def get_crag_with_routes(crag_id: str) -> Optional[dict]:
    crag = Crag.query.get(crag_id)
    if not crag:
        return None

    sectors_out = []
    for sector in sorted(crag.sectors, key=lambda s: s.name):
        routes = sorted(sector.routes, key=lambda r: r.number)

        routes_out = []
        for r in routes:
            row = {
                "id": r.id,
                "number": r.number,
                "name": r.name,
                "length": r.length,
                "pitches": [_pitch_brief(p) for p in r.pitches],
            }
            row.update(summarize_route(r))
            routes_out.append(row)

        sectors_out.append(
            {
                "id": sector.id,
                "name": sector.name,
                # Next free number for the "add route" form
                "suggested_number": max((r.number for r in routes), default=0) + 1,
                "routes": routes_out,
            }
        )

    return {
        "id": crag.id,
        "name": crag.name,
        "convention": crag.convention,
        "sectors": sectors_out,
    }


def create_crag(name: str, convention=None) -> str:
    crag = Crag(name=name, convention=convention)
    db.session.add(crag)
    db.session.commit()
    return crag.id


def create_sector(crag_id: str, name: str) -> str:
    crag = Crag.query.get(crag_id)
    if not crag:
        raise NotFoundError("Site non trouvé")

    sector = Sector(crag_id=crag.id, name=name)
    db.session.add(sector)
    db.session.commit()
    return sector.id
