from typing import Optional

from klip.extensions import db
from klip.models import Sector, Route, Pitch
from klip.helpers.topo import summarize_route
from klip.helpers.validation import NotFoundError

# Sentinel so update_pitch can tell "not sent" from "sent as null"
UNSET = object()


def _reporter_brief(user) -> dict:
    return {
        "id": user.id,
        "firstname": user.firstname,
        "lastname": user.lastname,
        "email": user.email,
    }


def report_to_dict(report) -> dict:
    return {
        "id": report.id,
        "created_at": report.created_at.isoformat() if report.created_at else None,
        "comment": report.comment,
        "visual_check": report.visual_check,
        "anchor_check": report.anchor_check,
        "cleaning_done": report.cleaning_done,
        "trundle_done": report.trundle_done,
        "total_rebolting_done": report.total_rebolting_done,
        "reporter": _reporter_brief(report.reporter),
    }


def get_route_with_reports(route_id: str) -> Optional[dict]:
    """
    Route page payload: breadcrumb context, then every pitch with its
    maintenance reports newest first.
    """
    route = Route.query.get(route_id)
    if not route:
        return None

    sector = route.sector
    out = {
        "id": route.id,
        "number": route.number,
        "name": route.name,
        "description": route.description,
        "length": route.length,
        "sector": {
            "id": sector.id,
            "name": sector.name,
            "crag": {"id": sector.crag.id, "name": sector.crag.name},
        },
        "pitches": [
            {
                "id": p.id,
                "position": p.position,
                "description": p.description,
                "length": p.length,
                "nb_bolts": p.nb_bolts,
                "cotation": p.cotation,
                "reports": [report_to_dict(rep) for rep in p.reports],
            }
            for p in route.pitches
        ],
    }
    out.update(summarize_route(route))
    return out


def create_route(
    sector_id: str,
    number: int,
    pitches: list[dict],
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> str:
    sector = Sector.query.get(sector_id)
    if not sector:
        raise NotFoundError("Secteur non trouvé")

    route = Route(
        sector_id=sector.id,
        number=number,
        name=name,
        description=description,
    )
    for position, p in enumerate(pitches, start=1):
        route.pitches.append(
            Pitch(
                position=position,
                cotation=p.get("cotation"),
                length=p.get("length"),
            )
        )

    db.session.add(route)
    db.session.commit()
    return route.id


def get_pitch(pitch_id: str) -> Optional[Pitch]:
    return Pitch.query.get(pitch_id)


def pitch_to_dict(pitch) -> dict:
    route = pitch.route
    sector = route.sector
    return {
        "id": pitch.id,
        "position": pitch.position,
        "description": pitch.description,
        "length": pitch.length,
        "nb_bolts": pitch.nb_bolts,
        "cotation": pitch.cotation,
        "route": {
            "id": route.id,
            "number": route.number,
            "name": route.name,
            "pitches": [
                {"id": p.id, "cotation": p.cotation, "length": p.length}
                for p in route.pitches
            ],
            "sector": {
                "id": sector.id,
                "name": sector.name,
                "crag": {"id": sector.crag.id, "name": sector.crag.name},
            },
        },
    }


def update_pitch(pitch: Pitch, length=UNSET, cotation=UNSET) -> Pitch:
    """Only the fields actually sent are touched; null clears a field."""
    if length is not UNSET:
        pitch.length = length
    if cotation is not UNSET:
        pitch.cotation = cotation
    db.session.commit()
    return pitch
