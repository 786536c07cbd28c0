from sqlalchemy import or_

from klip.models import Crag, Sector, Route

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 20


def search_routes(query: str) -> list[dict]:
    """
    Case-insensitive match on route, sector or crag name.
    Queries shorter than two characters return nothing.
    """
    query = (query or "").strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    # Escape LIKE wildcards typed by the user
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    pattern = f"%{escaped}%"

    routes = (
        Route.query
        .join(Sector, Sector.id == Route.sector_id)
        .join(Crag, Crag.id == Sector.crag_id)
        .filter(
            or_(
                Route.name.ilike(pattern, escape="\\"),
                Sector.name.ilike(pattern, escape="\\"),
                Crag.name.ilike(pattern, escape="\\"),
            )
        )
        .order_by(Crag.name.asc(), Sector.name.asc(), Route.number.asc())
        .limit(MAX_RESULTS)
        .all()
    )

    return [
        {
            "id": r.id,
            "type": "route",
            "name": r.name or f"Voie {r.number}",
            "context": f"{r.sector.crag.name} › {r.sector.name}",
        }
        for r in routes
    ]
