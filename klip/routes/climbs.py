from flask import Blueprint, current_app, jsonify

from klip.extensions import db
from klip.helpers.api import json_body, json_error, require_topo_editor
from klip.helpers.route import (
    UNSET,
    create_route,
    get_pitch,
    get_route_with_reports,
    pitch_to_dict,
    update_pitch,
)
from klip.helpers.validation import (
    NotFoundError,
    ValidationError,
    optional_cotation,
    optional_positive_int,
    optional_text,
    require_positive_int,
    require_uuid,
)


climbs_bp = Blueprint("climbs", __name__)

@climbs_bp.route("/api/routes/<route_id>")
def api_get_route(route_id):
    route = get_route_with_reports(route_id)
    if not route:
        return json_error("Voie non trouvée", 404)
    return jsonify(route)


def _parse_pitches(raw) -> list[dict]:
    if not isinstance(raw, list) or not raw:
        raise ValidationError("Au moins une longueur requise")

    pitches = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValidationError("Longueur invalide")
        pitches.append(
            {
                "cotation": optional_cotation(item),
                "length": optional_positive_int(item, "length"),
            }
        )
    return pitches


@climbs_bp.route("/api/routes", methods=["POST"])
def api_create_route():
    """
    Create a route with its pitches, in order.

    Payload:
      {
        "sector_id": "<uuid>",
        "number": 3,
        "name": "Rose des Sables",      (optional)
        "description": "...",          (optional)
        "pitches": [{"cotation": "6b", "length": 30}, ...]
      }
    """
    user, error = require_topo_editor(
        "Seuls les ouvreurs et administrateurs peuvent creer des voies"
    )
    if error:
        return error

    try:
        data = json_body()
        sector_id = require_uuid(data.get("sector_id"), "ID de secteur invalide")
        number = require_positive_int(data, "number", "Le numero doit etre positif")
        name = optional_text(data, "name", 200)
        description = optional_text(data, "description", 2000)
        pitches = _parse_pitches(data.get("pitches"))

        route_id = create_route(
            sector_id,
            number,
            pitches,
            name=name,
            description=description,
        )
    except ValidationError as e:
        return json_error(str(e), 400)
    except NotFoundError as e:
        return json_error(str(e), 404)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error creating route")
        return json_error("Une erreur est survenue lors de la creation de la voie", 500)

    current_app.logger.info("Route %s created in sector %s by %s", route_id, sector_id, user.email)
    return jsonify({"id": route_id}), 201


@climbs_bp.route("/api/pitches/<pitch_id>")
def api_get_pitch(pitch_id):
    pitch = get_pitch(pitch_id)
    if not pitch:
        return json_error("Longueur non trouvée", 404)
    return jsonify(pitch_to_dict(pitch))


@climbs_bp.route("/api/pitches/<pitch_id>", methods=["PATCH"])
def api_update_pitch(pitch_id):
    """
    Partial update: {"length": 35, "cotation": "7b"}. A key sent as null
    clears the value; a missing key leaves it alone.
    """
    user, error = require_topo_editor(
        "Seuls les ouvreurs et administrateurs peuvent modifier les longueurs"
    )
    if error:
        return error

    pitch = get_pitch(pitch_id)
    if not pitch:
        return json_error("Longueur non trouvée", 404)

    try:
        data = json_body()
        changes = {}
        if "length" in data:
            changes["length"] = optional_positive_int(data, "length")
        if "cotation" in data:
            changes["cotation"] = optional_cotation(data)

        update_pitch(
            pitch,
            length=changes.get("length", UNSET),
            cotation=changes.get("cotation", UNSET),
        )
    except ValidationError as e:
        return json_error(str(e), 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error updating pitch")
        return json_error("Une erreur est survenue lors de la modification", 500)

    return jsonify({"success": True})
