from flask import Blueprint, current_app, jsonify

from klip.extensions import db
from klip.helpers.api import json_body, json_error, require_topo_editor
from klip.helpers.crag import create_crag, create_sector, get_all_crags, get_crag_with_routes
from klip.helpers.validation import (
    NotFoundError,
    ValidationError,
    optional_bool,
    require_name,
    require_uuid,
)


crags_bp = Blueprint("crags", __name__)

@crags_bp.route("/api/crags")
def api_list_crags():
    return jsonify(get_all_crags())


@crags_bp.route("/api/crags/<crag_id>")
def api_get_crag(crag_id):
    crag = get_crag_with_routes(crag_id)
    if not crag:
        return json_error("Site non trouvé", 404)
    return jsonify(crag)


@crags_bp.route("/api/crags", methods=["POST"])
def api_create_crag():
    """
    Create a crag.

    Payload: {"name": "Buoux", "convention": true}
    Only route setters and admins.
    """
    user, error = require_topo_editor(
        "Seuls les ouvreurs et administrateurs peuvent creer des sites"
    )
    if error:
        return error

    try:
        data = json_body()
        name = require_name(data)
        convention = optional_bool(data, "convention")

        crag_id = create_crag(name, convention)
    except ValidationError as e:
        return json_error(str(e), 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error creating crag")
        return json_error("Une erreur est survenue lors de la creation du site", 500)

    current_app.logger.info("Crag %s created by %s", crag_id, user.email)
    return jsonify({"id": crag_id}), 201


@crags_bp.route("/api/crag/<crag_id>/sectors", methods=["POST"])
def api_create_sector(crag_id):
    user, error = require_topo_editor(
        "Seuls les ouvreurs et administrateurs peuvent creer des secteurs"
    )
    if error:
        return error

    try:
        crag_id = require_uuid(crag_id, "ID de site invalide")
        data = json_body()
        name = require_name(data)

        sector_id = create_sector(crag_id, name)
    except ValidationError as e:
        return json_error(str(e), 400)
    except NotFoundError as e:
        return json_error(str(e), 404)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error creating sector")
        return json_error("Une erreur est survenue lors de la creation du secteur", 500)

    current_app.logger.info("Sector %s created in crag %s by %s", sector_id, crag_id, user.email)
    return jsonify({"id": sector_id}), 201
