from flask import Blueprint, current_app, jsonify, request

from klip.helpers.api import json_error
from klip.helpers.search import search_routes


search_bp = Blueprint("search", __name__)

@search_bp.route("/api/search")
def api_search():
    query = (request.args.get("q") or "").strip()

    try:
        results = search_routes(query)
    except Exception:
        current_app.logger.exception("Search error q=%r", query)
        return json_error("Une erreur est survenue lors de la recherche", 500)

    return jsonify(results)
