from flask import jsonify, request

from klip.helpers.account import get_session_email, get_user_by_email
from klip.helpers.roles import can_edit_topo
from klip.helpers.validation import ValidationError

AUTH_REQUIRED_MESSAGE = "Authentification requise"


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def json_body() -> dict:
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Corps de requête invalide")
    return data


def require_login():
    """
    Returns (email, None) for a signed-in session, or (None, 401 response).
    """
    email = get_session_email()
    if not email:
        return None, json_error(AUTH_REQUIRED_MESSAGE, 401)
    return email, None


def require_topo_editor(forbidden_message: str):
    """
    Returns (user, None) for an ADMIN or ROUTE_SETTER, else (None, 401/403 response).
    """
    email, error = require_login()
    if error:
        return None, error

    user = get_user_by_email(email)
    if not can_edit_topo(user):
        return None, json_error(forbidden_message, 403)
    return user, None
