from flask import Blueprint, current_app, jsonify

from klip.extensions import db
from klip.helpers.account import get_or_create_user, get_session_name
from klip.helpers.api import json_error, require_login
from klip.helpers.roles import role_label


user_bp = Blueprint("user", __name__)

@user_bp.route("/api/user/me")
def api_me():
    """
    Current user, created as CONTRIBUTOR on first visit.
    Never exposes timestamps or anything the provider didn't give us.
    """
    email, error = require_login()
    if error:
        return error

    try:
        user = get_or_create_user(email, get_session_name())
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error fetching user")
        return json_error("Une erreur est survenue", 500)

    return jsonify(
        {
            "id": user.id,
            "email": user.email,
            "firstname": user.firstname,
            "lastname": user.lastname,
            "role": user.role,
            "role_label": role_label(user.role),
        }
    )
