from flask import Blueprint, current_app, jsonify

from klip.extensions import db
from klip.helpers.account import get_session_name
from klip.helpers.api import json_body, json_error, require_login
from klip.helpers.report import (
    REPORT_FLAGS,
    create_reports_for_user,
    delete_report,
    get_report,
    update_report,
)
from klip.helpers.validation import (
    NotFoundError,
    ValidationError,
    optional_bool,
    optional_text,
)


reports_bp = Blueprint("reports", __name__)

def _parse_report_fields(data: dict) -> dict:
    fields = {key: optional_bool(data, key) for key in REPORT_FLAGS}
    fields["comment"] = optional_text(data, "comment", 5000)
    return fields


def _parse_pitch_ids(raw) -> list[str]:
    if not isinstance(raw, list) or not raw:
        raise ValidationError("Sélectionnez au moins une longueur")

    ids = []
    for pid in raw:
        if not isinstance(pid, str) or not pid.strip():
            raise ValidationError("ID de longueur invalide")
        pid = pid.strip()
        if pid not in ids:
            ids.append(pid)
    return ids


@reports_bp.route("/api/reports", methods=["POST"])
def api_create_reports():
    """
    File a maintenance report on one or more pitches.

    Payload:
      {
        "pitch_ids": ["<id>", ...],
        "visual_check": true, "anchor_check": false, "cleaning_done": true,
        "trundle_done": false, "total_rebolting_done": false,
        "comment": "Relais changé"
      }
    Any signed-in user may report; the reporter row is created on first use.
    """
    email, error = require_login()
    if error:
        return error

    try:
        data = json_body()
        pitch_ids = _parse_pitch_ids(data.get("pitch_ids"))
        fields = _parse_report_fields(data)

        report_ids = create_reports_for_user(
            pitch_ids,
            email,
            user_name=get_session_name(),
            **fields,
        )
    except ValidationError as e:
        return json_error(str(e), 400)
    except NotFoundError as e:
        return json_error(str(e), 404)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error creating report")
        return json_error("Une erreur est survenue lors de la création du rapport", 500)

    return jsonify({"ids": report_ids}), 201


def _owned_report_or_error(report_id, email, forbidden_message):
    report = get_report(report_id)
    if not report:
        return None, json_error("Rapport non trouvé", 404)
    if report.reporter.email != email:
        return None, json_error(forbidden_message, 403)
    return report, None


@reports_bp.route("/api/reports/<report_id>", methods=["PATCH"])
def api_update_report(report_id):
    email, error = require_login()
    if error:
        return error

    report, error = _owned_report_or_error(
        report_id, email, "Vous ne pouvez modifier que vos propres rapports"
    )
    if error:
        return error

    try:
        data = json_body()
        update_report(report, **_parse_report_fields(data))
    except ValidationError as e:
        return json_error(str(e), 400)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error updating report")
        return json_error("Une erreur est survenue lors de la modification du rapport", 500)

    return jsonify({"success": True})


@reports_bp.route("/api/reports/<report_id>", methods=["DELETE"])
def api_delete_report(report_id):
    email, error = require_login()
    if error:
        return error

    report, error = _owned_report_or_error(
        report_id, email, "Vous ne pouvez supprimer que vos propres rapports"
    )
    if error:
        return error

    try:
        delete_report(report)
    except Exception:
        db.session.rollback()
        current_app.logger.exception("Error deleting report")
        return json_error("Une erreur est survenue lors de la suppression du rapport", 500)

    return jsonify({"success": True})
