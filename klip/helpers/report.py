from typing import Optional

from klip.extensions import db
from klip.models import Pitch, Report
from klip.helpers.account import get_or_create_user
from klip.helpers.validation import NotFoundError

REPORT_FLAGS = (
    "visual_check",
    "anchor_check",
    "cleaning_done",
    "trundle_done",
    "total_rebolting_done",
)


def create_reports_for_user(
    pitch_ids: list[str],
    user_email: str,
    user_name: Optional[str] = None,
    comment: Optional[str] = None,
    **flags,
) -> list[str]:
    """
    One report per selected pitch, all filed by the same user (created on
    first report). All pitches are checked before anything is written.
    """
    pitches = Pitch.query.filter(Pitch.id.in_(pitch_ids)).all()
    found = {p.id for p in pitches}
    if any(pid not in found for pid in pitch_ids):
        raise NotFoundError("Longueur non trouvée")

    user = get_or_create_user(user_email, user_name)

    reports = []
    for pid in pitch_ids:
        report = Report(
            pitch_id=pid,
            reporter_id=user.id,
            comment=comment,
            **{k: flags.get(k) for k in REPORT_FLAGS},
        )
        db.session.add(report)
        reports.append(report)

    db.session.commit()
    return [r.id for r in reports]


def get_report(report_id: str) -> Optional[Report]:
    return Report.query.get(report_id)


def update_report(report: Report, comment: Optional[str] = None, **flags) -> Report:
    """
    The report form always sends the whole checklist, so this replaces
    every field: anything not sent becomes null.
    """
    for key in REPORT_FLAGS:
        setattr(report, key, flags.get(key))
    report.comment = comment
    db.session.commit()
    return report


def delete_report(report: Report) -> None:
    db.session.delete(report)
    db.session.commit()
