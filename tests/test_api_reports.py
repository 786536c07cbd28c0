import pytest

from klip.models import Report, User

CONTRIBUTOR = "marie@klip.test"
ADMIN = "admin@klip.test"


@pytest.fixture()
def pichenibule_pitch_ids(seeded):
    return [p.id for p in seeded["routes"]["pichenibule"].pitches]


def _file_report(client, pitch_ids, **fields):
    payload = {"pitch_ids": pitch_ids}
    payload.update(fields)
    return client.post("/api/reports", json=payload)


def test_create_report_requires_login(client, pichenibule_pitch_ids):
    resp = _file_report(client, pichenibule_pitch_ids)

    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Authentification requise"


def test_contributor_can_report_on_several_pitches(client, pichenibule_pitch_ids, login):
    login(CONTRIBUTOR)

    resp = _file_report(
        client,
        pichenibule_pitch_ids,
        visual_check=True,
        cleaning_done=True,
        comment="Relais changé",
    )

    assert resp.status_code == 201
    ids = resp.get_json()["ids"]
    assert len(ids) == 2
    reports = Report.query.filter(Report.id.in_(ids)).all()
    assert {r.pitch_id for r in reports} == set(pichenibule_pitch_ids)
    for r in reports:
        assert r.visual_check is True
        assert r.cleaning_done is True
        assert r.anchor_check is None
        assert r.comment == "Relais changé"
        assert r.reporter.email == CONTRIBUTOR


def test_first_report_creates_the_reporter(client, pichenibule_pitch_ids, login):
    login("newcomer@example.com", "Alex Honnold")

    resp = _file_report(client, pichenibule_pitch_ids[:1], trundle_done=True)

    assert resp.status_code == 201
    user = User.query.filter_by(email="newcomer@example.com").one()
    assert user.role == "CONTRIBUTOR"
    assert (user.firstname, user.lastname) == ("Alex", "Honnold")


def test_reports_show_up_on_route_page(client, seeded, pichenibule_pitch_ids, login):
    login(CONTRIBUTOR)
    _file_report(client, pichenibule_pitch_ids[:1], anchor_check=True)

    body = client.get(f"/api/routes/{seeded['routes']['pichenibule'].id}").get_json()

    first, second = body["pitches"]
    assert len(first["reports"]) == 1
    assert first["reports"][0]["anchor_check"] is True
    assert first["reports"][0]["reporter"]["firstname"] == "Marie"
    assert second["reports"] == []


@pytest.mark.parametrize(
    "pitch_ids, message",
    [
        ([], "Sélectionnez au moins une longueur"),
        (None, "Sélectionnez au moins une longueur"),
        ([""], "ID de longueur invalide"),
        ([42], "ID de longueur invalide"),
    ],
)
def test_create_report_validation(client, seeded, login, pitch_ids, message):
    login(CONTRIBUTOR)

    resp = _file_report(client, pitch_ids)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == message


def test_create_report_rejects_non_boolean_flag(client, pichenibule_pitch_ids, login):
    login(CONTRIBUTOR)
    resp = _file_report(client, pichenibule_pitch_ids, visual_check="yes")
    assert resp.status_code == 400


def test_create_report_unknown_pitch_writes_nothing(client, pichenibule_pitch_ids, login):
    login(CONTRIBUTOR)

    resp = _file_report(client, pichenibule_pitch_ids + ["missing-pitch"])

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Longueur non trouvée"
    assert Report.query.count() == 0


@pytest.fixture()
def own_report_id(client, pichenibule_pitch_ids, login):
    login(CONTRIBUTOR)
    resp = _file_report(client, pichenibule_pitch_ids[:1], visual_check=True, comment="RAS")
    return resp.get_json()["ids"][0]


def test_update_own_report_replaces_all_fields(client, own_report_id):
    resp = client.patch(f"/api/reports/{own_report_id}", json={"cleaning_done": True})

    assert resp.status_code == 200
    report = Report.query.get(own_report_id)
    assert report.cleaning_done is True
    assert report.visual_check is None
    assert report.comment is None


def test_cannot_update_someone_elses_report(client, own_report_id, login):
    login(ADMIN)

    resp = client.patch(f"/api/reports/{own_report_id}", json={"comment": "Hijack"})

    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Vous ne pouvez modifier que vos propres rapports"
    assert Report.query.get(own_report_id).comment == "RAS"


def test_cannot_delete_someone_elses_report(client, own_report_id, login):
    login(ADMIN)

    resp = client.delete(f"/api/reports/{own_report_id}")

    assert resp.status_code == 403
    assert resp.get_json()["error"] == "Vous ne pouvez supprimer que vos propres rapports"
    assert Report.query.get(own_report_id) is not None


def test_delete_own_report(client, own_report_id):
    resp = client.delete(f"/api/reports/{own_report_id}")

    assert resp.status_code == 200
    assert Report.query.get(own_report_id) is None


def test_update_unknown_report(client, seeded, login):
    login(CONTRIBUTOR)

    resp = client.patch("/api/reports/missing", json={})

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Rapport non trouvé"


def test_delete_requires_login(client, own_report_id):
    with client.session_transaction() as sess:
        sess.clear()

    assert client.delete(f"/api/reports/{own_report_id}").status_code == 401
