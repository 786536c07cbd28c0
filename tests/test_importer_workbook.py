import pytest
from openpyxl import Workbook, load_workbook
from openpyxl.chart import BarChart, Reference

from klip.extensions import db
from klip.importer import TopoStore, WorkbookOpenError, import_workbook
from klip.models import Crag, Pitch, Report, Route, Sector, User

TITLE = ["Suivi maintenance"]
HEADER = ["SITE", "", "CONVENTION", "SECTEUR", "VOIE", "", "", "", "NB LONGUEURS", "NB POINTS"]


def row(site=None, convention=None, sector=None, label=None, pitches=None, bolts=None):
    return [site, None, convention, sector, label, None, None, None, pitches, bolts]


def write_workbook(path, sheets):
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        ws.append(TITLE)
        ws.append(HEADER)
        for r in rows:
            ws.append(r)
    wb.save(path)
    return path


@pytest.fixture()
def xlsx(tmp_path):
    def _make(sheets):
        return write_workbook(tmp_path / "maintenance.xlsx", sheets)
    return _make


def test_continuation_row_adds_pitch_to_previous_route(app, xlsx):
    path = xlsx({
        "Buoux": [
            row("Buoux", "OUI", "Styx", "1 - Test", 2, 8),
            row(None, None, None, "L2: 6c", None, 9),
        ],
    })

    results = import_workbook(path)

    assert results[0].routes == 1
    assert results[0].pitches == 2

    routes = Route.query.all()
    assert len(routes) == 1
    route = routes[0]
    assert route.number == 1
    assert route.name == "Test"
    assert [(p.position, p.cotation, p.nb_bolts) for p in route.pitches] == [
        (1, None, 8),
        (2, "6c", 9),
    ]


def test_same_site_gives_one_crag(app, xlsx):
    path = xlsx({
        "Buoux": [
            row("Buoux", "Y", "Styx", "1 - Rose des Sables 7a", None, 10),
            row("Buoux", None, "Styx", "2 - La Rose 6b+"),
            row("Buoux", None, "Bout du monde", "Les pas perdus"),
        ],
    })

    import_workbook(path)

    crags = Crag.query.all()
    assert len(crags) == 1
    assert crags[0].convention is True
    assert Sector.query.count() == 2

    routes = {r.name: r for r in Route.query.all()}
    assert routes["Rose des Sables"].pitches[0].cotation == "7a"
    assert routes["La Rose"].number == 2
    assert routes["Les pas perdus"].number == 0
    assert routes["Les pas perdus"].sector.name == "Bout du monde"


def test_first_convention_value_wins_for_a_crag(app, xlsx):
    path = xlsx({
        "Buoux": [
            row("Buoux", "NON", "Styx", "1 - A"),
            row("Buoux", "OUI", "Styx", "2 - B"),
        ],
    })

    import_workbook(path)

    assert Crag.query.one().convention is False


def test_rows_without_context_or_route_are_skipped(app, xlsx):
    path = xlsx({
        "Feuille": [
            row(None, None, None, "1 - Orpheline"),
            row("Buoux", None, None, "2 - Sans secteur"),
            row(None, None, "Styx", None),
            row(None, None, None, "VOIE"),
            row(None, None, None, "L3: 6a"),
            row(None, None, None, "1 - Enfin"),
        ],
    })

    results = import_workbook(path)

    # two rows lacked site/sector, "L3" had no route to attach to
    assert results[0].skipped == 3
    assert [r.name for r in Route.query.all()] == ["Enfin"]


def test_route_state_resets_between_sheets(app, xlsx):
    path = xlsx({
        "Buoux": [row("Buoux", None, "Styx", "1 - Test")],
        "Verdon": [
            row("Verdon", None, "Escalès", None),
            row(None, None, None, "L2: 6c"),
        ],
    })

    results = import_workbook(path)

    assert [r.name for r in results] == ["Buoux", "Verdon"]
    assert results[1].pitches == 0
    assert results[1].skipped == 1
    assert Pitch.query.count() == 1


def test_placeholder_sheet_is_ignored(app, xlsx):
    path = xlsx({
        "Buoux": [row("Buoux", None, "Styx", "1 - Test")],
        "Sheet2": [row("Ailleurs", None, "Nulle part", "1 - Fantome")],
    })

    results = import_workbook(path)

    assert [r.name for r in results] == ["Buoux"]
    assert [c.name for c in Crag.query.all()] == ["Buoux"]


def test_chart_sheet_is_ignored(app, xlsx):
    path = xlsx({"Buoux": [row("Buoux", None, "Styx", "1 - Test", 1, 6)]})
    wb = load_workbook(path)
    chart = BarChart()
    chart.add_data(Reference(wb["Buoux"], min_col=10, min_row=3, max_row=3))
    wb.create_chartsheet("Graph").add_chart(chart)
    wb.save(path)

    results = import_workbook(path)

    assert [r.name for r in results] == ["Buoux"]
    assert Route.query.count() == 1


def test_import_wipes_previous_topo(app, seeded, xlsx):
    pitch = Pitch.query.first()
    db.session.add(Report(pitch_id=pitch.id, reporter_id=seeded["users"]["admin"].id))
    db.session.commit()

    path = xlsx({"Céüse": [row("Céüse", None, "Demi-lune", "1 - Berlin")]})
    import_workbook(path)

    assert Report.query.count() == 0
    assert [c.name for c in Crag.query.all()] == ["Céüse"]
    # users are not part of the topo
    assert User.query.count() == 3


class FailingStore(TopoStore):
    def __init__(self):
        super().__init__()
        self.rolled_back = False

    def create_route(self, sector_id, number, name):
        raise RuntimeError("disk full")

    def rollback(self):
        self.rolled_back = True
        super().rollback()


def test_store_failure_aborts_the_run(app, xlsx):
    path = xlsx({"Buoux": [row("Buoux", None, "Styx", "1 - Test")]})
    store = FailingStore()

    with pytest.raises(RuntimeError):
        import_workbook(path, store=store)

    assert store.rolled_back
    assert Crag.query.count() == 0


def test_unreadable_file(app, tmp_path):
    bogus = tmp_path / "not-excel.xlsx"
    bogus.write_text("hello")

    with pytest.raises(WorkbookOpenError):
        import_workbook(bogus)


def test_cli_refuses_without_fresh_flag(app, seeded, xlsx):
    path = xlsx({"Buoux": [row("Buoux", None, "Styx", "1 - Test")]})

    result = app.test_cli_runner().invoke(args=["import-excel", str(path)])

    assert result.exit_code != 0
    assert "--fresh" in result.output
    # nothing was wiped
    assert Crag.query.count() == 2


def test_cli_imports_with_fresh_flag(app, xlsx):
    path = xlsx({"Buoux": [row("Buoux", None, "Styx", "1 - Test")]})

    result = app.test_cli_runner().invoke(args=["import-excel", str(path), "--fresh"])

    assert result.exit_code == 0, result.output
    assert "Routes: 1" in result.output


def test_cli_missing_file_exits_non_zero(app, tmp_path):
    result = app.test_cli_runner().invoke(
        args=["import-excel", str(tmp_path / "missing.xlsx"), "--fresh"]
    )

    assert result.exit_code == 1
    assert "Cannot open workbook" in result.output
