from klip.helpers.topo import route_display_name, route_total_length, summarize_route


def test_explicit_length_wins():
    assert route_total_length(25, [{"length": 10}, {"length": None}]) == 25


def test_sum_when_all_pitches_have_length():
    assert route_total_length(None, [{"length": 35}, {"length": 40}]) == 75


def test_partial_data_gives_no_total():
    assert route_total_length(None, [{"length": 35}, {"length": None}]) is None


def test_display_name():
    assert route_display_name(3, "Rose des Sables") == "3. Rose des Sables"
    assert route_display_name(7, None) == "Voie 7"


def test_summary_complete_route():
    route = {
        "number": 1,
        "name": "Pichenibule",
        "length": None,
        "pitches": [
            {"cotation": "6b", "length": 35},
            {"cotation": "6c", "length": 40},
            {"cotation": "6a+", "length": 20},
        ],
    }
    summary = summarize_route(route)
    assert summary["max_cotation"] == "6c"
    assert summary["total_length"] == 95
    assert summary["length_label"] == "95m"
    assert summary["cotation_complete"] is True


def test_summary_placeholders():
    route = {
        "number": 2,
        "name": None,
        "length": None,
        "pitches": [{"cotation": None, "length": None}],
    }
    summary = summarize_route(route)
    assert summary["label"] == "Voie 2"
    assert summary["max_cotation"] is None
    assert summary["cotation_label"] == "Cotation?"
    assert summary["length_label"] == "?m"
    assert summary["cotation_complete"] is False
    assert summary["length_complete"] is False
