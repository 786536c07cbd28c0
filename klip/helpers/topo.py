from klip.helpers.grades import get_max_cotation

UNKNOWN_COTATION_LABEL = "Cotation?"
UNKNOWN_LENGTH_LABEL = "?m"


def _field(obj, name):
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def route_total_length(route_length, pitches):
    """
    Explicit route length wins. Otherwise sum the pitch lengths, but only
    when every pitch has one: a partial sum would understate the route.
    """
    if route_length is not None:
        return route_length

    lengths = [_field(p, "length") for p in pitches or []]
    if any(length is None for length in lengths):
        return None
    return sum(lengths)


def route_display_name(number, name) -> str:
    if name:
        return f"{number}. {name}"
    return f"Voie {number}"


def summarize_route(route) -> dict:
    """
    Derived values shown in a route list: hardest grade and total length,
    with "?" placeholders where the topo is incomplete.
    """
    pitches = list(_field(route, "pitches") or [])

    max_cotation = get_max_cotation(pitches)
    total_length = route_total_length(_field(route, "length"), pitches)
    all_graded = all(_field(p, "cotation") is not None for p in pitches)

    return {
        "label": route_display_name(_field(route, "number"), _field(route, "name")),
        "max_cotation": max_cotation,
        "total_length": total_length,
        "cotation_label": max_cotation if max_cotation is not None else UNKNOWN_COTATION_LABEL,
        "length_label": f"{total_length}m" if total_length is not None else UNKNOWN_LENGTH_LABEL,
        "cotation_complete": all_graded,
        "length_complete": total_length is not None,
    }
