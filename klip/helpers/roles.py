ADMIN = "ADMIN"
ROUTE_SETTER = "ROUTE_SETTER"
CONTRIBUTOR = "CONTRIBUTOR"

USER_ROLES = (ADMIN, ROUTE_SETTER, CONTRIBUTOR)

USER_ROLE_LABELS = {
    ADMIN: "Admin",
    ROUTE_SETTER: "Ouvreur",
    CONTRIBUTOR: "Contributeur",
}

# Roles allowed to create/edit crags, sectors, routes and pitches
TOPO_EDITOR_ROLES = {ADMIN, ROUTE_SETTER}


def role_label(role: str) -> str:
    return USER_ROLE_LABELS.get(role, USER_ROLE_LABELS[CONTRIBUTOR])


def can_edit_topo(user) -> bool:
    """Unknown users (no User row yet) are never editors."""
    if user is None:
        return False
    return user.role in TOPO_EDITOR_ROLES
