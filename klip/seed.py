from klip.extensions import db
from klip.models import User, Crag, Sector, Route, Pitch
from klip.helpers.roles import ADMIN, ROUTE_SETTER, CONTRIBUTOR


def seed_demo_data() -> dict:
    """
    Small demo topo for local dev and tests: three users (one per role),
    a single-pitch route at Buoux and a multi-pitch route in the Verdon.
    """
    admin = User(firstname="Jean", lastname="Admin", email="admin@klip.test", role=ADMIN)
    route_setter = User(firstname="Pierre", lastname="Ouvreur", email="ouvreur@klip.test", role=ROUTE_SETTER)
    contributor = User(firstname="Marie", lastname="Grimpeuse", email="marie@klip.test", role=CONTRIBUTOR)

    buoux = Crag(name="Buoux", convention=True)
    verdon = Crag(name="Verdon", convention=False)

    styx = Sector(name="Styx", crag=buoux)
    escales = Sector(name="Escalès", crag=verdon)

    rose = Route(number=1, name="Rose des Sables", sector=styx, length=25)
    rose.pitches.append(Pitch(position=1, cotation="7a", length=25, nb_bolts=10))

    pichenibule = Route(
        number=1,
        name="Pichenibule",
        sector=escales,
        description="Grande voie mythique du Verdon",
    )
    pichenibule.pitches.append(Pitch(position=1, cotation="6b", length=35, nb_bolts=8))
    pichenibule.pitches.append(Pitch(position=2, cotation="6c", length=40, nb_bolts=10))

    db.session.add_all([admin, route_setter, contributor, buoux, verdon])
    db.session.commit()

    return {
        "users": {"admin": admin, "route_setter": route_setter, "contributor": contributor},
        "crags": {"buoux": buoux, "verdon": verdon},
        "sectors": {"styx": styx, "escales": escales},
        "routes": {"rose": rose, "pichenibule": pichenibule},
    }
