import pytest
from catalogue import Eatery, InMemoryCatalogue, set_catalogue
from reviews.audit import InMemoryAuditSink, set_audit_sink

# E1 and the user location below are about 0.79 km apart
E1 = Eatery(
    id="eatery-1",
    name="Green Bowl",
    address="1 Orchard Road",
    postal_code="238801",
    latitude=1.30,
    longitude=103.80,
    tags=("Vegan",),
)
USER_LOCATION = (1.305, 103.805)


def _more_eateries(count):
    return [
        Eatery(
            id=f"eatery-{n}",
            name=f"Eatery {n}",
            postal_code="100000",
            latitude=1.30 + n / 100,
            longitude=103.80,
            tags=("Halal",),
        )
        for n in range(2, count + 2)
    ]


@pytest.fixture(autouse=True)
def catalogue():
    cat = InMemoryCatalogue([E1, *_more_eateries(7)])
    set_catalogue(cat)
    return cat


@pytest.fixture(autouse=True)
def audit_sink():
    sink = InMemoryAuditSink()
    set_audit_sink(sink)
    return sink
