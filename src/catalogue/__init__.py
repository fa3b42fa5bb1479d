"""Eatery catalogue factory.

Provides get_catalogue() / set_catalogue() to swap implementations:
- InMemoryCatalogue for development and testing
- an adapter over the catalogue service in production
"""

from protean.exceptions import ObjectNotFoundError

from catalogue.eatery import Eatery
from catalogue.memory_adapter import InMemoryCatalogue
from catalogue.port import EateryCatalogue

_current_catalogue: EateryCatalogue | None = None


def get_catalogue() -> EateryCatalogue:
    """Return the current catalogue. Defaults to an empty InMemoryCatalogue."""
    global _current_catalogue
    if _current_catalogue is None:
        _current_catalogue = InMemoryCatalogue()
    return _current_catalogue


def set_catalogue(catalogue: EateryCatalogue) -> None:
    """Override the active catalogue (useful for tests)."""
    global _current_catalogue
    _current_catalogue = catalogue


def reset_catalogue() -> None:
    """Reset to default catalogue."""
    global _current_catalogue
    _current_catalogue = None


def require_eatery(eatery_id) -> Eatery:
    """Fetch an eatery or raise ObjectNotFoundError."""
    eatery = get_catalogue().get_eatery(str(eatery_id))
    if eatery is None:
        raise ObjectNotFoundError({"eatery_id": [f"Eatery not found: {eatery_id}"]})
    return eatery


__all__ = [
    "Eatery",
    "EateryCatalogue",
    "InMemoryCatalogue",
    "get_catalogue",
    "require_eatery",
    "reset_catalogue",
    "set_catalogue",
]
