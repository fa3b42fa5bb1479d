"""Eatery catalogue port (abstract interface).

The catalogue is owned by a separate subsystem that ingests the open-data
feed. The review and recommendation code only ever reads from it.
"""

from abc import ABC, abstractmethod

from catalogue.eatery import Eatery


class EateryCatalogue(ABC):
    """Abstract eatery catalogue interface."""

    @abstractmethod
    def get_eatery(self, eatery_id: str) -> Eatery | None:
        """Return the eatery with this id, or None if unknown."""
        ...

    @abstractmethod
    def list_eateries(self) -> list[Eatery]:
        """Return every eatery in the catalogue."""
        ...
