"""In-memory eatery catalogue for development and testing."""

from catalogue.eatery import Eatery
from catalogue.port import EateryCatalogue


class InMemoryCatalogue(EateryCatalogue):
    def __init__(self, eateries: list[Eatery] | None = None) -> None:
        self._eateries: dict[str, Eatery] = {}
        for eatery in eateries or []:
            self.add(eatery)

    def add(self, eatery: Eatery) -> Eatery:
        self._eateries[str(eatery.id)] = eatery
        return eatery

    def get_eatery(self, eatery_id: str) -> Eatery | None:
        return self._eateries.get(str(eatery_id))

    def list_eateries(self) -> list[Eatery]:
        return list(self._eateries.values())
