"""Eatery records as served by the external catalogue."""

from dataclasses import dataclass, field


def dedupe_tags(tags) -> tuple[str, ...]:
    """Keep the first spelling of each tag, compared case-insensitively."""
    seen = set()
    unique = []
    for tag in tags or ():
        if tag is None:
            continue
        cleaned = tag.strip()
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        unique.append(cleaned)
    return tuple(unique)


@dataclass(frozen=True)
class Eatery:
    """Read-only view of a licensed eatery."""

    id: str
    name: str
    address: str | None = None
    postal_code: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    description: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", dedupe_tags(self.tags))

    def has_tag(self, tag: str) -> bool:
        return tag.strip().lower() in {t.lower() for t in self.tags}
