"""In-memory preference directory for development and testing."""

from identity.preferences.port import PreferenceDirectory


def parse_preferences(raw) -> list[str]:
    """Split a comma-separated preference string, dropping blanks."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


class InMemoryPreferenceDirectory(PreferenceDirectory):
    """Keeps each user's preferences as the raw comma-separated string."""

    def __init__(self, preferences: dict[str, str] | None = None) -> None:
        self._preferences: dict[str, str] = dict(preferences or {})

    def set_preferences(self, user_id: str, raw: str | None) -> None:
        self._preferences[str(user_id)] = raw or ""

    def preferences_for(self, user_id: str) -> list[str]:
        return parse_preferences(self._preferences.get(str(user_id)))
