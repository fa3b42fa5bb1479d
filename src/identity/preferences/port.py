"""Abstract port for the store of users' dietary preferences."""

from abc import ABC, abstractmethod


class PreferenceDirectory(ABC):
    """Read access to the preference tags a user saved on their profile."""

    @abstractmethod
    def preferences_for(self, user_id: str) -> list[str]:
        """Preference tags for the user; empty when none are stored."""
