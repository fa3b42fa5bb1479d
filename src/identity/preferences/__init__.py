"""Preference directory factory.

Provides get_preference_directory() / set_preference_directory() to swap
implementations:
- InMemoryPreferenceDirectory for development and testing
- an adapter over the user profile service in production
"""

from identity.preferences.memory_adapter import InMemoryPreferenceDirectory
from identity.preferences.port import PreferenceDirectory

_current_directory: PreferenceDirectory | None = None


def get_preference_directory() -> PreferenceDirectory:
    """Return the current directory. Defaults to InMemoryPreferenceDirectory."""
    global _current_directory
    if _current_directory is None:
        _current_directory = InMemoryPreferenceDirectory()
    return _current_directory


def set_preference_directory(directory: PreferenceDirectory) -> None:
    """Override the active directory (useful for tests)."""
    global _current_directory
    _current_directory = directory


def reset_preference_directory() -> None:
    """Reset to default directory."""
    global _current_directory
    _current_directory = None
