import pytest
from identity.preferences.memory_adapter import InMemoryPreferenceDirectory, parse_preferences
from identity.principal import Principal, Role


class TestPrincipal:
    @pytest.mark.parametrize("role, expected", [(Role.USER, False), (Role.MODERATOR, True), (Role.ADMIN, True)])
    def test_can_moderate(self, role, expected):
        assert Principal(user_id="u", role=role).can_moderate is expected


class TestPreferences:
    def test_parse_comma_separated(self):
        assert parse_preferences(" vegan, halal ,, ") == ["vegan", "halal"]

    def test_parse_empty(self):
        assert parse_preferences(None) == []
        assert parse_preferences("") == []

    def test_directory_defaults_to_no_preferences(self):
        assert InMemoryPreferenceDirectory().preferences_for("user-1") == []

    def test_directory_returns_parsed_preferences(self):
        directory = InMemoryPreferenceDirectory({"user-1": "vegan,gluten free"})
        assert directory.preferences_for("user-1") == ["vegan", "gluten free"]
