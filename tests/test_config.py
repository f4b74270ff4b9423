"""
Tests for Settings and ProjectNameGuard.
"""

import pytest

from treestore.config import ProjectNameGuard, Settings


class TestProjectNameGuard:
    """Tests for ProjectNameGuard."""

    def test_defaults(self):
        """Test the guard starts enabled with the replacement name."""
        guard = ProjectNameGuard()
        assert guard.enabled
        assert guard.project_name() == "pamela"

    def test_enable_disable(self):
        """Test toggling switches the reported name."""
        guard = ProjectNameGuard()

        guard.disable()
        assert not guard.enabled
        assert guard.project_name() == "My Cool Project"

        guard.enable()
        assert guard.project_name() == "pamela"

    def test_update_partial(self):
        """Test update changes only the given fields."""
        guard = ProjectNameGuard()
        guard.update(replacement_name="custom")

        assert guard.replacement_name == "custom"
        assert guard.original_name == "My Cool Project"
        assert guard.enabled

    def test_update_unknown_field(self):
        """Test update rejects unknown fields."""
        with pytest.raises(TypeError):
            ProjectNameGuard().update(nickname="x")

    def test_snapshot_is_copy(self):
        """Test changing a snapshot leaves the guard untouched."""
        guard = ProjectNameGuard()
        copy = guard.snapshot()
        copy.disable()

        assert guard.enabled
        assert copy == ProjectNameGuard(enabled=False)

    def test_reset(self):
        """Test reset restores construction-time values."""
        guard = ProjectNameGuard()
        guard.update(enabled=False, original_name="A", replacement_name="B")
        guard.reset()

        assert guard == ProjectNameGuard()

    def test_apply(self):
        """Test apply replaces every occurrence only when enabled."""
        guard = ProjectNameGuard()
        text = "My Cool Project loves My Cool Project"

        assert guard.apply(text) == "pamela loves pamela"
        assert guard.apply("nothing here") == "nothing here"
        assert guard.apply("") == ""

        guard.disable()
        assert guard.apply(text) == text

    def test_apply_custom_names(self):
        """Test apply with custom names."""
        guard = ProjectNameGuard(original_name="Foo", replacement_name="Bar")
        assert guard.apply("Foo.Foo") == "Bar.Bar"

    def test_to_dict(self):
        """Test to_dict exposes the public fields only."""
        assert ProjectNameGuard().to_dict() == {
            "enabled": True,
            "original_name": "My Cool Project",
            "replacement_name": "pamela",
        }


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self):
        """Test defaults apply when the environment is empty."""
        settings = Settings.from_env({})

        assert settings.host == "0.0.0.0"
        assert settings.port == 8080
        assert settings.log_level == "INFO"
        assert settings.db_path == "data/records.db"
        assert settings.company_name == "Bs Beverages"
        assert settings.guard.enabled

    def test_overrides(self):
        """Test every variable is honoured."""
        settings = Settings.from_env({
            "TREESTORE_HOST": "127.0.0.1",
            "TREESTORE_PORT": "9000",
            "LOG_LEVEL": "debug",
            "TREESTORE_DB_PATH": ":memory:",
            "TREESTORE_COMPANY": "Around the Horn",
            "TREESTORE_PROJECT_NAME_GUARD": "off",
        })

        assert settings.host == "127.0.0.1"
        assert settings.port == 9000
        assert settings.log_level == "DEBUG"
        assert settings.db_path == ":memory:"
        assert settings.company_name == "Around the Horn"
        assert not settings.guard.enabled

    @pytest.mark.parametrize("raw", ["abc", "70000", "-1"])
    def test_invalid_port(self, raw):
        """Test a bad port raises ValueError."""
        with pytest.raises(ValueError):
            Settings.from_env({"TREESTORE_PORT": raw})
