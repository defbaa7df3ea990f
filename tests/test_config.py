"""Tests for configuration manager."""

import tempfile
from pathlib import Path

import pytest  # type: ignore[import-not-found]
import yaml  # type: ignore[import-untyped]

from harvest_reports.core.config import ConfigManager, ReportSettings


@pytest.fixture
def temp_config_path():
    """Create a temporary config file path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "config.yml"


class TestConfigManager:
    """Test ConfigManager."""

    def test_initialization_creates_default_config(self, temp_config_path: Path) -> None:
        """Test that initialization creates default configuration."""
        assert not temp_config_path.exists()

        config = ConfigManager(temp_config_path)

        assert temp_config_path.exists()
        assert config.get("version") == "1.0"
        assert config.get("general.timezone") == "UTC"
        assert config.get("general.week_start") == "monday"
        assert config.get("connection.account") is None

    def test_load_existing_config(self, temp_config_path: Path) -> None:
        """Test loading existing configuration."""
        config_data = {
            "version": "1.0",
            "connection": {"account": "acme", "username": "me@acme.test"},
            "general": {"timezone": "America/New_York"},
        }

        with open(temp_config_path, "w") as f:
            yaml.dump(config_data, f)

        config = ConfigManager(temp_config_path)

        assert config.get("connection.account") == "acme"
        assert config.get("connection.username") == "me@acme.test"
        assert config.get("general.timezone") == "America/New_York"

    def test_merge_with_defaults(self, temp_config_path: Path) -> None:
        """Test that partial config is merged with defaults."""
        with open(temp_config_path, "w") as f:
            yaml.dump({"version": "1.0", "connection": {"account": "acme"}}, f)

        config = ConfigManager(temp_config_path)

        assert config.get("connection.account") == "acme"
        assert config.get("connection.timeout") == 30
        assert config.get("general.week_start") == "monday"
        assert config.get("advanced.log_level") == "WARNING"

    def test_get_nonexistent_key_returns_default(self, temp_config_path: Path) -> None:
        """Test getting nonexistent key returns default."""
        config = ConfigManager(temp_config_path)

        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "default") == "default"
        assert config.get("connection.password", "unset") == "unset"

    def test_set_value_persists(self, temp_config_path: Path) -> None:
        """Test setting configuration values."""
        config = ConfigManager(temp_config_path)

        config.set("connection.timeout", 60)

        assert config.get("connection.timeout") == 60
        assert ConfigManager(temp_config_path).get("connection.timeout") == 60

    def test_set_creates_missing_keys(self, temp_config_path: Path) -> None:
        """Test that set creates missing intermediate keys."""
        config = ConfigManager(temp_config_path)

        config.set("custom.nested.value", "test")

        assert config.get("custom.nested.value") == "test"

    def test_invalid_set_is_rolled_back(self, temp_config_path: Path) -> None:
        """Test that a rejected value does not stay in memory."""
        config = ConfigManager(temp_config_path)

        with pytest.raises(ValueError, match="Invalid configuration"):
            config.set("connection.timeout", 0)

        assert config.get("connection.timeout") == 30
        assert config.validate() is True

    def test_week_start_validation(self, temp_config_path: Path) -> None:
        """Test week_start enum validation."""
        config = ConfigManager(temp_config_path)

        for day in ["monday", "sunday", "saturday"]:
            config.set("general.week_start", day)
            assert config.get("general.week_start") == day

        with pytest.raises(ValueError):
            config.set("general.week_start", "tuesday")

    def test_log_level_validation(self, temp_config_path: Path) -> None:
        """Test log_level enum validation."""
        config = ConfigManager(temp_config_path)

        for level in ["DEBUG", "INFO", "WARNING", "ERROR"]:
            config.set("advanced.log_level", level)
            assert config.get("advanced.log_level") == level

        with pytest.raises(ValueError):
            config.set("advanced.log_level", "TRACE")

    def test_reset_to_defaults(self, temp_config_path: Path) -> None:
        """Test resetting configuration to defaults."""
        config = ConfigManager(temp_config_path)
        config.set("connection.account", "acme")

        config.reset()

        assert config.get("connection.account") is None

    def test_to_dict_is_copy(self, temp_config_path: Path) -> None:
        """Test converting config to dictionary."""
        config = ConfigManager(temp_config_path)

        config_dict = config.to_dict()
        config_dict["version"] = "9.9"

        assert config.get("version") == "1.0"

    def test_get_all_keys(self, temp_config_path: Path) -> None:
        """Test getting all configuration keys."""
        keys = ConfigManager(temp_config_path).get_all_keys()

        assert "version" in keys
        assert "connection.account" in keys
        assert "general.timezone" in keys
        assert "advanced.log_level" in keys

    def test_corrupted_config_creates_backup(self, temp_config_path: Path) -> None:
        """Test that corrupted config is backed up and defaults used."""
        with open(temp_config_path, "w") as f:
            yaml.dump({"version": "1.0", "general": {"week_start": "friday"}}, f)

        with pytest.raises(ValueError, match="Config validation failed"):
            ConfigManager(temp_config_path)

        assert temp_config_path.with_suffix(".yml.backup").exists()
        with open(temp_config_path) as f:
            assert yaml.safe_load(f)["general"]["week_start"] == "monday"


class TestReportSettings:
    """Test ReportSettings."""

    def test_defaults(self) -> None:
        """Test default settings."""
        settings = ReportSettings()

        assert settings.time_zone is None
        assert settings.start_of_week == "monday"

    def test_from_config(self, temp_config_path: Path) -> None:
        """Test building settings from configuration."""
        config = ConfigManager(temp_config_path)
        config.set("general.timezone", "Europe/Paris")
        config.set("general.week_start", "sunday")

        settings = ReportSettings.from_config(config)

        assert settings == ReportSettings(time_zone="Europe/Paris", start_of_week="sunday")

    def test_immutable(self) -> None:
        """Test that settings cannot be changed after creation."""
        settings = ReportSettings()

        with pytest.raises(AttributeError):
            settings.time_zone = "UTC"  # type: ignore[misc]
