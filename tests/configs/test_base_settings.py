"""
Test suite for base configuration.

System role: Verification of environment detection
"""

from studyhub.configs.base import BaseSettings


class TestBaseSettings:
    """Test suite for BaseSettings.is_development."""

    def test_unconfigured_environment_hides_error_details(self, monkeypatch) -> None:
        """Test raw error messages require an explicit development environment."""
        # Arrange
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        # Act
        settings = BaseSettings(_env_file=None)

        # Assert
        assert settings.environment == "production"
        assert settings.is_development is False

    def test_development_opt_in(self, monkeypatch) -> None:
        """Test ENVIRONMENT=development enables error details."""
        # Arrange
        monkeypatch.setenv("ENVIRONMENT", "Development")

        # Act
        settings = BaseSettings(_env_file=None)

        # Assert
        assert settings.is_development is True
