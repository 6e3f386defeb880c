"""Tests for application settings."""

import importlib
import warnings

import pytest

from app.infrastructure import config
from app.infrastructure.config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Catalog defaults apply when nothing is set."""
        monkeypatch.delenv("CONTENT_ROOT", raising=False)

        settings = Settings(_env_file=None)

        assert settings.supported_languages == ["vi", "en"]
        assert settings.default_language_id == "vi"
        assert settings.user_content_folder == "user-content"
        assert settings.content_root == "."

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables override defaults."""
        monkeypatch.setenv("DEFAULT_PAGE_SIZE", "25")
        monkeypatch.setenv("SUPPORTED_LANGUAGES", '["vi", "en", "fr"]')

        settings = Settings(_env_file=None)

        assert settings.default_page_size == 25
        assert settings.supported_languages == ["vi", "en", "fr"]

    def test_no_deprecation_warning(self) -> None:
        """Defining and building settings emits no deprecation warnings."""
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            module = importlib.reload(config)
            module.Settings(_env_file=None)

    def test_env_file_configured(self) -> None:
        """Settings are also read from a .env file."""
        assert Settings.model_config["env_file"] == ".env"
