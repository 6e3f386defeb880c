"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "postgresql+asyncpg://eshop:eshop_dev_password@db:5432/eshop"
    create_tables_on_startup: bool = False

    # File storage
    content_root: str = "."
    user_content_folder: str = "user-content"

    # Catalog
    supported_languages: list[str] = ["vi", "en"]
    default_language_id: str = "vi"
    default_page_size: int = 10

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()
