"""
Application settings.

Defaults suit a local single-user setup (SQLite file next to where the app is started).
Every value can be overridden through the environment or a `.env` file, e.g.

DATABASE_URL="sqlite:///./scores.db"
DATABASE_ECHO=true
LOG_LEVEL="DEBUG"
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # SQLAlchemy URL of the database holding the sessions
    DATABASE_URL: str = "sqlite:///./whist.db"
    # Echo the emitted SQL (debugging)
    DATABASE_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()
