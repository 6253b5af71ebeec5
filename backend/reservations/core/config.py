from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, model_validator
from typing import Any, ClassVar
from pathlib import Path
import os


class Settings(BaseSettings):
    PROJECT_NAME: str = "Reservations API"
    API_PREFIX: str = "/api"

    # Database URL
    # Use an absolute path so running the app from different directories
    # (e.g., repo root or backend/) always resolves the same DB file.
    BASE_DIR: ClassVar[Path] = Path(__file__).resolve().parents[2]
    SQLALCHEMY_DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'reservations.db'}"

    # Pool sizing, ignored for SQLite
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 5
    DB_POOL_RECYCLE: int = 300
    DB_POOL_TIMEOUT: float = 5.0

    # CORS origins
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]
    CORS_ALLOW_ALL: bool = False

    LOG_LEVEL: str = "INFO"

    # OpenTelemetry
    ENABLE_TRACING: bool = False
    ENABLE_CONSOLE_TRACING: bool = False
    OTEL_TRACES_SAMPLER_RATIO: float = 1.0

    # Insert the default reservation options on startup when the table is empty
    SEED_DEFAULT_OPTIONS: bool = False

    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=True,
    )

    @field_validator("API_PREFIX", mode="before")
    def normalize_prefix(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().rstrip("/")
            if v and not v.startswith("/"):
                v = f"/{v}"
        return v

    @field_validator("LOG_LEVEL", mode="before")
    def upper_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("OTEL_TRACES_SAMPLER_RATIO")
    def clamp_ratio(cls, v: float) -> float:
        return 0.0 if v < 0 else (1.0 if v > 1 else v)

    @model_validator(mode="after")
    def allow_all_if_requested(self) -> "Settings":
        if self.CORS_ALLOW_ALL:
            self.CORS_ORIGINS = ["*"]
        return self


def load_settings() -> "Settings":
    return Settings(_env_file=os.getenv("ENV_FILE", str(Path(__file__).resolve().parents[2] / ".env")))


settings = load_settings()
