"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_BACKEND_DIR = Path(__file__).resolve().parents[2]
_ENV_FILE = _BACKEND_DIR / ".env"

def _expand_origin(value: str) -> list[str]:
    origin = value.rstrip("/")
    if origin in {"http://localhost", "http://127.0.0.1"}:
        return [f"{origin}:3000", origin]
    return [origin]


class Settings(BaseSettings):
    # ===== Core =====
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # ===== Half-Atwood lab =====
    HALF_ATWOOD_GRAVITY_M_S2: float = 10.0  # classroom value, not 9.81
    HALF_ATWOOD_TARGET_DISTANCE_M: float = 1.0
    RUN_MAX_DT_S: float = 0.035  # matches the front end's frame clamp
    RUN_MAX_FRAMES: int = 20000

    # ===== Resonance tube lab =====
    RESONANCE_ROOM_TEMP_C: float = 20.0
    RESONANCE_TUBE_DIAMETER_M: float = 0.04
    RESONANCE_AIR_LENGTH_MIN_M: float = 0.08
    RESONANCE_AIR_LENGTH_MAX_M: float = 0.95
    RESONANCE_MEASUREMENT_NOISE_M: float = 0.0015

    # ===== Frontend & CORS =====
    FRONTEND_ORIGIN: str | None = Field(
        default=None, validation_alias="FRONTEND_ORIGIN"
    )
    CORS_ALLOW_ORIGINS: list[str] = Field(default_factory=list, validate_default=True)

    model_config = SettingsConfigDict(env_file=_ENV_FILE, extra="ignore")

    @field_validator("CORS_ALLOW_ORIGINS", mode="before")
    @classmethod
    def _populate_cors(cls, value: list[str] | None, info: ValidationInfo) -> list[str]:
        origins: list[str] = []

        if value:
            for origin in value:
                origins.extend(_expand_origin(origin))

        frontend_origin = info.data.get("FRONTEND_ORIGIN") if info.data else None
        if isinstance(frontend_origin, str) and frontend_origin.strip():
            origins.extend(_expand_origin(frontend_origin))

        return list(dict.fromkeys(origins)) or _expand_origin("http://localhost")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()


settings = get_settings()
