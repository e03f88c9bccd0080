from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Pre-flattened entity graph loaded at startup; empty means the bundled example
    ONTOLOGY_PATH: str = ""
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    DEFAULT_DIAGRAM_KIND: str = "flowchart"
    DEFAULT_LAYOUT: str = "elk"

    VIEW_STATE_MAX_ENTRIES: int = Field(default=1000, ge=1)
    VIEW_STATE_TTL_SECONDS: float = 24 * 60 * 60
    RENDER_CACHE_MAX_ENTRIES: int = Field(default=200, ge=1)
    RENDER_CACHE_TTL_SECONDS: float = 60 * 60

    ANIMATION_MOVE_DURATION_MS: int = 500
    ANIMATION_REVEAL_DURATION_MS: int = 200
    ANIMATION_REVEAL_DELAY_MS: int = 500

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    CORS_ORIGIN_REGEX: str | None = None

    # Firestore-backed view snapshots (share links)
    SNAPSHOTS_ENABLED: bool = True
    GCP_PROJECT_ID: str = ""
    SERVICE_ACCOUNT_KEY_PATH: str = "service-account-key.json"
    FIRESTORE_COLLECTION: str = "view_snapshots"


settings = Settings()
