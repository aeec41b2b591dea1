"""Application settings from environment."""
import os
from functools import lru_cache

DEFAULT_CANISTER_ID = "rrkah-fqaaa-aaaaa-aaaaq-cai"
DEFAULT_ICP_HOST = "https://ic0.app"


@lru_cache
def get_settings() -> "Settings":
    return Settings()


class Settings:
    """Central config. Load .env in main/run_api before using. Key settings are @property so they read env at access time."""

    # Backend canister that owns sessions and messages
    @property
    def canister_id(self) -> str:
        return os.getenv("ICP_CANISTER_ID", "").strip() or DEFAULT_CANISTER_ID

    @property
    def icp_host(self) -> str:
        return (os.getenv("ICP_HOST", "").strip() or DEFAULT_ICP_HOST).rstrip("/")

    # Transport-level timeout; unset or 0 means requests waits indefinitely
    @property
    def backend_timeout_seconds(self) -> float | None:
        raw = os.getenv("BACKEND_TIMEOUT_SECONDS", "").strip()
        if not raw:
            return None
        try:
            value = float(raw)
        except ValueError:
            return None
        if value <= 0:
            return None
        return max(1.0, min(300.0, value))

    # API
    @property
    def api_title(self) -> str:
        return os.getenv("API_TITLE", "Vent Relay API").strip()

    @property
    def api_version(self) -> str:
        return os.getenv("API_VERSION", "0.1.0").strip()

    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    # CORS: comma-separated origins (e.g. http://localhost:3000) or * for all
    @property
    def cors_origins(self) -> list[str]:
        raw = os.getenv("CORS_ORIGINS", "*").strip()
        if not raw or raw == "*":
            return ["*"]
        return [o.strip() for o in raw.split(",") if o.strip()]
