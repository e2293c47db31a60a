# downloader/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_env: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"
    log_json: bool = False  # JSON log lines instead of colored console output

    # Aggregation API
    # Every platform endpoint lives under this prefix: {base}/{endpoint}?url=...
    downloader_api_base_url: str = "https://delirius-apiofc.vercel.app/download"

    # HTTP session profiles (seconds). Unset keeps aiohttp's own session timeout.
    api_timeout_seconds: Optional[int] = None    # metadata calls to the aggregation API
    media_timeout_seconds: Optional[int] = None  # raw media downloads before relay

    # Owner UX: edit the invoking message into a "processing" notice
    processing_notice_enabled: bool = True

    @property
    def is_production(self) -> bool:
        return self.app_env == "prod"


def warn_on_risky_config(s: "Settings") -> list[str]:
    warnings: list[str] = []

    if not s.downloader_api_base_url.startswith("https://"):
        warnings.append(
            f"downloader_api_base_url is not HTTPS ({s.downloader_api_base_url})."
        )
    if s.downloader_api_base_url.endswith("/"):
        warnings.append("downloader_api_base_url has a trailing slash (endpoint URLs will contain '//').")

    timeouts = (s.api_timeout_seconds, s.media_timeout_seconds)
    if any(t is not None and t <= 0 for t in timeouts):
        warnings.append("HTTP timeouts must be positive; aiohttp will reject the session profile.")

    if s.is_production and s.log_level.upper() == "DEBUG":
        warnings.append("prod: log_level=DEBUG (target URLs of every request will be logged).")

    return warnings


def validate_or_warn(s: "Settings") -> None:
    """Print configuration warnings. Nothing here is fatal."""
    for msg in warn_on_risky_config(s):
        print(f"[WARN][config] {msg}")

settings = Settings()
