"""TDT Proxy — environment-based configuration.

Values are loaded from environment variables and .env files. The module-level
``settings`` object is what the running service uses; tests build their own
``ProxySettings`` and hand it to ``create_app``.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

TIANDITU_SEARCH_URL = "https://api.tianditu.gov.cn/v2/search"

# The upstream rejects requests that do not look like they come from a browser
# on its own site.
DEFAULT_SPOOFED_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "*/*",
    "Accept-Language": "zh-CN,zh;q=0.9",
    "Referer": "https://api.tianditu.gov.cn/",
    "Origin": "https://api.tianditu.gov.cn",
}


class ProxySettings(BaseSettings):
    """Settings for the Tianditu search proxy."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── General ───────────────────────────────
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    service_name: str = "tdt_proxy"
    service_host: str = "0.0.0.0"
    service_port: int = 3000

    # ── Upstream ──────────────────────────────
    upstream_base_url: str = TIANDITU_SEARCH_URL
    spoofed_headers: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SPOOFED_HEADERS)
    )
    # Seconds; None leaves the forward call unbounded
    upstream_timeout: float | None = 30.0

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def json_logs(self) -> bool:
        return self.is_production


settings = ProxySettings()
