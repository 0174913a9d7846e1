"""
Runtime settings, read from the environment (and a local .env file if present).
"""

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from dotenv import load_dotenv

RADIX_CUSTOM_URL = "https://www.radix-ui.com/colors/custom"

DEFAULT_FRONTEND_URLS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

TRUTHY = {"1", "true", "yes", "on"}


def parse_bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY
    return False


def parse_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [s.strip() for s in raw.split(",") if s.strip()]


@dataclass
class Settings:
    port: int = 3000
    request_timeout_ms: int = 45000
    keep_browser_alive: bool = False
    debug_browser: bool = False
    parallel: bool = True
    frontend_urls: List[str] = field(default_factory=lambda: list(DEFAULT_FRONTEND_URLS))
    app_env: str = "development"
    oracle_url: str = RADIX_CUSTOM_URL

    @property
    def request_timeout_s(self) -> float:
        return self.request_timeout_ms / 1000.0

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        defaults = cls()
        try:
            port = int(env.get("PORT", defaults.port))
        except ValueError:
            port = defaults.port
        try:
            timeout_ms = int(env.get("REQUEST_TIMEOUT_MS", defaults.request_timeout_ms))
        except ValueError:
            timeout_ms = defaults.request_timeout_ms
        return cls(
            port=port,
            request_timeout_ms=timeout_ms,
            keep_browser_alive=env.get("KEEP_BROWSER_ALIVE") == "1",
            debug_browser=parse_bool(env.get("PALETTE_DEBUG_BROWSER")),
            parallel=parse_bool(env.get("PALETTE_PARALLEL"), default=True),
            frontend_urls=parse_list(env.get("FRONTEND_URLS")) or list(DEFAULT_FRONTEND_URLS),
            app_env=env.get("APP_ENV", defaults.app_env),
            oracle_url=env.get("RADIX_CUSTOM_URL", defaults.oracle_url),
        )


def load_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()
