"""Runtime settings read from the process environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from core.messages import current_locale

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_PROXY_URL = "http://localhost:3000/api/proxy-gemini-api"
API_KEY_ENV_NAMES = ("GOOGLE_API_KEY", "GEMINI_API_KEY")


@dataclass(frozen=True)
class Settings:
    model: str = DEFAULT_MODEL
    locale: str = "ko"
    proxy_url: str = DEFAULT_PROXY_URL
    request_timeout_s: float = 120.0

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            model=os.environ.get("GEMINI_MODEL", "").strip() or DEFAULT_MODEL,
            locale=current_locale(),
            proxy_url=os.environ.get("PROXY_API_URL", "").strip() or DEFAULT_PROXY_URL,
            request_timeout_s=float(os.environ.get("PROXY_TIMEOUT_S", "120")),
        )
