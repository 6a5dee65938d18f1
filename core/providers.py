"""Gemini model access used by the proxy service."""

from __future__ import annotations

import base64
import logging
import os
import time
from typing import Any

from pydantic import BaseModel

from core.config import API_KEY_ENV_NAMES, DEFAULT_MODEL

logger = logging.getLogger(__name__)

# Settings for yes/no style classification probes.
PROBE_CONFIG: dict[str, Any] = {
    "temperature": 0,
    "max_output_tokens": 5,
    "thinking_config": {"thinking_budget": 0},
}


def resolve_api_key(explicit: str | None, *env_names: str) -> str:
    """Return the explicit key if given, else the first non-empty env variable."""
    if explicit and explicit.strip():
        return explicit.strip()
    for name in env_names:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return ""


class GeminiModel:
    """Thin wrapper around ``google.genai`` for image + prompt requests.

    The underlying client is created lazily once per instance and reused for
    every call; it holds no per-request state.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        client: Any = None,
    ) -> None:
        self.api_key = resolve_api_key(api_key, *API_KEY_ENV_NAMES)
        self.model = model
        self._client = client
        if self._client is None and not self.api_key:
            raise ValueError(
                "Google API key is required. Set GOOGLE_API_KEY (or GEMINI_API_KEY) or pass api_key."
            )

    def _get_client(self):
        if self._client is None:
            from google import genai
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    @staticmethod
    def image_part(image_base64: str, mime_type: str):
        from google.genai import types

        data = base64.b64decode(image_base64)
        return types.Part.from_bytes(data=data, mime_type=mime_type)

    def _generate(self, prompt: str, image_part: Any, config: dict[str, Any] | None) -> str:
        client = self._get_client()
        start = time.time()
        response = client.models.generate_content(
            model=self.model,
            contents=[prompt, image_part],
            config=config,
        )
        text = response.text or ""
        logger.info(
            "Gemini model=%s answered %d chars in %.2fs", self.model, len(text), time.time() - start
        )
        return text

    def generate_text(self, prompt: str, image_part: Any, config: dict[str, Any] | None = None) -> str:
        """Free-text answer for ``prompt`` about the image."""
        return self._generate(prompt, image_part, config)

    def probe(self, prompt: str, image_part: Any) -> str:
        """Short deterministic answer, normalized to lower case."""
        answer = self._generate(prompt, image_part, PROBE_CONFIG)
        return answer.strip().lower()

    def generate_json(self, prompt: str, image_part: Any, schema: type[BaseModel]) -> str:
        """Answer constrained to ``schema``; returns the raw JSON text."""
        config = {
            "response_mime_type": "application/json",
            "response_schema": schema,
        }
        return self._generate(prompt, image_part, config).strip()
