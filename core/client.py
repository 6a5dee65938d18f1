"""HTTP client for the face-reading proxy endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from core.encoder import UploadedImage
from core.errors import AnalysisError
from core.messages import message
from core.models import AnalysisMode

logger = logging.getLogger(__name__)


class AnalysisClient:
    """Sends one analysis request per call; no retries and no cancellation."""

    def __init__(
        self,
        endpoint: str,
        http: httpx.Client | None = None,
        locale: str | None = None,
        timeout: float = 120,
    ) -> None:
        self.endpoint = endpoint
        self.locale = locale
        self._http = http or httpx.Client(timeout=timeout)

    def _error_detail(self, resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return message("server_error", self.locale, status=resp.reason_phrase or resp.status_code)

    def analyze(self, file: Any, mode: AnalysisMode) -> Any:
        """Encode ``file`` and run ``mode`` on the proxy.

        Returns the decoded JSON result: text for the narrative mode, a dict
        for the match modes. Every failure is raised as ``AnalysisError``.
        """
        mode = AnalysisMode(mode)
        try:
            image = file if isinstance(file, UploadedImage) else UploadedImage.from_file(file)
            resp = self._http.post(
                self.endpoint,
                json={
                    "image": image.base64,
                    "mimeType": image.mime_type,
                    "feature": mode.value,
                },
            )
        except (OSError, TypeError, httpx.HTTPError) as e:
            logger.error("Error during %s analysis: %s", mode.value, e)
            raise AnalysisError(message("analysis_failed", self.locale, detail=e)) from e

        if not resp.is_success:
            detail = self._error_detail(resp)
            logger.error("Proxy returned %d for %s analysis: %s", resp.status_code, mode.value, detail)
            raise AnalysisError(message("analysis_failed", self.locale, detail=detail))

        try:
            return resp.json()
        except ValueError as e:
            logger.error("Proxy returned invalid JSON for %s analysis: %s", mode.value, e)
            raise AnalysisError(message("analysis_failed", self.locale, detail=e)) from e
