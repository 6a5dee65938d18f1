"""Proxy service: validates a request, checks for a face and runs one analysis mode.

Every step is a blocking round trip to Gemini, made in order:

1. face-presence probe (all modes)
2. gender probe (soulmate only)
3. the mode prompt, schema-constrained for the match modes
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from core.config import Settings
from core.encoder import strip_data_url
from core.errors import InvalidRequestError, NoFaceDetectedError
from core.messages import message
from core.models import (
    AnalysisMode,
    AnalysisRequest,
    CelebrityMatch,
    CompatibilityMatch,
    Gender,
    parse_result,
)
from core.prompt_builder import build_prompt
from core.providers import GeminiModel
from core.report import missing_markers
from prompts.templates import FACE_CHECK_PROMPT, GENDER_PROBE_PROMPT

logger = logging.getLogger(__name__)


@dataclass
class ProxyResponse:
    status: int
    payload: Any = None
    headers: dict[str, str] = field(default_factory=lambda: {"content-type": "application/json"})

    @property
    def body(self) -> bytes:
        if self.payload is None:
            return b""
        return json.dumps(self.payload, ensure_ascii=False).encode("utf-8")


def parse_request(body: bytes | str | dict, locale: str | None = None) -> tuple[AnalysisRequest, AnalysisMode]:
    """Decode and validate the JSON request body."""
    try:
        if isinstance(body, dict):
            request = AnalysisRequest.model_validate(body)
        else:
            request = AnalysisRequest.model_validate_json(body or b"")
    except ValidationError as e:
        raise InvalidRequestError(message("invalid_request", locale, detail=e)) from e

    try:
        mode = AnalysisMode(request.feature)
    except ValueError as e:
        raise InvalidRequestError(message("invalid_feature", locale, feature=request.feature)) from e
    return request, mode


def validated_json(mode: AnalysisMode, raw: str) -> Any:
    """Validate the model's JSON against the mode schema and return it as sent.

    Scores keep the number type the model chose (87 stays 87).
    """
    parse_result(mode, raw)
    return json.loads(raw)


def classify_gender(answer: str) -> Gender:
    """Anything that does not start with 'male' is treated as female."""
    return Gender.MALE if answer.strip().lower().startswith("male") else Gender.FEMALE


class ProxyService:
    """Holds the model credential and mediates every Gemini call."""

    def __init__(self, model: GeminiModel, locale: str | None = None) -> None:
        self.model = model
        self.locale = locale

    @classmethod
    def from_env(cls, settings: Settings | None = None) -> ProxyService:
        """Build the service from the environment; a missing API key raises."""
        settings = settings or Settings.from_env()
        return cls(GeminiModel(model=settings.model), locale=settings.locale)

    # --- Steps ---

    def check_face(self, image_part: Any) -> None:
        answer = self.model.probe(FACE_CHECK_PROMPT, image_part)
        if not answer.startswith("yes"):
            logger.info("Face check failed, model answered %r", answer)
            raise NoFaceDetectedError(message("no_face", self.locale))

    def detect_gender(self, image_part: Any) -> Gender:
        answer = self.model.probe(GENDER_PROBE_PROMPT, image_part)
        gender = classify_gender(answer)
        logger.info("Gender probe answered %r -> %s", answer, gender.value)
        return gender

    def run_mode(self, mode: AnalysisMode, image_part: Any) -> Any:
        """Run the mode prompt and return the JSON-ready payload."""
        if mode is AnalysisMode.PHYSIOGNOMY:
            text = self.model.generate_text(build_prompt(mode), image_part)
            missing = missing_markers(text)
            if missing:
                logger.warning("Narrative report is missing markers: %s", ", ".join(missing))
            return parse_result(mode, text)

        if mode is AnalysisMode.CELEBRITY:
            raw = self.model.generate_json(build_prompt(mode), image_part, CelebrityMatch)
            return validated_json(mode, raw)

        subject = self.detect_gender(image_part)
        raw = self.model.generate_json(build_prompt(mode, subject), image_part, CompatibilityMatch)
        return validated_json(mode, raw)

    def analyze(self, request: AnalysisRequest, mode: AnalysisMode) -> Any:
        image_part = self.model.image_part(strip_data_url(request.image), request.mimeType)
        self.check_face(image_part)
        return self.run_mode(mode, image_part)

    # --- HTTP boundary ---

    def handle(self, method: str, body: bytes | str | dict | None = None) -> ProxyResponse:
        """Serve one request to the proxy endpoint."""
        method = (method or "").upper()
        if method == "OPTIONS":
            return ProxyResponse(200, headers={})
        if method != "POST":
            return ProxyResponse(405, {"error": message("method_not_allowed", self.locale)})

        try:
            request, mode = parse_request(body if body is not None else b"", self.locale)
            logger.info("Running %s analysis (mimeType=%s)", mode.value, request.mimeType)
            result = self.analyze(request, mode)
        except NoFaceDetectedError as e:
            return ProxyResponse(400, {"error": str(e)})
        except Exception as e:
            logger.exception("API Error")
            return ProxyResponse(500, {"error": message("upstream_error", self.locale, detail=e)})

        return ProxyResponse(200, result)
