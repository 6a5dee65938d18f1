"""Data models for the face-reading proxy and its clients."""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, Field


class AnalysisMode(str, Enum):
    PHYSIOGNOMY = "physiognomy"
    CELEBRITY = "celebrity"
    SOULMATE = "soulmate"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"

    def opposite(self) -> Gender:
        return Gender.FEMALE if self is Gender.MALE else Gender.MALE


class AnalysisRequest(BaseModel):
    """JSON body accepted by the proxy endpoint."""

    image: str = Field(min_length=1)
    mimeType: str = Field(min_length=1)
    feature: str


# --- Celebrity look-alike ---

class FacialFeature(BaseModel):
    feature: str
    description: str


class CelebrityAnalysis(BaseModel):
    overallImpression: str
    facialFeatures: list[FacialFeature]


class CelebrityMatch(BaseModel):
    celebrityName: str
    similarityScore: float
    analysis: CelebrityAnalysis


# --- Soulmate / compatibility ---

class CompatibilityAnalysis(BaseModel):
    overall: str
    compatibilityPoints: list[str] = Field(min_length=1)


class CompatibilityMatch(BaseModel):
    celebrityName: str
    matchScore: float
    analysis: CompatibilityAnalysis
    advice: str


AnalysisResult = Union[str, CelebrityMatch, CompatibilityMatch]

RESULT_SCHEMAS: dict[AnalysisMode, type[BaseModel]] = {
    AnalysisMode.CELEBRITY: CelebrityMatch,
    AnalysisMode.SOULMATE: CompatibilityMatch,
}


def parse_result(mode: AnalysisMode, payload: Any) -> AnalysisResult:
    """Validate a decoded payload against the result shape of ``mode``.

    Narrative results are free text; JSON payloads may be given either as a
    string or as an already-decoded dict. Raises ``pydantic.ValidationError``
    or ``TypeError`` on mismatch.
    """
    if mode is AnalysisMode.PHYSIOGNOMY:
        if not isinstance(payload, str):
            raise TypeError(f"Narrative result must be text, got {type(payload).__name__}")
        return payload

    schema = RESULT_SCHEMAS[mode]
    if isinstance(payload, (str, bytes)):
        return schema.model_validate_json(payload)
    return schema.model_validate(payload)
