"""Prompt builder that turns an analysis mode into the Gemini prompt."""

from __future__ import annotations

import logging

from core.models import AnalysisMode, Gender
from prompts.templates import CELEBRITY_PROMPT, GENDER_LABELS, PHYSIOGNOMY_PROMPT, SOULMATE_PROMPT

logger = logging.getLogger(__name__)


def build_soulmate_prompt(subject: Gender, target: Gender) -> str:
    """Build the compatibility prompt for a subject of ``subject`` gender."""
    prompt = SOULMATE_PROMPT.substitute(
        subject=GENDER_LABELS[subject.value],
        target=GENDER_LABELS[target.value],
    )
    logger.debug("Built soulmate prompt subject=%s target=%s", subject.value, target.value)
    return prompt


def build_prompt(mode: AnalysisMode, subject: Gender | None = None) -> str:
    """Return the mode-specific prompt; soulmate mode needs the subject's gender."""
    if mode is AnalysisMode.PHYSIOGNOMY:
        return PHYSIOGNOMY_PROMPT
    if mode is AnalysisMode.CELEBRITY:
        return CELEBRITY_PROMPT
    if subject is None:
        raise ValueError("Soulmate prompt requires the subject's gender")
    return build_soulmate_prompt(subject, subject.opposite())
