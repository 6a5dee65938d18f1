"""User-facing strings in every supported locale."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "ko"

MESSAGES: dict[str, dict[str, str]] = {
    "ko": {
        "upload_first": "먼저 사진을 업로드해주세요.",
        "no_face": "사진에서 얼굴을 찾을 수 없습니다. 정면이 보이는 사람 얼굴 사진으로 다시 시도해주세요.",
        "upstream_error": "AI 서버와 통신 중 오류가 발생했습니다. 잠시 후 다시 시도해주세요. ({detail})",
        "method_not_allowed": "Method Not Allowed",
        "invalid_feature": "지원하지 않는 분석 유형입니다: {feature}",
        "invalid_request": "잘못된 요청입니다: {detail}",
        "server_error": "서버 오류가 발생했습니다: {status}",
        "analysis_failed": "분석 중 오류가 발생했습니다: {detail}",
        "unknown_error": "알 수 없는 오류가 발생했습니다. 네트워크 연결을 확인하고 다시 시도해주세요.",
        "analyzing": "AI가 당신의 얼굴을 분석하고 있습니다... 잠시만 기다려주세요.",
        "upload_heading": "1. 사진 업로드",
        "result_heading": "2. 분석 결과",
        "upload_hint": "정면이 잘 나온 선명한 사진을 권장합니다.",
        "footer": "AI Physiognomy Reader. For Entertainment Purposes Only.",
        "tab_physiognomy": "AI 관상",
        "tab_celebrity": "닮은꼴 찾기",
        "tab_soulmate": "천생연분",
        "button_physiognomy": "AI 관상 분석",
        "button_celebrity": "닮은 연예인 찾기",
        "button_soulmate": "천생연분 찾기",
        "title_physiognomy": "AI 관상 분석",
        "title_celebrity": "닮은꼴 연예인 찾기",
        "title_soulmate": "천생연분 찾기",
        "subtitle_physiognomy": "얼굴 사진으로 당신의 성격과 운명을 알아보세요",
        "subtitle_celebrity": "나와 가장 닮은 연예인은 누구일까요?",
        "subtitle_soulmate": "관상으로 내 운명의 짝을 찾아보세요",
        "placeholder_physiognomy": "AI 관상가에게 당신의 미래를 물어보세요.",
        "placeholder_celebrity": "가장 닮은 연예인을 찾아보세요!",
        "placeholder_soulmate": "당신의 천생연분은 누구일까요?",
        "placeholder_subtitle": "사진을 올리고 분석을 시작하세요.",
        "similarity": "닮은 정도",
        "match_score": "궁합 점수",
        "overall_impression": "전체적인 인상",
        "feature_analysis": "부위별 분석",
        "compatibility_points": "잘 맞는 이유",
        "advice": "조언",
    },
    "en": {
        "upload_first": "Please upload a photo first.",
        "no_face": "No face was found in the photo. Please try again with a clear, front-facing photo.",
        "upstream_error": "Something went wrong while talking to the AI server. Please try again later. ({detail})",
        "method_not_allowed": "Method Not Allowed",
        "invalid_feature": "Unsupported analysis type: {feature}",
        "invalid_request": "Invalid request: {detail}",
        "server_error": "Server error: {status}",
        "analysis_failed": "Analysis failed: {detail}",
        "unknown_error": "An unknown error occurred. Check your network connection and try again.",
        "analyzing": "The AI is reading your face... please wait.",
        "upload_heading": "1. Upload a photo",
        "result_heading": "2. Result",
        "upload_hint": "A sharp, front-facing photo works best.",
        "footer": "AI Physiognomy Reader. For Entertainment Purposes Only.",
        "tab_physiognomy": "Face reading",
        "tab_celebrity": "Look-alike",
        "tab_soulmate": "Soulmate",
        "button_physiognomy": "Read my face",
        "button_celebrity": "Find my look-alike",
        "button_soulmate": "Find my soulmate",
        "title_physiognomy": "AI Face Reading",
        "title_celebrity": "Celebrity Look-alike",
        "title_soulmate": "Soulmate Match",
        "subtitle_physiognomy": "Learn about your character and fortune from a photo",
        "subtitle_celebrity": "Which celebrity do you look like most?",
        "subtitle_soulmate": "Find your destined match through face reading",
        "placeholder_physiognomy": "Ask the AI face reader about your future.",
        "placeholder_celebrity": "Find the celebrity you resemble most!",
        "placeholder_soulmate": "Who is your soulmate?",
        "placeholder_subtitle": "Upload a photo and start the analysis.",
        "similarity": "Similarity",
        "match_score": "Match score",
        "overall_impression": "Overall impression",
        "feature_analysis": "Feature by feature",
        "compatibility_points": "Why you match",
        "advice": "Advice",
    },
}


def current_locale() -> str:
    locale = os.environ.get("APP_LOCALE", DEFAULT_LOCALE).strip().lower()
    if locale not in MESSAGES:
        logger.warning("Unsupported APP_LOCALE=%s, falling back to %s", locale, DEFAULT_LOCALE)
        return DEFAULT_LOCALE
    return locale


def message(key: str, locale: str | None = None, **kwargs: object) -> str:
    """Look up a user-facing string and fill in its placeholders."""
    catalog = MESSAGES.get(locale or current_locale(), MESSAGES[DEFAULT_LOCALE])
    template = catalog.get(key, MESSAGES[DEFAULT_LOCALE][key])
    return template.format(**kwargs) if kwargs else template
