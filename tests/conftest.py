from __future__ import annotations

import base64
import io
import json
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from PIL import Image

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from core.providers import GeminiModel
from core.proxy import ProxyService


class FakeModels:
    """Stands in for ``genai.Client().models``; answers are returned in order."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.calls = []

    def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if not self.answers:
            raise AssertionError("Unexpected model call")
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return SimpleNamespace(text=answer)

    @property
    def prompts(self):
        return [call["contents"][0] for call in self.calls]


class FakeGenAI:
    def __init__(self, answers):
        self.models = FakeModels(answers)


@pytest.fixture
def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), color=(200, 120, 90)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def make_service():
    def _make(*answers):
        fake = FakeGenAI(answers)
        service = ProxyService(GeminiModel(model="gemini-test", client=fake), locale="en")
        return service, fake.models
    return _make


@pytest.fixture
def request_body(png_bytes):
    def _body(feature: str) -> bytes:
        return json.dumps({
            "image": base64.b64encode(png_bytes).decode("ascii"),
            "mimeType": "image/png",
            "feature": feature,
        }).encode("utf-8")
    return _body


CELEBRITY_JSON = json.dumps({
    "celebrityName": "Gong Yoo",
    "similarityScore": 87,
    "analysis": {
        "overallImpression": "Warm and calm.",
        "facialFeatures": [
            {"feature": "Eyes", "description": "Gentle, slightly downturned."},
            {"feature": "Jaw", "description": "Defined line."},
        ],
    },
})

SOULMATE_JSON = json.dumps({
    "celebrityName": "IU",
    "matchScore": 92,
    "analysis": {
        "overall": "A balanced pairing.",
        "compatibilityPoints": ["Shared calm energy", "Complementary features"],
    },
    "advice": "Stay patient.",
})
