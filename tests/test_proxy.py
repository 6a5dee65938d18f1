from pathlib import Path
import json
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from conftest import CELEBRITY_JSON, SOULMATE_JSON
from core.messages import message
from core.models import CompatibilityMatch, Gender
from core.prompt_builder import build_soulmate_prompt
from core.providers import PROBE_CONFIG
from core.proxy import ProxyResponse, classify_gender, parse_request
from core.report import missing_markers
from prompts.templates import (
    CELEBRITY_PROMPT,
    DISCLAIMER,
    FACE_CHECK_PROMPT,
    FACIAL_REGIONS,
    GENDER_PROBE_PROMPT,
    PHYSIOGNOMY_PROMPT,
    REPORT_SECTIONS,
)

NARRATIVE = "\n".join(
    [f"**{REPORT_SECTIONS[0]}**", "- 밝은 기운입니다.", f"**{REPORT_SECTIONS[1]}**"]
    + [f"* **{region}**: 좋습니다." for region in FACIAL_REGIONS]
    + [f"**{REPORT_SECTIONS[2]}**", "- 차분합니다.", f"**{REPORT_SECTIONS[3]}**", "- 웃으세요.", DISCLAIMER]
)


def test_options_returns_empty_200(make_service):
    service, models = make_service()
    resp = service.handle("OPTIONS")
    assert resp.status == 200
    assert resp.body == b""
    assert models.calls == []


def test_non_post_is_rejected(make_service):
    service, models = make_service()
    resp = service.handle("GET")
    assert resp.status == 405
    assert resp.payload == {"error": "Method Not Allowed"}
    assert models.calls == []


def test_no_face_short_circuits_with_400(make_service, request_body):
    service, models = make_service("No")
    resp = service.handle("POST", request_body("celebrity"))
    assert resp.status == 400
    assert resp.payload == {"error": message("no_face", "en")}
    assert models.prompts == [FACE_CHECK_PROMPT]


def test_face_answer_must_start_with_yes(make_service, request_body):
    service, models = make_service("  I think yes")
    resp = service.handle("POST", request_body("physiognomy"))
    assert resp.status == 400
    assert len(models.calls) == 1


def test_face_probe_uses_deterministic_low_budget_config(make_service, request_body):
    service, models = make_service("Yes.", NARRATIVE)
    service.handle("POST", request_body("physiognomy"))
    assert models.calls[0]["config"] == PROBE_CONFIG
    assert models.calls[0]["config"]["thinking_config"] == {"thinking_budget": 0}


def test_physiognomy_returns_text_verbatim(make_service, request_body):
    service, models = make_service(" YES ", NARRATIVE)
    resp = service.handle("POST", request_body("physiognomy"))
    assert resp.status == 200
    assert resp.payload == NARRATIVE
    assert json.loads(resp.body) == NARRATIVE
    assert models.prompts == [FACE_CHECK_PROMPT, PHYSIOGNOMY_PROMPT]
    assert missing_markers(resp.payload) == []


def test_physiognomy_structure_is_not_enforced(make_service, request_body):
    service, _ = make_service("yes", "just a short reading")
    resp = service.handle("POST", request_body("physiognomy"))
    assert resp.status == 200
    assert resp.payload == "just a short reading"


def test_celebrity_match_is_validated(make_service, request_body):
    service, models = make_service("Yes", CELEBRITY_JSON)
    resp = service.handle("POST", request_body("celebrity"))
    assert resp.status == 200
    assert resp.payload["celebrityName"] == "Gong Yoo"
    assert resp.payload["similarityScore"] == 87
    assert resp.payload["analysis"]["facialFeatures"][0]["feature"] == "Eyes"
    assert models.prompts[1] == CELEBRITY_PROMPT
    assert models.calls[1]["config"]["response_mime_type"] == "application/json"


def test_match_scores_keep_integer_type(make_service, request_body):
    service, _ = make_service("Yes", CELEBRITY_JSON)
    resp = service.handle("POST", request_body("celebrity"))
    assert isinstance(resp.payload["similarityScore"], int)
    assert b'"similarityScore": 87,' in resp.body

    service, _ = make_service("Yes", "male", SOULMATE_JSON)
    resp = service.handle("POST", request_body("soulmate"))
    assert resp.payload == json.loads(SOULMATE_JSON)


def test_celebrity_missing_score_is_a_500(make_service, request_body):
    broken = json.loads(CELEBRITY_JSON)
    del broken["similarityScore"]
    service, _ = make_service("Yes", json.dumps(broken))
    resp = service.handle("POST", request_body("celebrity"))
    assert resp.status == 500
    assert "similarityScore" in resp.payload["error"]
    assert "validation error" in resp.payload["error"]


def test_celebrity_non_json_is_a_500(make_service, request_body):
    service, _ = make_service("Yes", "Gong Yoo, definitely")
    resp = service.handle("POST", request_body("celebrity"))
    assert resp.status == 500
    assert "Invalid JSON" in resp.payload["error"]


def test_soulmate_male_subject_targets_female(make_service, request_body):
    service, models = make_service("Yes", "male", SOULMATE_JSON)
    resp = service.handle("POST", request_body("soulmate"))
    assert resp.status == 200
    assert models.prompts[:2] == [FACE_CHECK_PROMPT, GENDER_PROBE_PROMPT]
    assert models.calls[1]["config"] == PROBE_CONFIG
    assert models.prompts[2] == build_soulmate_prompt(Gender.MALE, Gender.FEMALE)
    assert "한국 '여성' 연예인" in models.prompts[2]
    result = CompatibilityMatch.model_validate(resp.payload)
    assert result.analysis.compatibilityPoints


def test_soulmate_female_subject_targets_male(make_service, request_body):
    service, models = make_service("Yes", "Female", SOULMATE_JSON)
    service.handle("POST", request_body("soulmate"))
    assert "한국 '남성' 연예인" in models.prompts[2]


def test_soulmate_empty_points_is_a_500(make_service, request_body):
    broken = json.loads(SOULMATE_JSON)
    broken["analysis"]["compatibilityPoints"] = []
    service, _ = make_service("Yes", "male", json.dumps(broken))
    resp = service.handle("POST", request_body("soulmate"))
    assert resp.status == 500
    assert "compatibilityPoints" in resp.payload["error"]


def test_unknown_feature_is_a_500_without_model_calls(make_service, request_body):
    service, models = make_service()
    resp = service.handle("POST", request_body("horoscope"))
    assert resp.status == 500
    assert "horoscope" in resp.payload["error"]
    assert models.calls == []


def test_request_errors_use_service_locale(make_service, request_body, monkeypatch):
    monkeypatch.setenv("APP_LOCALE", "ko")
    service, _ = make_service()
    resp = service.handle("POST", request_body("horoscope"))
    detail = message("invalid_feature", "en", feature="horoscope")
    assert detail == "Unsupported analysis type: horoscope"
    assert resp.payload["error"] == message("upstream_error", "en", detail=detail)


def test_invalid_json_body_is_a_500(make_service):
    service, _ = make_service()
    resp = service.handle("POST", b"{not json")
    assert resp.status == 500
    assert "error" in resp.payload


def test_upstream_failure_is_wrapped(make_service, request_body):
    service, _ = make_service(RuntimeError("quota exceeded"))
    resp = service.handle("POST", request_body("celebrity"))
    assert resp.status == 500
    assert "quota exceeded" in resp.payload["error"]
    assert resp.payload["error"].startswith("Something went wrong")


def test_data_url_image_is_accepted(make_service, request_body):
    body = json.loads(request_body("physiognomy"))
    body["image"] = "data:image/png;base64," + body["image"]
    service, _ = make_service("Yes", NARRATIVE)
    assert service.handle("POST", body).status == 200


def test_parse_request_validates_fields():
    request, mode = parse_request({"image": "abc", "mimeType": "image/png", "feature": "soulmate"})
    assert request.image == "abc"
    assert mode.value == "soulmate"


def test_classify_gender():
    assert classify_gender(" Male.") is Gender.MALE
    assert classify_gender("female") is Gender.FEMALE
    assert classify_gender("not sure") is Gender.FEMALE


def test_response_body_keeps_unicode():
    resp = ProxyResponse(200, "총평")
    assert resp.body == '"총평"'.encode("utf-8")
