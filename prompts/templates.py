"""Prompt templates sent to Gemini for each analysis mode."""

from __future__ import annotations

from string import Template

# --- Classification probes ---

FACE_CHECK_PROMPT = "Is there a human face in this image? Answer with only 'Yes' or 'No'."

GENDER_PROBE_PROMPT = "Is the person in this image male or female? Answer with only 'male' or 'female'."

# --- Narrative face reading ---

REPORT_SECTIONS: tuple[str, ...] = (
    "총평",
    "얼굴 각 부위별 분석",
    "성격 및 기질",
    "조언",
)

FACIAL_REGIONS: tuple[str, ...] = (
    "이마 (초년운)",
    "눈썹 (형제운, 계획)",
    "눈 (중년운의 핵심)",
    "코 (재물운)",
    "인중과 입 (말년운)",
    "턱 (말년운, 부동산운)",
)

DISCLAIMER_MARKER = "면책 조항:"

DISCLAIMER = (
    f"{DISCLAIMER_MARKER} 이 분석은 오락적인 목적으로 제공되며, 과학적 근거가 부족할 수 있습니다. "
    "인생의 중요한 결정은 본인의 판단에 따라 신중하게 내리시기 바랍니다."
)

PHYSIOGNOMY_PROMPT = f"""\
당신은 수십 년 경력의 숙련된 관상가입니다. 제공된 얼굴 사진을 분석하여 관상학적 관점에서 자세히 풀이해주세요.
결과는 반드시 다음 Markdown 구조를 사용하여 분석해주세요:

**{REPORT_SECTIONS[0]}**
- 얼굴 전체에서 느껴지는 기운과 전반적인 운세의 흐름을 2~3문장으로 요약합니다.

**{REPORT_SECTIONS[1]}**
* **{FACIAL_REGIONS[0]}**: 넓이, 모양, 빛깔을 보고 지혜, 직업운, 부모운을 분석합니다.
* **{FACIAL_REGIONS[1]}**: 모양, 짙음, 길이를 보고 대인관계와 계획성을 분석합니다.
* **{FACIAL_REGIONS[2]}**: 눈빛, 크기, 모양을 보고 마음의 상태, 재물운, 지혜를 분석합니다.
* **{FACIAL_REGIONS[3]}**: 콧대의 높이, 콧방울의 모양을 보고 재물운과 자존심을 분석합니다.
* **{FACIAL_REGIONS[4]}**: 인중의 길이와 깊이, 입의 크기와 입꼬리를 보고 자녀운, 의지력, 말년의 생활을 분석합니다.
* **{FACIAL_REGIONS[5]}**: 턱의 모양과 살집을 보고 의지력, 아랫사람 복, 안정적인 말년을 분석합니다.

**{REPORT_SECTIONS[2]}**
- 분석을 종합하여 어떤 성격과 기질을 가졌는지 설명합니다.

**{REPORT_SECTIONS[3]}**
- 관상학적 단점을 보완하고 장점을 극대화할 수 있는 삶의 태도나 방법에 대해 조언합니다.

분석 내용은 친절하고 이해하기 쉬운 말투로 작성해주세요.
마지막에는 다음 문구를 반드시 포함해주세요:
"{DISCLAIMER}"
"""

# --- Structured matches ---

CELEBRITY_PROMPT = (
    "당신은 얼굴 인식 및 연예인 전문가입니다. 주어진 사진의 얼굴을 분석해서, "
    "가장 닮은 한국 연예인이 누구인지 찾아주세요. 응답은 오직 JSON 형식으로만 생성해야 합니다. "
    "분석 결과를 상세하게 제공해주세요."
)

SOULMATE_PROMPT = Template(
    "당신은 연애 컨설턴트이자 관상 전문가입니다. 주어진 사진의 얼굴은 '$subject'입니다. "
    "이 사람의 관상을 분석하여, 결혼 상대로 가장 잘 어울리는 한국 '$target' 연예인 한 명을 추천해주세요. "
    "응답은 반드시 JSON 형식이어야 합니다. 분석은 상세하고 긍정적인 내용으로 구성해주세요."
)

# Gender words substituted into the soulmate prompt.
GENDER_LABELS: dict[str, str] = {
    "male": "남성",
    "female": "여성",
}
