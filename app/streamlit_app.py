"""Streamlit UI for the AI face reader.

Features:
- Three analysis modes sharing one uploaded photo (face reading, celebrity look-alike, soulmate)
- One state per mode; a new photo resets all of them
- Themed result panels for the narrative report and both match results
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import httpx
import streamlit as st
from dotenv import load_dotenv

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.client import AnalysisClient
from core.config import Settings
from core.encoder import ACCEPTED_EXTENSIONS, UploadedImage, is_image_mime
from core.messages import message
from core.models import AnalysisMode
from core.offline import FONT_STYLESHEET_URL, OfflineCache
from core.report import LineKind, format_report
from core.state import AnalysisSession, Phase

load_dotenv()
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

settings = Settings.from_env()
LOCALE = settings.locale


def t(key: str, **kwargs: Any) -> str:
    return message(key, LOCALE, **kwargs)


# ============================================================================
# Page config and styling
# ============================================================================

st.set_page_config(
    page_title="AI Physiognomy Reader",
    layout="wide",
)


@st.cache_resource
def get_offline_cache() -> OfflineCache:
    cache = OfflineCache(urls=[FONT_STYLESHEET_URL])
    cache.activate()
    try:
        cache.install()
    except httpx.HTTPError as e:
        logger.warning("Could not pre-cache assets: %s", e)
    return cache


@st.cache_resource
def get_client() -> AnalysisClient:
    return AnalysisClient(settings.proxy_url, locale=LOCALE, timeout=settings.request_timeout_s)


def font_css() -> str:
    try:
        return get_offline_cache().get_text(FONT_STYLESHEET_URL)
    except httpx.HTTPError as e:
        logger.warning("Web font unavailable: %s", e)
        return ""


st.markdown(f"""
<style>
    {font_css()}
    html, body, [class*="css"] {{ font-family: 'Noto Sans KR', sans-serif; }}
    div[data-testid="metric-container"] {{
        background: linear-gradient(135deg, #4f46e522, #22c55e22);
        border: 1px solid #374151;
        border-radius: 10px;
        padding: 12px;
    }}
</style>
""", unsafe_allow_html=True)

# ============================================================================
# Session state initialization
# ============================================================================


def init_session_state():
    defaults = {
        "session": AnalysisSession(locale=LOCALE),
        "image_id": None,
    }
    for key, val in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = val


init_session_state()
session: AnalysisSession = st.session_state["session"]

# ============================================================================
# Result panels
# ============================================================================


def render_narrative(text: str) -> None:
    for line in format_report(text):
        if line.kind is LineKind.HEADING:
            st.markdown(f"### :green[{line.text}]")
        elif line.kind is LineKind.SUBHEADING:
            st.markdown(f"#### :violet[{line.text}]")
        elif line.kind is LineKind.DISCLAIMER:
            st.divider()
            st.caption(line.text)
        elif line.text.strip():
            st.markdown(line.text)


def render_celebrity(result: dict[str, Any]) -> None:
    analysis = result.get("analysis", {})
    st.markdown(f"## :star: {result.get('celebrityName', '')}")
    st.metric(t("similarity"), f"{result.get('similarityScore', 0):.0f}%")
    st.markdown(f"#### :green[{t('overall_impression')}]")
    st.write(analysis.get("overallImpression", ""))
    st.markdown(f"#### :green[{t('feature_analysis')}]")
    for item in analysis.get("facialFeatures", []):
        st.markdown(f"- **{item.get('feature', '')}**: {item.get('description', '')}")


def render_soulmate(result: dict[str, Any]) -> None:
    analysis = result.get("analysis", {})
    st.markdown(f"## :heart: {result.get('celebrityName', '')}")
    st.metric(t("match_score"), f"{result.get('matchScore', 0):.0f}%")
    st.write(analysis.get("overall", ""))
    st.markdown(f"#### :green[{t('compatibility_points')}]")
    for point in analysis.get("compatibilityPoints", []):
        st.markdown(f"- {point}")
    st.markdown(f"#### :green[{t('advice')}]")
    st.info(result.get("advice", ""))


RENDERERS = {
    AnalysisMode.PHYSIOGNOMY: render_narrative,
    AnalysisMode.CELEBRITY: render_celebrity,
    AnalysisMode.SOULMATE: render_soulmate,
}

# ============================================================================
# Mode selector and header
# ============================================================================

mode = st.radio(
    "mode",
    options=list(AnalysisMode),
    format_func=lambda m: t(f"tab_{m.value}"),
    horizontal=True,
    label_visibility="collapsed",
)
session.switch_mode(mode)

st.title(t(f"title_{mode.value}"))
st.caption(t(f"subtitle_{mode.value}"))

col_upload, col_result = st.columns(2)

# ============================================================================
# Upload column
# ============================================================================

with col_upload:
    st.subheader(t("upload_heading"))
    uploaded = st.file_uploader(
        t("upload_hint"),
        type=list(ACCEPTED_EXTENSIONS),
        key="photo",
    )

    # Dropped files only pass the extension filter, so check the type too.
    if uploaded is not None and not is_image_mime(uploaded.type):
        uploaded = None

    uploaded_id = uploaded.file_id if uploaded is not None else None
    if uploaded_id != st.session_state["image_id"]:
        st.session_state["image_id"] = uploaded_id
        session.select_image(UploadedImage.from_file(uploaded) if uploaded is not None else None)

    if session.image is not None:
        st.markdown(
            f'<img src="{session.image.preview_url}" style="width:100%;border-radius:8px">',
            unsafe_allow_html=True,
        )

    state = session.active_state
    if st.button(
        t(f"button_{mode.value}"),
        type="primary",
        disabled=state.phase is Phase.LOADING,
        use_container_width=True,
    ):
        with st.spinner(t("analyzing")):
            state = session.run(mode, get_client().analyze)

# ============================================================================
# Result column
# ============================================================================

with col_result:
    st.subheader(t("result_heading"))
    with st.container(border=True):
        if state.phase is Phase.FAILED:
            st.error(state.error)
        elif state.phase is Phase.SUCCESS:
            RENDERERS[mode](state.result)
        else:
            st.markdown(f"**{t(f'placeholder_{mode.value}')}**")
            st.caption(t("placeholder_subtitle"))

st.divider()
st.caption(t("footer"))
