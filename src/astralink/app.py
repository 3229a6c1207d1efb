"""AstraLink Sky View — Streamlit page for the sky dome and globe."""

import html
import os
import time
from datetime import datetime, timezone

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from astralink.animation import GeodesicViewAnimator  # noqa: E402
from astralink.clock import SPEED_PRESETS, SimulatedClock  # noqa: E402
from astralink.compute import compute_sky_frame  # noqa: E402
from astralink.geo import InvalidObserverError, validate_observer  # noqa: E402
from astralink.i18n import t  # noqa: E402
from astralink.orbits import GLOBE_ISS_ORBIT  # noqa: E402
from astralink.renderers.plotly_3d import render_globe, render_sky_dome  # noqa: E402
from astralink.sidereal import instant_from_local  # noqa: E402

_FRAME_INTERVAL_S = 0.05
_SKY_REFRESH_S = 1.0
_GLOBE_REFRESH_S = 0.5

# --- Language detection (browser-first via streamlit-js-eval) ---
# On the first run the JS call returns None; the rerun it triggers fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="✦",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---

if "observer" not in st.session_state:
    try:
        st.session_state.observer = validate_observer(
            os.environ.get("ASTRALINK_DEFAULT_LAT", "34.6868"),
            os.environ.get("ASTRALINK_DEFAULT_LON", "-118.1542"),
        )
    except InvalidObserverError:
        st.session_state.observer = validate_observer(34.6868, -118.1542)
    st.session_state.location_name = os.environ.get("ASTRALINK_DEFAULT_NAME", "Lancaster, CA")
if "clock" not in st.session_state:
    st.session_state.clock = SimulatedClock(speed=0)
if "animator" not in st.session_state:
    st.session_state.animator = GeodesicViewAnimator()
    st.session_state.animator.start_transition_to(
        st.session_state.observer, now_ms=time.time() * 1000.0
    )
if "error_msg" not in st.session_state:
    st.session_state.error_msg = None

clock: SimulatedClock = st.session_state.clock
animator: GeodesicViewAnimator = st.session_state.animator

st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #050a1a !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    .status-line { color: #22d3ee; font-size: 0.9rem; }
    .error-box {
        border: 1px solid #ff6b6b; color: #ff9999;
        padding: 0.6rem 1rem; border-radius: 6px;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Input panel ---

col1, col2, col3, col4 = st.columns([3, 2, 2, 1.2])
with col1:
    name_in = st.text_input(t("label_place", _lang), value=st.session_state.location_name)
with col2:
    lat_in = st.text_input(t("label_lat", _lang), value=f"{st.session_state.observer.latitude:.4f}")
with col3:
    lon_in = st.text_input(t("label_lon", _lang), value=f"{st.session_state.observer.longitude:.4f}")
with col4:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    submitted = st.button(t("btn_go", _lang), key="go_btn")

if submitted:
    try:
        target = validate_observer(lat_in, lon_in)
    except InvalidObserverError as e:
        st.session_state.error_msg = t("error_observer", _lang).format(error=html.escape(str(e)))
    else:
        st.session_state.error_msg = None
        st.session_state.location_name = name_in or f"{target.latitude:.2f}°, {target.longitude:.2f}°"
        if target != st.session_state.observer:
            st.session_state.observer = target
            animator.start_transition_to(target, now_ms=time.time() * 1000.0)

ctl1, ctl2, ctl3, ctl4, ctl5 = st.columns([2, 1, 1.5, 1.5, 1.5])
with ctl1:
    speed = st.select_slider(
        t("label_speed", _lang),
        options=list(SPEED_PRESETS),
        value=int(clock.speed),
        format_func=lambda s: t("speed_paused", _lang) if s == 0 else f"{s}×",
    )
    if speed != clock.speed:
        clock.set_speed(speed)
with ctl2:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    if st.button(t("btn_now", _lang), key="now_btn"):
        clock.reset()
with ctl3:
    show_labels = st.checkbox(t("label_labels", _lang), value=True)
with ctl4:
    show_constellations = st.checkbox(t("label_constellations", _lang), value=True)
with ctl5:
    show_satellites = st.checkbox(t("label_satellites", _lang), value=True)

tm1, tm2, tm3 = st.columns([3, 2, 1.2])
with tm1:
    local_in = st.text_input(t("label_local_time", _lang), placeholder="2025-01-10 19:00")
with tm2:
    tz_in = st.text_input(t("label_tz", _lang), value=os.environ.get("ASTRALINK_DEFAULT_TZ", "UTC"))
with tm3:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    set_time = st.button(t("btn_set_time", _lang), key="time_btn")

if set_time:
    try:
        clock.reset(instant_from_local(local_in.strip(), tz_in.strip()))
    except ValueError as e:
        st.session_state.error_msg = t("error_time", _lang).format(error=html.escape(str(e)))
    else:
        st.session_state.error_msg = None

if st.session_state.error_msg:
    st.markdown(f"<div class='error-box'>{st.session_state.error_msg}</div>", unsafe_allow_html=True)

sky_col, globe_col = st.columns(2)


@st.fragment(run_every=None if clock.paused else _SKY_REFRESH_S)
def _sky_panel() -> None:
    now_ms = clock.now_ms()
    frame = compute_sky_frame(st.session_state.observer, now_ms)
    when = datetime.fromtimestamp(now_ms / 1000.0, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    st.markdown(
        "<div class='status-line'>"
        + html.escape(
            t("status_line", _lang).format(
                name=st.session_state.location_name,
                time=when,
                lst=frame.lst_deg,
                stars=len(frame.stars),
                segments=len(frame.segments),
            )
        )
        + "</div>",
        unsafe_allow_html=True,
    )
    fig = render_sky_dome(
        frame,
        show_labels=show_labels,
        show_constellations=show_constellations,
        t_seconds=time.monotonic() if show_satellites else None,
    )
    st.plotly_chart(fig, use_container_width=True, key="sky_chart")


with sky_col:
    st.subheader(t("heading_sky", _lang))
    _sky_panel()


def _globe_figure(camera, now_ms: float):
    iss = GLOBE_ISS_ORBIT.position(now_ms / 1000.0) if show_satellites else None
    return render_globe(st.session_state.observer, camera, iss=iss)


@st.fragment(run_every=_GLOBE_REFRESH_S)
def _globe_panel() -> None:
    globe_placeholder = st.empty()
    now_ms = time.time() * 1000.0
    if not animator.is_animating:
        # Ambient rotation since the previous rerun of this panel
        last_ms = st.session_state.get("globe_last_ms", now_ms)
        camera = animator.idle(now_ms - last_ms)
        globe_placeholder.plotly_chart(
            _globe_figure(camera, now_ms), use_container_width=True, key="globe_chart"
        )
    else:
        frame_no = 0
        # Drive the camera flight one sample per frame until it completes
        while True:
            now_ms = time.time() * 1000.0
            sample = animator.sample(now_ms)
            globe_placeholder.plotly_chart(
                _globe_figure(sample, now_ms),
                use_container_width=True,
                key=f"globe_chart_{frame_no}",
            )
            if sample.is_complete:
                break
            frame_no += 1
            time.sleep(_FRAME_INTERVAL_S)
    st.session_state.globe_last_ms = now_ms


with globe_col:
    st.subheader(t("heading_globe", _lang))
    _globe_panel()
