"""Solar Globe — Streamlit app: day/night globe, live clocks, and search by local time."""

import html
import logging

import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from solarglobe.cities import (  # noqa: E402
    SPARSE_DATASET_SIZE,
    DatasetError,
    load_locations,
)
from solarglobe.clock import apparent_solar_time, civil_time  # noqa: E402
from solarglobe.compute import compute_globe_state  # noqa: E402
from solarglobe.config import configure_logging, load_settings  # noqa: E402
from solarglobe.i18n import t  # noqa: E402
from solarglobe.models import CityMatch, Location  # noqa: E402
from solarglobe.renderers.plotly_3d import render_globe  # noqa: E402
from solarglobe.search import (  # noqa: E402
    InvalidClockTimeError,
    find_by_solar_time,
    parse_clock_time,
)
from solarglobe.timecalc import now_utc  # noqa: E402

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# --- Language detection (browser-first via streamlit-js-eval) ---
# The first run gets None back; the rerun streamlit_js_eval triggers fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☀",
    layout="wide",
    initial_sidebar_state="collapsed",
)

st.markdown(
    """
    <style>
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #020611 !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    .info-panel {
        background: rgba(0, 0, 0, 0.65);
        border: 1px solid rgba(0, 255, 204, 0.25);
        border-radius: 12px;
        padding: 1rem 1.4rem;
        color: #e8e8e8;
        font-family: 'Menlo', 'Consolas', monospace;
    }
    .info-panel .city { font-size: 1.4rem; color: #ffffff; }
    .info-panel .clock { font-size: 2rem; color: #00ffcc; }
    .info-panel .meta { font-size: 0.85rem; color: #9aa; }
    .info-panel .tz { color: #00ccff; }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- Session state initialization ---

if "current_city" not in st.session_state:
    st.session_state.current_city = None
if "pin" not in st.session_state:
    st.session_state.pin = None


@st.cache_resource
def _locations() -> tuple[Location, ...]:
    return load_locations(settings.cities_path)


try:
    locations = _locations()
except DatasetError as e:
    logger.error("City dataset unavailable: %s", e)
    st.error(t("error_dataset", _lang).format(error=e))
    locations = ()

if 0 < len(locations) < SPARSE_DATASET_SIZE:
    st.caption(t("hint_sparse", _lang).format(count=len(locations)))


def _handle_search(time_text: str) -> None:
    if not locations:
        st.toast(t("loading_data", _lang))
        return
    try:
        hour, minute = parse_clock_time(time_text)
    except InvalidClockTimeError as e:
        st.toast(t("error_time", _lang).format(error=e))
        return

    result = find_by_solar_time(
        hour,
        minute,
        locations,
        now_utc(),
        tolerance_minutes=settings.match_tolerance_minutes,
    )
    if isinstance(result, CityMatch):
        city = result.location
        st.session_state.current_city = city
        st.session_state.pin = (city.lat, city.lon)
        st.toast(t("toast_found", _lang).format(name=city.name))
    else:
        st.session_state.current_city = None
        st.session_state.pin = (result.lat, result.lon)
        st.toast(t("toast_fallback", _lang).format(lon=f"{result.lon:.0f}"))


# --- Input bar ---
col1, col2 = st.columns([4, 1])
with col1:
    time_text = st.text_input(t("label_time", _lang), value="", placeholder="18:30")
with col2:
    st.markdown("<div style='height:1.9rem'></div>", unsafe_allow_html=True)
    submitted = st.button(
        t("btn_find", _lang), key="find_btn", use_container_width=True
    )

if submitted and time_text:
    _handle_search(time_text)


# --- Globe + clock, refreshed once per second from a single sampled instant ---
@st.fragment(run_every="1s")
def _live_view() -> None:
    state = compute_globe_state(now_utc())
    globe_col, info_col = st.columns([3, 1])

    with info_col:
        city: Location | None = st.session_state.current_city
        if city is not None:
            st.markdown(
                f"""
                <div class="info-panel">
                    <div class="city">{html.escape(city.name)}</div>
                    <div class="clock">{civil_time(city.timezone, state.instant)}</div>
                    <div class="meta">
                        {t("label_solar", _lang)}: {apparent_solar_time(city.lon, state.instant)}<br>
                        <span class="tz">{html.escape(city.timezone)}</span><br>
                        LAT: {city.lat:.2f} | LON: {city.lon:.2f}
                    </div>
                </div>
                """,
                unsafe_allow_html=True,
            )
        st.markdown(
            f"""
            <div class="info-panel meta">
                UTC {state.instant.strftime("%H:%M:%S")}<br>
                {t("label_sun", _lang)}: {state.sun_lat:+.2f}, {state.sun_lon:+.2f}<br>
                {t("label_moon", _lang)}: {state.moon_lat:+.2f}, {state.moon_lon:+.2f}<br>
                EoT: {state.sun.equation_of_time:+.1f} min
            </div>
            """,
            unsafe_allow_html=True,
        )

    with globe_col:
        fig = render_globe(state, locations, pin=st.session_state.pin)
        st.plotly_chart(fig, use_container_width=True, key="globe")


_live_view()
