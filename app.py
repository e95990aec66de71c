# Asteroide 2024 YR4: countdown to the potential impact date
# UX: live countdown, age at impact from a birth date (or ?date=dd-MM-yyyy),
# shareable link copied to the clipboard, native share with the age card image.

import logging
from datetime import date, timedelta

import streamlit as st

from age_card import render_age_card
from impact_dates import TARGET_DATE, format_impact_date
from settings import load_settings, page_origin
from share import ShareOutcome, request_card_share, request_copy, settle_browser_request
from widget_state import get_state

st.set_page_config(page_title="Asteroide 2024 YR4 - Cuenta Regresiva", page_icon="☄️", layout="centered")

# ----------------------------- Config -----------------------------
SETTINGS = load_settings()
logging.basicConfig(level=getattr(logging, SETTINGS.log_level, logging.INFO),
                    format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("impacto")

NASA_INFO = {
    "url": "https://ciencia.nasa.gov/sistema-solar/asteroide-2024-yr4/",
    "impact_probability": "0.0023%",  # according to NASA
    "description": "El asteroide 2024 YR4, descubierto por NASA en 2024, tiene un diámetro estimado entre "
                   "50-100 metros. Según la escala de Turín, está clasificado en nivel 1, indicando un riesgo muy bajo.",
    "more_info": "https://cneos.jpl.nasa.gov/pd/cs/pdc24/",
    "image": "https://assets.science.nasa.gov/content/dam/science/psd/planetary-defense/2024yr4_discovery_atlas.gif"
             "?w=650&h=500&fit=clip&crop=faces%2Cfocalpoint",
}
MIN_BIRTH = date(1900, 1, 1)
TICK = timedelta(seconds=SETTINGS.tick_seconds)

# -------------------------- Session State -------------------------
state = get_state(st.session_state)
if state.load_query(st.query_params.get("date")):
    logger.info("Birth date loaded from URL: %s", state.birth_date)
ORIGIN = page_origin(SETTINGS)

# ------------------------------ Styles ----------------------------
st.markdown("""
<style>
.stApp, .main, .block-container{
  background: linear-gradient(to bottom, #000080, #000040) !important;
  color:#fff;
}
.block-container{ max-width:900px; margin:0 auto !important; padding-top:20px; }
#MainMenu, footer{visibility:hidden}
h1.title{ font-size:42px; font-weight:800; text-align:center; color:#fde047; letter-spacing:.05em; }
.timer-grid{ display:flex; flex-wrap:wrap; gap:10px; justify-content:center;
  background:rgba(0,0,0,.6); border:1px solid #eab308; border-radius:14px; padding:16px; }
.timer-seg{ display:flex; flex-direction:column; align-items:center; min-width:86px;
  padding:10px 12px; border-radius:10px; background:rgba(30,58,138,.5); }
.timer-num{ font:700 34px/1.1 ui-monospace, monospace; color:#fde047; }
.timer-lab{ font-size:12px; opacity:.9; }
.age-card{ text-align:center; background:rgba(0,0,0,.6); border:1px solid #eab308;
  border-radius:14px; padding:18px; }
.age-num{ font-size:64px; font-weight:800; color:#fde047; line-height:1.1; }
.age-txt{ font-size:20px; color:#93c5fd; }
.copied{ position:fixed; bottom:16px; right:16px; background:#16a34a; color:#fff;
  padding:8px 16px; border-radius:10px; box-shadow:0 6px 14px rgba(0,0,0,.4); z-index:1000; }
.stButton>button { background-color:#2563eb; color:#fff; border-radius:10px; font-weight:700; border:0; }
</style>
""", unsafe_allow_html=True)


def segments_html(cells) -> str:
    segs = "".join(
        f'<div class="timer-seg"><span class="timer-num">{value}</span><span class="timer-lab">{label}</span></div>'
        for value, label in cells
    )
    return f'<div class="timer-grid">{segs}</div>'


@st.cache_data(ttl=3600)
def cached_card(birth: date) -> bytes:
    return render_age_card(birth)


# ------------------------------- Header ---------------------------
st.markdown('<h1 class="title">Asteroide 2024 YR4 - Cuenta Regresiva</h1>', unsafe_allow_html=True)
st.image(NASA_INFO["image"], caption="Ilustración del asteroide")
st.markdown(f"<p style='text-align:center;color:#fef08a'>Probabilidad de impacto: {NASA_INFO['impact_probability']}</p>",
            unsafe_allow_html=True)
st.caption(NASA_INFO["description"])


# ----------------------------- Live Countdown -----------------------------
@st.fragment(run_every=TICK)
def render_countdown():
    remaining = get_state(st.session_state).tick()
    st.markdown(segments_html([
        (remaining.years, "AÑOS"), (remaining.months, "MESES"), (remaining.days, "DÍAS"),
        (remaining.hours, "HORAS"), (remaining.minutes, "MINUTOS"),
    ]), unsafe_allow_html=True)
    if remaining.is_zero():
        st.caption("La fecha de impacto potencial ya pasó.")


render_countdown()

st.markdown(f"### Fecha de Impacto Potencial: {format_impact_date(TARGET_DATE)}")

# ------------------------------ Birth date ------------------------
lo = min(MIN_BIRTH, state.birth_date) if state.birth_date else MIN_BIRTH
hi = max(TARGET_DATE, state.birth_date) if state.birth_date else TARGET_DATE
picked = st.date_input("Ingresa tu fecha de nacimiento:", value=state.birth_date,
                       min_value=lo, max_value=hi, format="DD/MM/YYYY")
if picked != state.birth_date:
    state.enter_birth_date(picked)

if st.button("Calcular"):
    state.reveal()


def handle_copy():
    if request_copy(state, ORIGIN) is ShareOutcome.SKIPPED:
        st.info("Ingresa tu fecha de nacimiento para compartir tu edad.")


# ------------------------------- Age card -------------------------
if state.show_card:
    if state.birth_date is None:
        st.info("Ingresa tu fecha de nacimiento para calcular tu edad.")
    else:
        st.markdown(
            '<div class="age-card" id="age-card">'
            '<div class="age-txt">Tendrás</div>'
            f'<div class="age-num">{state.age}</div>'
            '<div class="age-txt">años en el momento del impacto</div>'
            '</div>', unsafe_allow_html=True)
        bd = state.age_breakdown
        st.markdown(segments_html([(bd.years, "AÑOS"), (bd.months, "MESES"), (bd.days, "DÍAS")]),
                    unsafe_allow_html=True)
        with st.expander("Ver tarjeta para compartir"):
            st.image(cached_card(state.birth_date), caption="age.png")
        if st.button("Compartir mi edad", key="share_card"):
            handle_copy()

# ------------------------------ Share row -------------------------
left, mid, right = st.columns(3)
with left:
    if st.button("Compartir", key="share_main"):
        handle_copy()
with mid:
    if st.button("Compartir imagen", key="share_image", disabled=state.birth_date is None):
        request_card_share(state, ORIGIN, native_share=SETTINGS.native_share, render=cached_card)
with right:
    st.link_button("Más detalles en el sitio de la Nasa", NASA_INFO["more_info"])

# ------------------------- Browser requests -----------------------
# Re-rendered on every run until the browser answers; its answer reruns the page.
settled = settle_browser_request(state, notice_seconds=SETTINGS.copied_notice_seconds)
if settled not in (None, ShareOutcome.PENDING):
    logger.debug("Share outcome: %s", settled.value)


# ---------------------------- Copied notice -----------------------
@st.fragment(run_every=TICK)
def render_copied_notice():
    if get_state(st.session_state).copied_visible():
        st.markdown('<div class="copied">Texto copiado al portapapeles</div>', unsafe_allow_html=True)


render_copied_notice()

# ----------------------------- Footer -----------------------------
st.markdown(f"""
<hr style="margin-top:30px; margin-bottom:10px; border:1px solid rgba(255,255,255,0.15);">
<div style="text-align:center; font-size:14px; color:#aaa;">
  <a href="{NASA_INFO['url']}" target="_blank" style="color:#fff;text-decoration:none;">Asteroide 2024 YR4 en ciencia.nasa.gov</a>
</div>
""", unsafe_allow_html=True)
