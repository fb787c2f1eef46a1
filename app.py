# app.py
import streamlit as st

from core.settings_manager import configure_logging, load_settings
from ui.sidebar import render_sidebar
from ui.roster.render import render as roster_render
from ui.tracker.render import render as tracker_render

st.set_page_config(
    page_title="Initiative Roster",
    layout="wide",
    initial_sidebar_state="auto",
)

st.markdown("""
    <style>
    /* One bordered card per character */
    div[data-testid="stVerticalBlockBorderWrapper"] {
        border-radius: 6px;
        background-color: rgba(255, 255, 255, 0.02);
    }

    div[data-testid="stVerticalBlockBorderWrapper"] [data-testid="stText"] {
        margin-bottom: 0;
    }

    /* Stat blocks use box-drawing characters, keep them tight */
    .stCode pre {
        line-height: 1.15;
    }
    </style>
""", unsafe_allow_html=True)

# --- Initialize Settings ---
if "user_settings" not in st.session_state:
    st.session_state.user_settings = load_settings()

settings = st.session_state.user_settings
configure_logging(settings)

mode = render_sidebar(settings)

if mode == "Initiative Tracker":
    tracker_render(settings)
else:
    roster_render(settings)
