#ui/sidebar.py
import streamlit as st
from core.settings_manager import save_settings

MODES = ["Characters", "Initiative Tracker"]


def _sync_display_settings():
    settings = st.session_state.get("user_settings") or {}
    settings["missing_field_placeholder"] = st.session_state.get("sidebar_placeholder", "")
    settings["show_debug_button"] = bool(st.session_state.get("sidebar_show_debug", True))
    st.session_state["user_settings"] = settings
    save_settings(settings)


def render_sidebar(settings: dict) -> str:
    st.sidebar.header("Settings")

    with st.sidebar.expander("Display", expanded=False):
        st.text_input(
            "Placeholder for missing fields",
            value=settings.get("missing_field_placeholder", ""),
            key="sidebar_placeholder",
            on_change=_sync_display_settings,
        )
        st.checkbox(
            "Show debug button",
            value=bool(settings.get("show_debug_button", True)),
            key="sidebar_show_debug",
            on_change=_sync_display_settings,
        )

    return st.sidebar.radio("Mode", MODES, key="mode")
