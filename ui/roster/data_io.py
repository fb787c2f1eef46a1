import streamlit as st
from typing import Tuple

from core.characters import CharacterRecord, load_roster
from core.settings_manager import resolve_data_path


@st.cache_data(show_spinner=False)
def _load_roster_cached(path_str: str) -> Tuple[CharacterRecord, ...]:
    return load_roster(path_str)


def load_bundled_roster(settings) -> Tuple[CharacterRecord, ...]:
    """Read-only roster from the bundled data file, loaded once per path."""
    path = resolve_data_path(settings.get("characters_file") or "characters.json")
    return _load_roster_cached(str(path))
