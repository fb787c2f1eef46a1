# ui/roster/render.py
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

import streamlit as st

from core.characters import CharacterRecord
from ui.roster.data_io import load_bundled_roster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CharacterView:
    lines: Tuple[str, str, str, str]


def _fmt(value: Any, placeholder: str) -> str:
    return placeholder if value is None else str(value)


def character_lines(name, hp, ac, initiative, placeholder: str = "") -> Tuple[str, str, str, str]:
    return (
        f"Name: {_fmt(name, placeholder)}",
        f"HP: {_fmt(hp, placeholder)}",
        f"AC: {_fmt(ac, placeholder)}",
        f"Initiative: {_fmt(initiative, placeholder)}",
    )


def build_character_views(records: Sequence[CharacterRecord], placeholder: str = "") -> List[CharacterView]:
    """One view per record, in the order given."""
    return [
        CharacterView(character_lines(r.name, r.hp, r.ac, r.initiative, placeholder))
        for r in records
    ]


def render_character(view: CharacterView) -> None:
    with st.container(border=True):
        for line in view.lines:
            st.text(line)


def render_character_list(
    records: Sequence[CharacterRecord],
    *,
    placeholder: str = "",
    show_debug: bool = True,
    key: str = "roster_debug",
) -> List[CharacterView]:
    views = build_character_views(records, placeholder)

    for view in views:
        render_character(view)

    if show_debug:
        # bind the list as a default arg so the callback sees this run's views
        def _on_debug(_views=views):
            logger.info("Character views: %s", json.dumps([list(v.lines) for v in _views]))

        st.button("Debug", key=key, on_click=_on_debug)

    return views


def render(settings: Dict[str, Any]) -> None:
    st.title("Characters")

    try:
        records = load_bundled_roster(settings)
    except (OSError, ValueError) as exc:
        st.error(f"Could not load character data: {exc}")
        records = ()

    render_character_list(
        records,
        placeholder=settings.get("missing_field_placeholder", ""),
        show_debug=bool(settings.get("show_debug_button", True)),
    )
