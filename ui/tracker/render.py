# ui/tracker/render.py
from typing import Any, Dict

import pandas as pd
import streamlit as st

from core.initiative import Combatant, RosterExportError, RosterImportError
from core.stat_block import format_order, format_stat_block
from ui.roster.data_io import load_bundled_roster
from ui.tracker.state import (
    add_roster,
    confirm_import,
    entries_needing_score,
    get_order,
    mark_imported,
    read_upload,
    reset_order,
    was_imported,
)

_NOTICE_KEY = "tracker_notice"


def _notice(kind: str, msg: str) -> None:
    st.session_state[_NOTICE_KEY] = (kind, msg)


def _show_notice() -> None:
    notice = st.session_state.pop(_NOTICE_KEY, None)
    if not notice:
        return
    kind, msg = notice
    if kind == "error":
        st.error(msg)
    elif kind == "warning":
        st.warning(msg)
    else:
        st.success(msg)


# --- callbacks ---

def _on_next():
    get_order().advance()


def _on_top():
    get_order().beginning()


def _on_add():
    ss = st.session_state
    name = (ss.get("tracker_add_name") or "").strip()
    if not name:
        _notice("error", "Enter a name before adding.")
        return
    c = Combatant(
        name=name,
        ac=int(ss.get("tracker_add_ac", 10)),
        max_hp=int(ss.get("tracker_add_hp", 10)),
        score=int(ss.get("tracker_add_score", 0)),
    )
    get_order().add(c)
    ss["tracker_add_name"] = ""
    _notice("success", f"Added {name}.")


def _on_add_roster(settings):
    try:
        records = load_bundled_roster(settings)
    except (OSError, ValueError) as exc:
        _notice("error", f"Could not load character data: {exc}")
        return
    added, skipped = add_roster(get_order(), records)
    if skipped:
        _notice("warning", f"Added {len(added)}; skipped incomplete entries: {', '.join(skipped)}")
    else:
        _notice("success", f"Added {len(added)} characters.")


def _on_hp_change(action: str):
    ss = st.session_state
    target = ss.get("tracker_target")
    amount = int(ss.get("tracker_amount", 0))
    order = get_order()
    try:
        if action == "damage":
            found = order.damage(target, amount)
        elif action == "heal":
            found = order.heal(target, amount)
        else:
            found = order.set_temp(target, amount)
    except ValueError as exc:
        _notice("error", str(exc))
        return
    if not found:
        _notice("error", f"No combatant named {target}.")


def _on_remove():
    target = st.session_state.get("tracker_target")
    if not get_order().remove(target):
        _notice("error", f"No combatant named {target}.")


def _on_reset():
    reset_order()


# --- panels ---

def _render_current(order) -> None:
    st.markdown("### Current turn")
    current = order.current
    if current is None:
        st.caption("Initiative order is empty")
    else:
        st.code(format_stat_block(current), language=None)

    c1, c2, c3 = st.columns(3)
    with c1:
        st.button("Next", key="tracker_next", on_click=_on_next)
    with c2:
        st.button("Top", key="tracker_top", on_click=_on_top)
    with c3:
        st.button("Clear order", key="tracker_reset", on_click=_on_reset)


def _render_add(settings) -> None:
    st.markdown("### Add combatant")
    st.text_input("Name", key="tracker_add_name")
    c1, c2, c3 = st.columns(3)
    with c1:
        st.number_input("AC", min_value=0, max_value=255, value=10, step=1, key="tracker_add_ac")
    with c2:
        st.number_input("HP", min_value=0, max_value=65535, value=10, step=1, key="tracker_add_hp")
    with c3:
        st.number_input("Score", min_value=0, max_value=255, value=0, step=1, key="tracker_add_score")
    st.button("Add", key="tracker_add", on_click=_on_add)
    st.button("Add roster to order", key="tracker_add_roster", on_click=_on_add_roster, args=(settings,))


def _render_hp_controls(order) -> None:
    st.markdown("### Hit points")
    names = [c.name for c in order]
    if not names:
        st.caption("Add combatants to track hit points.")
        return

    if st.session_state.get("tracker_target") not in names:
        st.session_state["tracker_target"] = names[0]

    target = st.selectbox("Combatant", options=names, key="tracker_target")
    selected = order.find(target)
    if selected is not None:
        st.code(format_stat_block(selected), language=None)
    st.number_input("Amount", min_value=0, max_value=65535, value=0, step=1, key="tracker_amount")

    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.button("Damage", key="tracker_damage", on_click=_on_hp_change, args=("damage",))
    with c2:
        st.button("Heal", key="tracker_heal", on_click=_on_hp_change, args=("heal",))
    with c3:
        st.button("Set temp HP", key="tracker_temp", on_click=_on_hp_change, args=("temp",))
    with c4:
        st.button("Remove", key="tracker_remove", on_click=_on_remove)


def _render_table(order) -> None:
    rows = []
    for i, c in enumerate(order):
        rows.append(
            {
                "Turn": "▶" if i == order.current_index else "",
                "Name": c.name,
                "Init": c.score,
                "HP": f"{c.current_hp}/{c.max_hp}",
                "Temp": c.temp_hp,
                "AC": c.ac,
            }
        )
    if not rows:
        return
    st.dataframe(pd.DataFrame(rows), hide_index=True)


def _render_import_export(order) -> None:
    st.markdown("### Import / export")

    try:
        payload = order.export_json()
    except RosterExportError as exc:
        st.caption(str(exc))
    else:
        st.download_button(
            "Export JSON",
            data=payload,
            file_name="initiative.json",
            mime="application/json",
            key="tracker_export",
        )

    uploaded = st.file_uploader("Import JSON", type=["json"], key="tracker_import_file")
    if uploaded is None:
        return

    upload_id = getattr(uploaded, "file_id", None) or uploaded.name
    if was_imported(upload_id):
        st.caption(f"{uploaded.name} has already been imported.")
        return

    try:
        entries = read_upload(uploaded.getvalue())
    except RosterImportError as exc:
        st.error(str(exc))
        return

    scores = {}
    needs_score = entries_needing_score(entries)
    if needs_score:
        st.caption("Enter an initiative score for each imported character.")
    for i in needs_score:
        scores[i] = st.number_input(
            f"{entries[i]['name']} (#{i + 1})",
            min_value=0,
            max_value=255,
            value=0,
            step=1,
            key=f"tracker_import_score_{i}",
        )

    if st.button("Add imported", key="tracker_import_confirm"):
        added, error = confirm_import(order, entries, scores)
        if error:
            st.error(error)
            return
        mark_imported(upload_id)
        _notice("success", f"Imported {len(added)} combatants.")
        st.rerun()


def render(settings: Dict[str, Any]) -> None:
    st.markdown("## Initiative Tracker")
    _show_notice()

    order = get_order()
    left, right = st.columns([1, 1])

    with left:
        _render_current(order)
        _render_hp_controls(order)

    with right:
        _render_add(settings)

    st.markdown("---")
    _render_table(order)
    with st.expander("Stat blocks", expanded=False):
        st.code(format_order(order), language=None)

    _render_import_export(order)
