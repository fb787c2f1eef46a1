import logging
from typing import Optional

import streamlit as st

from core.characters import CharacterRecord
from core.initiative import IMPORT_FORMAT_ERROR, Combatant, InitiativeOrder, RosterImportError, parse_import_text

ORDER_KEY = "initiative_order"
IMPORTED_KEY = "tracker_imported_files"

logger = logging.getLogger(__name__)


def get_order() -> InitiativeOrder:
    order = st.session_state.get(ORDER_KEY)
    if isinstance(order, InitiativeOrder):
        return order
    order = InitiativeOrder()
    st.session_state[ORDER_KEY] = order
    return order


def reset_order() -> InitiativeOrder:
    order = InitiativeOrder()
    st.session_state[ORDER_KEY] = order
    # A cleared order can take the same upload again.
    st.session_state[IMPORTED_KEY] = []
    return order


def add_roster(order: InitiativeOrder, records) -> tuple[list[Combatant], list[str]]:
    """Copy usable roster records into the order.

    Returns (added, skipped_names). The records themselves are left alone.
    """
    added: list[Combatant] = []
    skipped: list[str] = []
    for record in records:
        if not isinstance(record, CharacterRecord):
            continue
        try:
            c = Combatant.from_record(record)
        except ValueError as exc:
            logger.warning("Skipping roster entry %r: %s", record.name, exc)
            skipped.append(str(record.name) if record.name else "(unnamed)")
            continue
        order.add(c)
        added.append(c)
    return added, skipped


# --- import ---

def read_upload(data: bytes) -> list[dict]:
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        raise RosterImportError(IMPORT_FORMAT_ERROR) from None
    return parse_import_text(text)


def entries_needing_score(entries: list[dict]) -> list[int]:
    return [i for i, e in enumerate(entries) if e["initiative"] is None]


def confirm_import(order: InitiativeOrder, entries: list[dict], scores: dict) -> tuple[list[Combatant], Optional[str]]:
    """Add all entries or none of them.

    `scores` maps entry positions to the scores typed in for entries without
    an "initiative". Returns (added, error_message).
    """
    try:
        added = order.import_entries(entries, scores)
    except ValueError as exc:
        return [], str(exc)
    logger.debug("Imported %d combatants", len(added))
    return added, None


def was_imported(upload_id: str) -> bool:
    return upload_id in st.session_state.get(IMPORTED_KEY, [])


def mark_imported(upload_id: str) -> None:
    st.session_state.setdefault(IMPORTED_KEY, []).append(upload_id)
