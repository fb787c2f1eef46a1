"""Combat turn order.

An InitiativeOrder keeps combatants sorted by initiative score (highest
first) and tracks whose turn it is. Combatants carry their own hit point
bookkeeping: damage eats temporary HP before real HP, healing never goes past
the maximum.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional

from core.characters import CharacterRecord

logger = logging.getLogger(__name__)

IMPORT_FORMAT_ERROR = "The provided file is not JSON or is not in the expected format."
IMPORT_PATH_ERROR = "Provided path is not valid"
EXPORT_EMPTY_ERROR = "Initiative order is empty"
EXPORT_PATH_ERROR = "Path is invalid or file already exists"

MAX_SCORE = 255
MAX_HP = 65535


class RosterImportError(ValueError):
    pass


class RosterExportError(ValueError):
    pass


def _as_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{field_name} must be a number, got {value!r}") from None


def _check_amount(amount: int) -> int:
    amount = _as_int(amount, "amount")
    if amount < 0:
        raise ValueError(f"amount must not be negative, got {amount}")
    return amount


@dataclass
class Combatant:
    name: str
    ac: int
    max_hp: int
    score: int
    current_hp: Optional[int] = None
    temp_hp: int = 0

    def __post_init__(self):
        if self.current_hp is None:
            self.current_hp = self.max_hp

    def damage(self, amount: int) -> None:
        amount = _check_amount(amount)
        if self.temp_hp > amount:
            self.temp_hp -= amount
            return
        amount -= self.temp_hp
        self.temp_hp = 0
        self.current_hp = max(0, self.current_hp - amount)

    def heal(self, amount: int) -> None:
        amount = _check_amount(amount)
        self.current_hp = min(self.max_hp, self.current_hp + amount)

    def set_temp(self, amount: int) -> None:
        # Temporary HP replaces, it never stacks.
        self.temp_hp = _check_amount(amount)

    @classmethod
    def from_record(cls, record: CharacterRecord, score: Optional[int] = None) -> "Combatant":
        if not record.name:
            raise ValueError("Character record has no name")
        hp = _as_int(record.hp, f"{record.name} HP")
        ac = _as_int(record.ac, f"{record.name} AC")
        if score is None:
            score = _as_int(record.initiative, f"{record.name} Initiative")
        return cls(name=str(record.name), ac=ac, max_hp=hp, score=int(score))

    def to_json(self) -> Dict[str, Any]:
        return {"name": self.name, "ac": self.ac, "hp": self.max_hp}


class InitiativeOrder:
    def __init__(self, combatants=None):
        self._items: List[Combatant] = []
        self._current: Optional[int] = None
        for c in combatants or []:
            self.add(c)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Combatant]:
        return iter(list(self._items))

    def __bool__(self) -> bool:
        return bool(self._items)

    @property
    def current(self) -> Optional[Combatant]:
        if self._current is None:
            return None
        return self._items[self._current]

    @property
    def current_index(self) -> Optional[int]:
        return self._current

    def add(self, combatant: Combatant) -> None:
        idx = len(self._items)
        for i, existing in enumerate(self._items):
            if existing.score < combatant.score:
                idx = i
                break
        self._items.insert(idx, combatant)

        if self._current is None:
            self._current = 0
        elif idx <= self._current:
            self._current += 1
        logger.debug("Added %s (score %s) at position %d", combatant.name, combatant.score, idx)

    def find(self, name: str) -> Optional[Combatant]:
        for c in self._items:
            if c.name == name:
                return c
        return None

    def _index_of(self, name: str) -> Optional[int]:
        for i, c in enumerate(self._items):
            if c.name == name:
                return i
        return None

    def remove(self, name: str) -> bool:
        idx = self._index_of(name)
        if idx is None:
            return False

        del self._items[idx]
        if not self._items:
            self._current = None
        elif idx < self._current:
            self._current -= 1
        elif idx == self._current and self._current >= len(self._items):
            # Removed the last one while it was its turn: wrap to the top.
            self._current = 0
        logger.debug("Removed %s", name)
        return True

    def advance(self) -> None:
        if not self._items:
            return
        if self._current is None or self._current + 1 >= len(self._items):
            self._current = 0
        else:
            self._current += 1

    def beginning(self) -> None:
        if self._items:
            self._current = 0

    def damage(self, name: str, amount: int) -> bool:
        target = self.find(name)
        if target is None:
            return False
        target.damage(amount)
        logger.debug("%s takes %s damage (now %s/%s + %s)", name, amount, target.current_hp, target.max_hp, target.temp_hp)
        return True

    def heal(self, name: str, amount: int) -> bool:
        target = self.find(name)
        if target is None:
            return False
        target.heal(amount)
        logger.debug("%s heals %s (now %s/%s)", name, amount, target.current_hp, target.max_hp)
        return True

    def set_temp(self, name: str, amount: int) -> bool:
        target = self.find(name)
        if target is None:
            return False
        target.set_temp(amount)
        logger.debug("%s temp HP set to %s", name, amount)
        return True

    # --- JSON import / export ---

    def import_entries(self, entries: List[Dict[str, Any]], scores: Optional[Mapping[Any, int]] = None) -> List[Combatant]:
        added = combatants_from_entries(entries, scores)
        for c in added:
            self.add(c)
        return added

    def import_json(self, text: str, scores: Optional[Mapping[Any, int]] = None) -> List[Combatant]:
        """Add every combatant described by `text` to the order.

        `text` is a JSON list of {"name", "ac", "hp"} objects; an optional
        "initiative" key supplies the score, otherwise it comes from `scores`
        (see combatants_from_entries). Nothing is added unless the whole file
        is usable.
        """
        return self.import_entries(parse_import_text(text), scores)

    def import_file(self, path, scores: Optional[Mapping[Any, int]] = None) -> List[Combatant]:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            raise RosterImportError(IMPORT_PATH_ERROR) from None
        return self.import_json(text, scores)

    def export_json(self) -> str:
        if not self._items:
            raise RosterExportError(EXPORT_EMPTY_ERROR)
        return json.dumps([c.to_json() for c in self._items], indent=2)

    def export_file(self, path) -> None:
        payload = self.export_json()
        try:
            with open(path, "x", encoding="utf-8") as f:
                f.write(payload)
        except OSError:
            raise RosterExportError(EXPORT_PATH_ERROR) from None


def _bounded_int(value: Any, upper: int) -> int:
    # JSON numbers only; 12.9, "12" and true are all rejected.
    if isinstance(value, bool) or not isinstance(value, int):
        raise RosterImportError(IMPORT_FORMAT_ERROR)
    if not 0 <= value <= upper:
        raise RosterImportError(IMPORT_FORMAT_ERROR)
    return value


def parse_import_entries(raw: Any) -> List[Dict[str, Any]]:
    """Validate the shape of an import payload.

    Returns normalized dicts with "ac"/"hp" and, when present, an
    "initiative" value. AC and initiative are 0-255, HP 0-65535; anything
    else raises RosterImportError.
    """
    if not isinstance(raw, list):
        raise RosterImportError(IMPORT_FORMAT_ERROR)

    out: List[Dict[str, Any]] = []
    for item in raw:
        if not isinstance(item, dict) or not isinstance(item.get("name"), str):
            raise RosterImportError(IMPORT_FORMAT_ERROR)
        initiative = item.get("initiative")
        out.append(
            {
                "name": item["name"],
                "ac": _bounded_int(item.get("ac"), MAX_SCORE),
                "hp": _bounded_int(item.get("hp"), MAX_HP),
                "initiative": None if initiative is None else _bounded_int(initiative, MAX_SCORE),
            }
        )
    return out


def parse_import_text(text: str) -> List[Dict[str, Any]]:
    try:
        raw = json.loads(text)
    except (TypeError, ValueError):
        raise RosterImportError(IMPORT_FORMAT_ERROR) from None
    return parse_import_entries(raw)


def combatants_from_entries(entries: List[Dict[str, Any]], scores: Optional[Mapping[Any, int]] = None) -> List[Combatant]:
    """Turn parsed import entries into combatants.

    An entry without "initiative" takes its score from `scores`, keyed by the
    entry's position in `entries` or, failing that, by its name. Position keys
    let two entries that share a name get different scores.
    """
    scores = scores or {}
    out = []
    for i, entry in enumerate(entries):
        score = entry.get("initiative")
        if score is None:
            score = scores.get(i, scores.get(entry["name"]))
        if score is None:
            raise ValueError(f"No initiative score given for {entry['name']}")
        score = _as_int(score, f"{entry['name']} initiative")
        if not 0 <= score <= MAX_SCORE:
            raise ValueError(f"{entry['name']} initiative must be between 0 and {MAX_SCORE}, got {score}")
        out.append(Combatant(name=entry["name"], ac=entry["ac"], max_hp=entry["hp"], score=score))
    return out
