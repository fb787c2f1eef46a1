# core/characters.py
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class CharacterRecord:
    name: Optional[str] = None
    hp: Any = None
    ac: Any = None
    initiative: Any = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "CharacterRecord":
        """
        Build a record from one entry of the bundled file. Keys are the ones
        the data file uses ("Name", "HP", "AC", "Initiative"); anything missing
        stays None so the view can render a placeholder for it.
        """
        return cls(
            name=raw.get("Name"),
            hp=raw.get("HP"),
            ac=raw.get("AC"),
            initiative=raw.get("Initiative"),
        )


def parse_roster(data: Any) -> Tuple[CharacterRecord, ...]:
    if not isinstance(data, Mapping):
        return ()
    entries = data.get("Characters")
    if not isinstance(entries, list):
        return ()
    return tuple(
        CharacterRecord.from_mapping(e) if isinstance(e, Mapping) else CharacterRecord()
        for e in entries
    )


def load_roster(path) -> Tuple[CharacterRecord, ...]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Character data file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return parse_roster(data)
