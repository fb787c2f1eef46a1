from typing import Iterable

from core.initiative import Combatant

MIN_WIDTH = 15


def _hp_text(c: Combatant) -> str:
    if c.temp_hp > 0:
        return f" HP {c.current_hp}/{c.max_hp} + {c.temp_hp}"
    return f" HP {c.current_hp}/{c.max_hp}"


def format_stat_block(c: Combatant) -> str:
    """Box-drawn card for one combatant, e.g.

    ┌───────────────┐
    │     Aria      │
    │ HP 12/12      │
    │ AC 15         │
    │ Init 3        │
    └───────────────┘
    """
    hp = _hp_text(c)
    width = max(MIN_WIDTH, len(c.name) + 2, len(hp) + 1)

    pad = width - len(c.name)
    left = pad // 2
    name_row = " " * left + c.name + " " * (pad - left)

    rows = [
        "┌" + "─" * width + "┐",
        "│" + name_row + "│",
        "│" + hp.ljust(width) + "│",
        "│" + f" AC {c.ac}".ljust(width) + "│",
        "│" + f" Init {c.score}".ljust(width) + "│",
        "└" + "─" * width + "┘",
    ]
    return "\n".join(rows) + "\n\n"


def format_order(order: Iterable[Combatant]) -> str:
    blocks = [format_stat_block(c) for c in order]
    if not blocks:
        return "Initiative order is empty"
    return "".join(blocks)
