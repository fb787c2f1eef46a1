from core.initiative import Combatant, InitiativeOrder
from core.stat_block import format_order, format_stat_block


def _rows(block):
    return block.rstrip("\n").split("\n")


def test_basic_block():
    block = format_stat_block(Combatant(name="Aria", ac=15, max_hp=12, score=3))
    assert _rows(block) == [
        "┌───────────────┐",
        "│     Aria      │",
        "│ HP 12/12      │",
        "│ AC 15         │",
        "│ Init 3        │",
        "└───────────────┘",
    ]
    assert block.endswith("\n\n")


def test_temp_hp_row():
    c = Combatant(name="Aria", ac=15, max_hp=12, score=3)
    c.set_temp(4)
    assert "│ HP 12/12 + 4  │" in _rows(format_stat_block(c))


def test_long_name_widens_block():
    c = Combatant(name="Goblin Skirmisher Captain", ac=13, max_hp=7, score=12)
    rows = _rows(format_stat_block(c))
    assert len({len(r) for r in rows}) == 1
    assert rows[1] == "│ Goblin Skirmisher Captain │"


def test_rows_equal_width_with_large_numbers():
    c = Combatant(name="Ancient Wyrm", ac=22, max_hp=65535, score=255)
    c.set_temp(65535)
    rows = _rows(format_stat_block(c))
    assert len({len(r) for r in rows}) == 1


def test_order_text():
    assert format_order(InitiativeOrder()) == "Initiative order is empty"
    order = InitiativeOrder([Combatant("Mira", 10, 10, 1), Combatant("Quell", 10, 10, 5)])
    text = format_order(order)
    assert text.index("Quell") < text.index("Mira")
    assert text.count("┌") == 2
