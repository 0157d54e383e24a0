"""Card judgment.

Emperor beats citizen, citizen beats slave and slave beats emperor.
"""

from .constants import CARD_KINDS, CITIZEN, EMPEROR, SLAVE

DRAW = 'draw'
FIRST_WINS = 'first'
SECOND_WINS = 'second'

_BEATS = {EMPEROR: CITIZEN, CITIZEN: SLAVE, SLAVE: EMPEROR}


def judge(first: str, second: str) -> str:
    """Judge two cards revealed together.

    Returns ``DRAW``, ``FIRST_WINS`` or ``SECOND_WINS``. Raises ``ValueError``
    for anything that is not a known card kind.
    """
    for card in (first, second):
        if card not in CARD_KINDS:
            raise ValueError(f"Unknown card: {card!r}")
    if first == second:
        return DRAW
    if _BEATS[first] == second:
        return FIRST_WINS
    return SECOND_WINS


def outcome_for(verdict: str, seat: int) -> str:
    """Translate a verdict into 'win', 'lose' or 'draw' for seat 0 or 1."""
    if verdict == DRAW:
        return 'draw'
    winning_seat = 0 if verdict == FIRST_WINS else 1
    return 'win' if seat == winning_seat else 'lose'
