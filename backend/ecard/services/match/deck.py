from typing import Dict

from .constants import CITIZEN, CITIZENS_PER_HAND, EMPEROR, GAMES_PER_SEGMENT, SLAVE


def create_deck(role: str) -> Dict[str, int]:
    """Return a fresh hand for one game played as ``role``."""
    if role == EMPEROR:
        return {EMPEROR: 1, CITIZEN: CITIZENS_PER_HAND}
    if role == SLAVE:
        return {SLAVE: 1, CITIZEN: CITIZENS_PER_HAND}
    raise ValueError(f"Unknown role: {role!r}")


def flip_role(role: str) -> str:
    return SLAVE if role == EMPEROR else EMPEROR


def segment_for_game(game_index: int) -> int:
    return game_index // GAMES_PER_SEGMENT


def role_for_game(base_role: str, game_index: int) -> str:
    """Role played in ``game_index``: base role on even segments, flipped on odd ones."""
    if segment_for_game(game_index) % 2 == 0:
        return base_role
    return flip_role(base_role)
