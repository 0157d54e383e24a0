import logging
from typing import List

from ecard.models import Finished, InProgress, Notification, Room, Transition
from .constants import TOTAL_GAMES
from .deck import create_deck, role_for_game

logger = logging.getLogger(__name__)


def score_update(room: Room) -> Notification:
    return Notification.room(room.room_id, 'score_update', {'scores': room.score_table()})


def begin_match(room: Room) -> Transition:
    """Reset the match counters and start the first game.

    Called the moment the second seat fills.
    """
    for player in room.players:
        room.scores[player.sid] = 0
    room.history.clear()
    logger.info(f"[match-start] room={room.room_id} players={[p.name for p in room.players]}")
    return start_game(room, 0)


def start_game(room: Room, game_index: int) -> Transition:
    """Deal fresh hands for ``game_index`` and announce the game.

    - Roles swap every segment of three games
    - Each player gets their own role, hand and the roster
    - The whole room gets the game counter and the score table
    """
    room.pending.clear()
    roster = room.roster()
    event = 'joined' if game_index == 0 else 'new_game'
    notifications: List[Notification] = []
    for player in room.players:
        player.role = role_for_game(player.base_role, game_index)
        player.hand = create_deck(player.role)
        notifications.append(Notification.player(player.sid, event, {
            'roomId': room.room_id,
            'gameNo': game_index + 1,
            'totalGames': TOTAL_GAMES,
            'role': player.role,
            'deck': dict(player.hand),
            'players': roster,
        }))
    notifications.append(Notification.room(room.room_id, 'game_counter', {
        'gameNo': game_index + 1,
        'totalGames': TOTAL_GAMES,
    }))
    notifications.append(score_update(room))
    roles = {p.name: p.role for p in room.players}
    logger.info(f"[game-start] room={room.room_id} game={game_index + 1} roles={roles}")
    return Transition(InProgress(game_index), notifications)


def complete_game(room: Room) -> Transition:
    """Close the decided game, then start the next one or finish the match."""
    game_index = room.state.game_index
    notifications = [score_update(room)]
    next_index = game_index + 1
    if next_index < TOTAL_GAMES:
        state, started = start_game(room, next_index)
        return Transition(state, notifications + started)

    first, second = room.players
    first_total = room.scores.get(first.sid, 0)
    second_total = room.scores.get(second.sid, 0)
    winner_name = None
    if first_total > second_total:
        winner_name = first.name
    elif second_total > first_total:
        winner_name = second.name
    notifications.append(Notification.room(room.room_id, 'match_over', {
        'totalGames': TOTAL_GAMES,
        'scores': [
            {'name': first.name, 'wins': first_total},
            {'name': second.name, 'wins': second_total},
        ],
        'winnerName': winner_name,
    }))
    logger.info(f"[match-over] room={room.room_id} scores={first_total}-{second_total} winner={winner_name}")
    return Transition(Finished(), notifications)
