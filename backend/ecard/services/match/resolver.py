import logging
from dataclasses import replace
from typing import List

from ecard.errors import (
    ALREADY_PLAYED, GAME_DECIDED, MATCH_FINISHED, NO_CARDS_LEFT, UNKNOWN_CARD,
    WAITING_FOR_OPPONENT, IllegalActionError,
)
from ecard.models import Finished, HistoryEntry, InProgress, Notification, Player, Room, Transition
from .constants import CARD_KINDS, CITIZEN, MAX_TURNS, POINTS_BY_ROLE
from .judgment import DRAW, FIRST_WINS, judge, outcome_for
from .lifecycle import complete_game

logger = logging.getLogger(__name__)


def play_card(room: Room, sid: str, card) -> List[Notification]:
    """Record ``card`` for the player and resolve the turn once both have played.

    Raises ``IllegalActionError`` without touching the room when the move is
    not allowed. A sid that is not seated in the room is ignored.
    """
    player = room.player(sid)
    if player is None:
        return []
    state = room.state
    if isinstance(state, Finished):
        raise IllegalActionError(MATCH_FINISHED, 'This match is over: all 12 games have been played.')
    if not isinstance(state, InProgress):
        raise IllegalActionError(WAITING_FOR_OPPONENT, 'Wait for an opponent to join before playing.')
    if state.decided:
        raise IllegalActionError(GAME_DECIDED, 'This game is already decided. Wait for the next game to start.')
    if sid in room.pending:
        raise IllegalActionError(ALREADY_PLAYED, 'You already played a card this turn. Wait for your opponent.')
    if card not in CARD_KINDS:
        raise IllegalActionError(UNKNOWN_CARD, f"Unknown card: {card!r}")
    if player.hand.get(card, 0) <= 0:
        raise IllegalActionError(NO_CARDS_LEFT, f"You have no {card} cards left!")

    player.hand[card] -= 1
    room.pending[sid] = card
    notifications = [Notification.player(sid, 'update_deck', dict(player.hand))]
    if len(room.pending) < len(room.players):
        return notifications

    notifications += room.advance(resolve_turn(room))
    if room.state.decided:
        notifications += room.advance(complete_game(room))
    return notifications


def resolve_turn(room: Room) -> Transition:
    """Resolve a turn in which both players have played, in join order."""
    state = room.state
    first, second = room.players
    first_card = room.pending[first.sid]
    second_card = room.pending[second.sid]
    room.pending.clear()

    if first_card == CITIZEN and second_card == CITIZEN:
        notifications = [
            Notification.player(first.sid, 'no_decision', {'yourCard': first_card, 'oppCard': second_card}),
            Notification.player(second.sid, 'no_decision', {'yourCard': second_card, 'oppCard': first_card}),
        ]
        turn_index = state.turn_index + 1
        if turn_index < MAX_TURNS:
            return Transition(replace(state, turn_index=turn_index), notifications)
        # Turn cap reached: scoreless draw
        notifications.append(Notification.room(room.room_id, 'round_result', {
            'result': 'draw',
            'yourCard': None,
            'oppCard': None,
        }))
        logger.info(f"[turn-cap] room={room.room_id} game={state.game_index + 1} turns={turn_index}")
        return Transition(replace(state, decided=True), notifications)

    verdict = judge(first_card, second_card)
    notifications = [
        Notification.player(first.sid, 'round_result', {
            'result': outcome_for(verdict, 0), 'yourCard': first_card, 'oppCard': second_card,
        }),
        Notification.player(second.sid, 'round_result', {
            'result': outcome_for(verdict, 1), 'yourCard': second_card, 'oppCard': first_card,
        }),
    ]
    if verdict != DRAW:
        winner = first if verdict == FIRST_WINS else second
        notifications.append(award_points(room, state.game_index, winner))
    return Transition(replace(state, decided=True), notifications)


def award_points(room: Room, game_index: int, winner: Player) -> Notification:
    """Score a decisive game: 1 point for an emperor win, 5 for a slave win."""
    point = POINTS_BY_ROLE[winner.role]
    room.scores[winner.sid] = room.scores.get(winner.sid, 0) + point
    room.history.append(HistoryEntry(
        game_no=game_index + 1,
        winner_name=winner.name,
        winner_role=winner.role,
        point=point,
    ))
    logger.info(f"[award] room={room.room_id} game={game_index + 1} winner={winner.name} role={winner.role} point={point}")
    return Notification.room(room.room_id, 'history_update', room.history_table())
