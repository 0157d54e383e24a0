from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Union

from ecard.services.match.constants import MAX_PLAYERS, TOTAL_GAMES


@dataclass(frozen=True)
class WaitingForOpponent:
    status = 'waiting'


@dataclass(frozen=True)
class InProgress:
    game_index: int
    turn_index: int = 0
    decided: bool = False
    status = 'in_progress'


@dataclass(frozen=True)
class Finished:
    status = 'finished'


MatchState = Union[WaitingForOpponent, InProgress, Finished]


def transport_room(room_id: str) -> str:
    """Socket.IO room name for a game room; never collides with a sid."""
    return f"room:{room_id}"


@dataclass(frozen=True)
class Notification:
    """One outbound Socket.IO message.

    ``to`` is either a transport room name (broadcast) or a player's sid.
    """
    event: str
    payload: Any = None
    to: Optional[str] = None
    skip_sid: Optional[str] = None

    @classmethod
    def room(cls, room_id: str, event: str, payload: Any = None, skip_sid: Optional[str] = None) -> 'Notification':
        return cls(event, payload, to=transport_room(room_id), skip_sid=skip_sid)

    @classmethod
    def player(cls, sid: str, event: str, payload: Any = None) -> 'Notification':
        return cls(event, payload, to=sid)


class Transition(NamedTuple):
    state: MatchState
    notifications: List[Notification]


@dataclass
class Player:
    sid: str
    name: str
    base_role: str
    role: str
    hand: Dict[str, int]

    def to_dict(self):
        return {
            'name': self.name,
            'baseRole': self.base_role,
        }


@dataclass
class HistoryEntry:
    game_no: int
    winner_name: str
    winner_role: str
    point: int

    def to_dict(self):
        return {
            'gameNo': self.game_no,
            'winnerName': self.winner_name,
            'winnerRole': self.winner_role,
            'point': self.point,
        }


@dataclass
class Room:
    room_id: str
    password_hash: bytes
    players: List[Player] = field(default_factory=list)
    state: MatchState = field(default_factory=WaitingForOpponent)
    # sid -> card played this turn
    pending: Dict[str, str] = field(default_factory=dict)
    scores: Dict[str, int] = field(default_factory=dict)
    history: List[HistoryEntry] = field(default_factory=list)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    def player(self, sid: str) -> Optional[Player]:
        for p in self.players:
            if p.sid == sid:
                return p
        return None

    def roster(self) -> List[Dict[str, str]]:
        return [p.to_dict() for p in self.players]

    def score_table(self) -> List[Dict[str, Any]]:
        return [{'name': p.name, 'wins': self.scores.get(p.sid, 0)} for p in self.players]

    def history_table(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self.history]

    def advance(self, transition: Transition) -> List[Notification]:
        """Install the transition's state and hand back its notifications."""
        self.state = transition.state
        return list(transition.notifications)

    def to_dict(self):
        game_no = None
        turn = None
        if isinstance(self.state, InProgress):
            game_no = self.state.game_index + 1
            turn = self.state.turn_index + 1
        elif isinstance(self.state, Finished):
            game_no = TOTAL_GAMES
        return {
            'roomId': self.room_id,
            'status': self.state.status,
            'gameNo': game_no,
            'totalGames': TOTAL_GAMES,
            'turn': turn,
            'players': [
                {'name': p.name, 'baseRole': p.base_role, 'role': p.role} for p in self.players
            ],
            'scores': self.score_table(),
            'history': self.history_table(),
        }
