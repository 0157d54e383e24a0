import logging
import threading
from typing import Dict, List, Optional

from ecard.errors import (
    ALREADY_SEATED, MISSING_FIELDS, ROLE_TAKEN, ROLES_FILLED, ROOM_FULL, WRONG_PASSWORD,
    ValidationError,
)
from ecard.models import Notification, Player, Room, WaitingForOpponent
from .constants import ROLES
from .deck import create_deck
from .lifecycle import begin_match
from .resolver import play_card

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Owns every live room and knows which room each connection sits in.

    ``hasher`` is anything with Flask-Bcrypt's ``generate_password_hash`` and
    ``check_password_hash``. Callers hold ``lock`` for the duration of one
    inbound event, including delivery of the returned notifications.
    """

    def __init__(self, hasher):
        self._hasher = hasher
        self._rooms: Dict[str, Room] = {}
        self._sid_to_room: Dict[str, str] = {}
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._rooms)

    def get(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def rooms(self) -> List[Room]:
        return list(self._rooms.values())

    def room_for(self, sid: str) -> Optional[Room]:
        room_id = self._sid_to_room.get(sid)
        return self._rooms.get(room_id) if room_id is not None else None

    def join(self, sid: str, room_id: str, password: str, name: str, role_choice=None) -> List[Notification]:
        """Seat ``sid`` in ``room_id``, creating the room on first use.

        Raises ``ValidationError`` without creating or changing any room.
        """
        if not room_id or not password or not name:
            raise ValidationError(MISSING_FIELDS, 'Room number, password and name are all required.')
        if sid in self._sid_to_room:
            raise ValidationError(ALREADY_SEATED, 'You are already seated in a room.')

        room = self._rooms.get(room_id)
        if room is None:
            room = Room(room_id=room_id, password_hash=self._hasher.generate_password_hash(password))
        elif not self._hasher.check_password_hash(room.password_hash, password):
            raise ValidationError(WRONG_PASSWORD, 'Wrong password.')

        if room.is_full:
            raise ValidationError(ROOM_FULL, 'This room is full (2 players max).')
        base_role = self._assign_role(room, role_choice)

        room.players.append(Player(sid=sid, name=name, base_role=base_role, role=base_role, hand=create_deck(base_role)))
        room.scores[sid] = 0
        self._rooms[room_id] = room
        self._sid_to_room[sid] = room_id
        logger.info(f"[join] room={room_id} name={name} base_role={base_role} seats={len(room.players)}")

        notifications = [Notification.room(room_id, 'player_list', {'players': room.roster()})]
        if not room.is_full:
            notifications.append(Notification.player(sid, 'waiting', {
                'message': 'Waiting for an opponent... the match starts when a second player joins.',
                'baseRole': base_role,
            }))
            return notifications
        return notifications + room.advance(begin_match(room))

    def play(self, sid: str, card) -> List[Notification]:
        room = self.room_for(sid)
        if room is None:
            return []
        return play_card(room, sid, card)

    def leave(self, sid: str) -> List[Notification]:
        """Drop ``sid`` from its room; an emptied room is destroyed."""
        room_id = self._sid_to_room.pop(sid, None)
        room = self._rooms.get(room_id) if room_id is not None else None
        if room is None:
            return []
        room.players = [p for p in room.players if p.sid != sid]
        room.scores.pop(sid, None)

        if not room.players:
            del self._rooms[room_id]
            logger.info(f"[room-closed] room={room_id}")
            return []

        # The remaining player waits for a new opponent and a fresh match
        room.pending.clear()
        room.state = WaitingForOpponent()
        logger.info(f"[leave] room={room_id} sid={sid} remaining={len(room.players)}")
        return [Notification.room(room_id, 'opponent_left', skip_sid=sid)]

    @staticmethod
    def _assign_role(room: Room, role_choice) -> str:
        used = {p.base_role for p in room.players}
        if role_choice in ROLES:
            if role_choice in used:
                raise ValidationError(ROLE_TAKEN, f"The {role_choice} side is already taken.")
            return role_choice
        for role in ROLES:
            if role not in used:
                return role
        raise ValidationError(ROLES_FILLED, 'Both roles in this room are taken.')
