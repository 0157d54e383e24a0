from flask import current_app, request
from flask_socketio import emit, join_room
from ecard import socketio
from ecard.errors import MatchError
from ecard.models import Notification, transport_room
from ecard.services.match.registry import RoomRegistry
from typing import Iterable


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _registry() -> RoomRegistry:
    return current_app.extensions['ecard_registry']


def _text(value) -> str:
    return '' if value is None else str(value)


def _dispatch(notifications: Iterable[Notification]) -> None:
    namespace = current_app.config.get('SOCKETIO_NAMESPACE', '/')
    for note in notifications:
        args = () if note.payload is None else (note.payload,)
        socketio.emit(note.event, *args, to=note.to, skip_sid=note.skip_sid, namespace=namespace)


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    registry = _registry()
    with registry.lock:
        notifications = registry.leave(sid)
        _dispatch(notifications)
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")


def handle_join_room(data):
    data = data if isinstance(data, dict) else {}
    sid = _get_sid()
    room_id = _text(data.get('roomId'))
    registry = _registry()
    with registry.lock:
        try:
            notifications = registry.join(
                sid,
                room_id,
                _text(data.get('password')),
                _text(data.get('name')),
                data.get('roleChoice'),
            )
        except MatchError as exc:
            current_app.logger.info(f"[join-rejected] sid={sid} room={room_id} code={exc.code}")
            emit('error_msg', exc.message)
            return
        # Transport membership first so the new player receives the room broadcasts
        join_room(transport_room(room_id))
        _dispatch(notifications)


def handle_play_card(data):
    # Accept both {"card": "..."} and a bare card string
    card = data.get('card') if isinstance(data, dict) else data
    sid = _get_sid()
    registry = _registry()
    with registry.lock:
        try:
            notifications = registry.play(sid, card)
        except MatchError as exc:
            current_app.logger.info(f"[play-rejected] sid={sid} card={card!r} code={exc.code}")
            emit('error_msg', exc.message)
            return
        _dispatch(notifications)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('join_room', handle_join_room, namespace=namespace)
    socketio.on_event('play_card', handle_play_card, namespace=namespace)
