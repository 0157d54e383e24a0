from flask import Blueprint, current_app, jsonify

rooms = Blueprint('rooms', __name__)


def _registry():
    return current_app.extensions['ecard_registry']


@rooms.route('', methods=['GET'])
def list_rooms():
    """
    Lists live rooms without revealing anything players keep secret.
    """
    registry = _registry()
    with registry.lock:
        summary = [
            {'roomId': room.room_id, 'status': room.state.status, 'playerCount': len(room.players)}
            for room in registry.rooms()
        ]
    return jsonify(summary)


@rooms.route('/<string:room_id>', methods=['GET'])
def get_room_state(room_id):
    """
    Returns the public state of a room: roster, game counter, scores and history.
    """
    registry = _registry()
    with registry.lock:
        room = registry.get(room_id)
        if room is None:
            return jsonify({'error': 'Room not found'}), 404
        payload = room.to_dict()
    return jsonify(payload)
