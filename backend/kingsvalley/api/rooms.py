from flask import Blueprint, current_app, jsonify

rooms = Blueprint('rooms', __name__)


@rooms.route('/<string:room_code>', methods=['GET'])
def get_room(room_code):
    """
    Public view of a room: board, turn, winner and which seats are taken.
    Socket ids are never exposed.
    """
    session = current_app.extensions['rooms'].get(room_code)
    if session is None:
        return jsonify({'error': 'Room not found'}), 404
    return jsonify(session.to_dict()), 200
