from functools import wraps

from flask import current_app, request
from flask_socketio import emit

from kingsvalley import socketio
from kingsvalley.errors import Err, ErrorKind
from kingsvalley.models import BOARD_SIZE


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _rooms():
    return current_app.extensions['rooms']


def _namespace() -> str:
    return current_app.config.get('SOCKETIO_NAMESPACE', '/')


def _send(event, data, sids):
    for sid in sids:
        socketio.emit(event, data, to=sid, namespace=_namespace())


def _reply_error(err: Err) -> None:
    emit('error', err.to_dict())


def _guarded(handler=None, *, reply=True):
    """Turn unexpected faults into a logged no-op.

    With ``reply`` the sender also gets an error event; a disconnecting
    socket has nobody left to tell.
    """
    if handler is None:
        return lambda fn: _guarded(fn, reply=reply)

    @wraps(handler)
    def wrapper(*args, **kwargs):
        try:
            return handler(*args, **kwargs)
        except Exception:
            current_app.logger.exception(f"[socket] {handler.__name__} failed sid={_get_sid()}")
            if reply:
                _reply_error(Err(ErrorKind.INTERNAL_ERROR))
    return wrapper


def _notify_departures(departures) -> None:
    for dep in departures:
        current_app.logger.info(
            f"[room-leave] room={dep.room_id} seat={dep.seat} deleted={dep.room_deleted}"
        )
        _send('playerLeft', {'seat': dep.seat}, dep.remaining)


def _parse_square(value):
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    row, col = value
    for n in (row, col):
        if isinstance(n, bool) or not isinstance(n, int) or not 0 <= n < BOARD_SIZE:
            return None
    return (row, col)


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


@_guarded(reply=False)
def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid}")
    _notify_departures(_rooms().leave(sid))


@_guarded
def handle_join(data=None):
    room_code = data.get('roomCode') if isinstance(data, dict) else data
    result = _rooms().join(room_code, _get_sid())
    if isinstance(result, Err):
        _reply_error(result)
        return

    joined = result.value
    _notify_departures(joined.departures)
    emit('init', {
        'seat': joined.seat,
        'side': str(joined.side),
        'roomCode': joined.room_id,
        **joined.snapshot,
    })
    _send('playerJoined', {'seat': joined.seat}, joined.others)


@_guarded
def handle_move(data=None):
    data = data if isinstance(data, dict) else {}
    start = _parse_square(data.get('from'))
    target = _parse_square(data.get('to'))
    rooms = _rooms()
    if start is None or target is None:
        # Unseated callers hear about the missing room before the bad squares
        if rooms.locate(_get_sid()) is None:
            _reply_error(Err(ErrorKind.NO_ACTIVE_ROOM))
        else:
            _reply_error(Err(ErrorKind.ILLEGAL_MOVE))
        return

    result = rooms.move(_get_sid(), start, target)
    if isinstance(result, Err):
        _reply_error(result)
        return

    moved = result.value
    _send('update', {**moved.snapshot, 'lastMove': moved.last_move}, moved.occupants)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('join', handle_join, namespace=namespace)
    socketio.on_event('move', handle_move, namespace=namespace)
