import time

from kingsvalley import socketio


def start_sweeper(app) -> bool:
    """Reap abandoned rooms on an interval in a Socket.IO background task.

    - No-ops in TESTING mode or when SWEEP_INTERVAL_SEC is 0
    - Each pass deletes empty rooms older than ROOM_RETENTION_SEC
    """
    interval = int(app.config.get('SWEEP_INTERVAL_SEC', 0))
    if app.config.get('TESTING') or interval <= 0:
        return False

    retention = int(app.config.get('ROOM_RETENTION_SEC', 3600))
    rooms = app.extensions['rooms']

    def _worker():
        while True:
            socketio.sleep(interval)
            try:
                reaped = rooms.sweep(time.time(), retention)
            except Exception:
                app.logger.exception("[sweep] pass failed")
                continue
            if reaped:
                app.logger.info(f"[sweep] reaped={len(reaped)} remaining={rooms.room_count()}")

    socketio.start_background_task(_worker)
    app.logger.info(f"[sweep] every {interval}s, retention {retention}s")
    return True
