import os


def _split_origins(raw):
    return [o.strip() for o in raw.split(',') if o.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    PORT = int(os.environ.get('PORT', '3000'))
    # Origins allowed on both HTTP routes and the Socket.IO channel
    ALLOWED_ORIGINS = _split_origins(os.environ.get(
        'ALLOWED_ORIGINS',
        'https://kings-valley-production.up.railway.app,http://localhost:3000',
    ))
    # Only toggles the https redirect in front of the app
    PRODUCTION = (os.environ.get('FLASK_ENV') or os.environ.get('NODE_ENV')) == 'production'
    # Empty rooms older than this are reaped by the sweeper (seconds)
    ROOM_RETENTION_SEC = int(os.environ.get('ROOM_RETENTION_SEC', '3600'))
    # Sweeper interval (seconds). 0 disables.
    SWEEP_INTERVAL_SEC = int(os.environ.get('SWEEP_INTERVAL_SEC', '1800'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # When set, a move only names a direction and the piece slides to the end of its path
    SLIDE_TO_END = os.environ.get('SLIDE_TO_END', '0') == '1'
