import os
import sys
import pytest

# Ensure the backend root (containing the `kingsvalley` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from kingsvalley import create_app, socketio
from kingsvalley.services.rooms import RoomManager


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ALLOWED_ORIGINS = ['http://localhost:3000']
    PRODUCTION = False
    ROOM_RETENTION_SEC = 3600
    SWEEP_INTERVAL_SEC = 0
    SOCKETIO_NAMESPACE = '/'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def rooms(flask_app):
    return flask_app.extensions['rooms']


@pytest.fixture()
def manager():
    return RoomManager()


@pytest.fixture()
def sio_factory(flask_app):
    """Build Socket.IO test clients; all are disconnected at teardown."""
    created = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        test_client.get_received()
        created.append(test_client)
        return test_client

    yield _make
    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def received():
    """Return payloads of received events called ``name`` (drains the client's queue)."""

    def _received(test_client, name):
        return [pkt['args'][0] for pkt in test_client.get_received() if pkt['name'] == name]

    return _received
