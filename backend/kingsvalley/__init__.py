from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('ALLOWED_ORIGINS', [])

    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Each app owns its room table; nothing is shared between instances
    from kingsvalley.services.rooms import RoomManager
    flask_app.extensions['rooms'] = RoomManager(
        slide_to_end=bool(flask_app.config.get('SLIDE_TO_END', False))
    )

    # Import and register blueprints here
    from kingsvalley.main import main
    flask_app.register_blueprint(main)

    from kingsvalley.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Register Socket.IO event handlers
    # Importing here ensures the handlers bind to the initialized socketio instance
    from kingsvalley.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    from kingsvalley.services.sweeper import start_sweeper
    start_sweeper(flask_app)

    return flask_app
