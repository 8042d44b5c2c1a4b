"""
Dishle Game Server Application Package

Daily dish-name puzzle: uncover a hidden adjective + noun by submitting
ingredients whose letters are consumed from the dish name.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def initialize_services(config_class=Config, clock=None):
    """
    Initializes the global services from a configuration class.

    Args:
        config_class: Configuration class to read settings from
        clock: Optional callable returning the current datetime (tests)

    Returns:
        Tuple of (game_service, player_service)
    """
    from .services.catalog_service import load_catalog
    from .services.date_service import DateResolver
    from .services.game_service import initialize_game_service
    from .services.player_service import initialize_player_service
    from .services.session_store import PreviewDateStore, SessionStore, create_backend

    catalog = load_catalog(config_class.PUZZLE_FILE)
    backend = create_backend(config_class.STORAGE_BACKEND, config_class.MONGO_URI, config_class.MONGO_DB)

    game_service = initialize_game_service(
        catalog,
        SessionStore(backend),
        PreviewDateStore(backend),
        DateResolver(config_class.PUZZLE_TIMEZONE, clock)
    )
    player_service = initialize_player_service(
        config_class.PLAYER_TOKEN_SECRET, config_class.PLAYER_TOKEN_EXPIRATION_DAYS
    )
    return game_service, player_service


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance with all extensions initialized
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Register blueprints
    from .controllers.player_controller import player_bp
    from .controllers.game_controller import game_bp

    app.register_blueprint(player_bp, url_prefix='/api/player')
    app.register_blueprint(game_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
