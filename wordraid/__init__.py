"""
Word Raid Game Server Application Package

A cooperative word game played in chat channels: a team spells words from a
shared pool of letter tiles to defeat a boss over three timed waves.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config, GameSettings


def create_app(config_class=Config, word_list=None, lobby_service=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        word_list: Dictionary shared by every game, loaded from config when omitted
        lobby_service: Registry of running games, built from config when omitted

    Returns:
        Flask application instance and its SocketIO server
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize logging
    from .utils.game_logger import game_logger
    game_logger.configure(config_class.LOG_DIR, config_class.LOG_LEVEL)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Initialize services
    if lobby_service is None:
        from .services.dictionary_service import load_word_list
        from .services.lobby_service import LobbyService
        from .websocket.messenger import SocketIOMessenger

        if word_list is None:
            word_list = load_word_list(config_class.WORD_LIST_PATHS)
        lobby_service = LobbyService(
            word_list,
            SocketIOMessenger(socketio),
            settings=GameSettings.from_config(config_class),
            start_task=socketio.start_background_task,
            sleep=socketio.sleep,
        )

    # Register blueprints
    from .controllers.game_controller import game_bp
    app.register_blueprint(game_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio, lobby_service)

    # Store instances for use in other modules
    app.socketio = socketio
    app.lobby_service = lobby_service

    return app, socketio
