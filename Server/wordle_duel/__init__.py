"""
Wordle Duel Server Application Package

Two-player word-guessing duel over Socket.IO: one player sets a secret
5-letter word, the other guesses it, then they swap roles.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Tuple of the Flask application and its SocketIO instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app, origins=config_class.FRONTEND_URL)
    socketio = SocketIO(app, cors_allowed_origins=config_class.FRONTEND_URL, logger=False, engineio_logger=False)

    # Register blueprints
    from .controllers.room_controller import room_bp

    app.register_blueprint(room_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
