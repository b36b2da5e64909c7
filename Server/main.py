"""
Wordle Duel Server - Main Entry Point

This is the main entry point for the Wordle duel server.
It initializes all services and starts the Flask-SocketIO application.
"""

from wordle_duel import create_app
from wordle_duel.config import Config
from wordle_duel.services.room_service import initialize_room_registry
from wordle_duel.services.game_service import initialize_game_service
from wordle_duel.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        room_registry = initialize_room_registry()
        print("✓ Room registry initialized successfully")

        initialize_game_service(room_registry, Config.ROLE_SWAP_NOTIFY_DELAY)
        print("✓ Game service initialized successfully")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Wordle Duel Server Starting")

        print(f"\nStarting Wordle Duel Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"CORS enabled for: {Config.FRONTEND_URL}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Wordle Duel Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
