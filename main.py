"""
Dishle Game Server - Main Entry Point

This is the main entry point for the Dishle game server.
It initializes all services and starts the Flask-SocketIO application.
"""

from dishle import create_app, initialize_services
from dishle.config import Config, validate_game_settings
from dishle.models.errors import PersistenceFailure
from dishle.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")
        validate_game_settings()

        try:
            game_service, player_service = initialize_services(Config)
        except PersistenceFailure as e:
            print(f"✗ Storage backend unavailable: {e}")
            game_logger.logger.error(f"Storage backend unavailable: {e}")
            raise

        print(f"✓ Game service initialized with {len(game_service.catalog)} puzzles "
              f"({Config.STORAGE_BACKEND} storage)")
        if not len(game_service.catalog):
            print("✗ No puzzles loaded - players will see 'no puzzle available'")
        print("✓ Player service initialized successfully")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Dishle Server Starting")

        print(f"\nStarting Dishle Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Today's puzzle date: {game_service.date_resolver.current_real_date()}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Dishle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
