"""
Rock-Paper-Scissors Game Server - Main Entry Point

This is the main entry point for the game server.
It initializes the game service and starts the Flask-SocketIO application.
"""

from rps_app import create_app
from rps_app.config import Config
from rps_app.services.game_service import initialize_game_service
from rps_app.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    game_service = None
    try:
        print("Initializing services...")

        game_service = initialize_game_service(Config)
        print(f"✓ Game service initialized ({len(game_service.leaderboard)} leaderboard entries loaded)")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Rock-Paper-Scissors Server Starting")

        print(f"\nStarting Rock-Paper-Scissors Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print(f"Leaderboard file: {Config.LEADERBOARD_FILE}")
        print(f"Round timeout: {Config.ROUND_TIMEOUT_SECONDS}s")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Rock-Paper-Scissors Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise
    finally:
        if game_service:
            game_service.shutdown()


if __name__ == '__main__':
    main()
