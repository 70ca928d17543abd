"""
Word Raid Game Server - Main Entry Point

This is the main entry point for the Word Raid game server.
It loads the dictionary and starts the Flask-SocketIO application.
"""

from wordraid import create_app
from wordraid.config import Config
from wordraid.services.dictionary_service import load_word_list
from wordraid.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        # A missing or empty dictionary is fatal
        word_list = load_word_list(Config.WORD_LIST_PATHS)
        print(f"✓ Dictionary loaded ({len(word_list)} words)")

        print("Creating Flask application...")
        app, socketio = create_app(Config, word_list=word_list)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Word Raid Server Starting")

        print(f"\nStarting Word Raid Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        try:
            socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)
        finally:
            app.lobby_service.shutdown()

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Word Raid Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
