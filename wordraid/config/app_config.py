"""
Server Configuration

Settings the Word Raid server reads from the environment. A config.env file
next to this module is loaded first when present.
"""

import os
from dotenv import load_dotenv

CONFIG_DIR = os.path.dirname(os.path.abspath(__file__))

load_dotenv(os.path.join(CONFIG_DIR, 'config.env'))

DEFAULT_WORD_LIST = os.path.join(CONFIG_DIR, 'words.txt')


def _path_list(value):
    return [path.strip() for path in value.split(',') if path.strip()]


class Config:
    """Settings shared by every environment."""

    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Word files merged into one dictionary, comma separated
    WORD_LIST_PATHS = _path_list(os.getenv('WORD_LIST_PATHS', DEFAULT_WORD_LIST))

    # Read by GameSettings.from_config
    MAX_PLAYERS = int(os.getenv('MAX_PLAYERS', 22))
    TEAM_HEALTH = int(os.getenv('TEAM_HEALTH', 15))
    BOSS_HEALTH = int(os.getenv('BOSS_HEALTH', 60))
    WAVE_SECONDS = int(os.getenv('WAVE_SECONDS', 15))
    SESSION_TIME_LIMIT_SECONDS = int(os.getenv('SESSION_TIME_LIMIT_SECONDS', 15 * 60))

    # Daily log files go to LOG_DIR; unset it to log to the console only
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    """No log files and short waves."""
    TESTING = True
    DEBUG = True
    LOG_DIR = None
    WAVE_SECONDS = 5


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
