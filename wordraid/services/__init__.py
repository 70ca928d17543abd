"""
Services Package

Contains all business logic and service classes.
"""

from .dictionary_service import WordList, load_word_list
from .game_service import Game, plan_waves
from .lobby_service import LobbyService
from .random_service import Random, game_number_for

__all__ = [
    'WordList', 'load_word_list',
    'Game', 'plan_waves',
    'LobbyService',
    'Random', 'game_number_for'
]
