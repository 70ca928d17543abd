"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import websocket_payload_required
from .helpers import chunk, get_user_identity, room_key, unique
from .game_logger import game_logger

__all__ = ['websocket_payload_required', 'chunk', 'get_user_identity', 'room_key', 'unique', 'game_logger']
