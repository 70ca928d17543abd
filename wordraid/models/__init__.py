"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .errors import InvariantError, ensure
from .game import (
    AdmissionError, Channel, ChannelKind, ChatMessage, Outcome, Panel, PanelField,
    Phase, Verdict, WavePlan,
)
from .inventory import TileInventory
from .player import Participant, Player
from .tile import Tile, tile_symbol

__all__ = [
    'InvariantError', 'ensure',
    'AdmissionError', 'Channel', 'ChannelKind', 'ChatMessage', 'Outcome', 'Panel',
    'PanelField', 'Phase', 'Verdict', 'WavePlan',
    'TileInventory', 'Participant', 'Player', 'Tile', 'tile_symbol',
]
