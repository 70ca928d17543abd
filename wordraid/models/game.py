"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, List, Optional

from .player import Participant
from .tile import Tile


class Phase(Enum):
    """The phases of a game, in the only order they occur."""
    START = "START"
    WAVE1 = "WAVE1"
    INTERMISSION1 = "INTERMISSION1"
    WAVE2 = "WAVE2"
    INTERMISSION2 = "INTERMISSION2"
    WAVE3 = "WAVE3"
    INTERMISSION3 = "INTERMISSION3"
    END = "END"

    @property
    def accepts_words(self) -> bool:
        return self in (Phase.WAVE1, Phase.WAVE2, Phase.WAVE3)


class Outcome(Enum):
    """How a finished game ended."""
    DEFEAT = "defeat"
    VICTORY = "victory"
    ESCAPE = "escape"


class Verdict(Enum):
    """Result of adjudicating one chat message."""
    ACCEPTED = "accepted"
    DUPLICATE = "duplicate"
    NOT_A_WORD = "not_a_word"
    INSUFFICIENT_TILES = "insufficient_tiles"
    IGNORED = "ignored"  # Not a wave phase


class AdmissionError(Enum):
    """Reasons a new game can be refused."""
    ALREADY_IN_SESSION = "already_in_session"
    INVALID_CHANNEL = "invalid_channel"
    TOO_MANY_PLAYERS = "too_many_players"
    NO_PLAYERS = "no_players"


class ChannelKind(Enum):
    TEXT = "text"
    DIRECT = "direct"
    VOICE = "voice"


@dataclass(frozen=True)
class Channel:
    """A place messages are posted to."""
    id: str
    kind: ChannelKind = ChannelKind.TEXT

    @property
    def supports_games(self) -> bool:
        """Games need a multi-party text channel that can broadcast and react."""
        return self.kind == ChannelKind.TEXT


@dataclass(frozen=True)
class ChatMessage:
    """An inbound chat message."""
    id: str
    author: Participant
    channel_id: str
    content: str


@dataclass
class PanelField:
    name: str
    value: str


@dataclass
class Panel:
    """A titled block of output with labeled fields."""
    title: str
    description: Optional[str] = None
    color: Optional[int] = None
    fields: List[PanelField] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass
class WavePlan:
    """Tiles added to the pool and objectives faced during one wave."""
    tiles: List[Tile]
    objectives: List = field(default_factory=list)
