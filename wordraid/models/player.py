"""
Player Data Models

Contains participant identity and the per-player damage ledger.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Participant:
    """A chat user taking part in a game."""
    id: str
    name: str


@dataclass
class Player:
    """Stores a participant's results for one game."""
    participant: Participant
    wave_damage: int = 0  # Damage dealt in the current wave
    total_damage: int = 0
    total_objectives_completed: int = 0
    total_defended: int = 0  # Team damage avoided by completing objectives
    wave_words: Dict[str, int] = field(default_factory=dict)
    all_words: Dict[str, int] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.participant.name

    def attribute_word(self, word: str, score: int) -> None:
        """Records a successfully played word and the damage it scored."""
        self.wave_damage += score
        self.total_damage += score
        self.wave_words[word] = score
        self.all_words[word] = score

    def attribute_objective(self, objective) -> None:
        """Records an objective completed by this player."""
        self.total_objectives_completed += 1
        self.total_defended += objective.damage

    def reset_wave(self) -> None:
        """Clears data whose scope is a single wave."""
        self.wave_damage = 0
        self.wave_words.clear()

    def best_words(self, limit: int, wave_only: bool = False) -> List[Tuple[str, int]]:
        """Returns up to `limit` (word, score) pairs, highest score first."""
        words = self.wave_words if wave_only else self.all_words
        return sorted(words.items(), key=lambda entry: entry[1], reverse=True)[:limit]
