"""
Game Service

Contains the game engine: one boss fight played by a team over three timed
waves. The engine owns the tile pool, adjudicates chat messages as words,
tracks objectives and health, and reports its outcome when it finishes.
"""

import logging
import threading
import time
import uuid
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from ..config.game_settings import (
    GET_READY_BASE_SECONDS, NUMBER_OF_WAVES, RECAP_WORDS_PER_PLAYER, TILES_PER_ROW,
    WAVE_OBJECTIVE_TIERS, WAVE_TILE_RECIPES, WORDS_SHOWN_PER_PLAYER, GameSettings,
)
from ..models.errors import ensure
from ..models.game import (
    Channel, ChatMessage, Outcome, Panel, PanelField, Phase, Verdict, WavePlan,
)
from ..models.inventory import TileInventory
from ..models.player import Participant, Player
from ..models.tile import Tile, random_consonant, random_vowel, tile_symbol
from ..utils.game_logger import game_logger
from ..utils.helpers import chunk
from .collector import MessageCollector
from .objective_service import Objective, get_random_objective
from .random_service import Random
from .word_service import score_word, word_to_tiles

PLAYER_COLOR = 0x00FF00
ENEMY_COLOR = 0xFF0000
NEUTRAL_COLOR = 0xFFFF80

BOSS_SYMBOL = "🐙"
TEAM_SYMBOL = "⚔️"
HEART_SYMBOL = "❤️"
BOOM_SYMBOL = "💥"

MARKER_DUPLICATE = "🔂"
MARKER_NOT_A_WORD = "❌"
MARKER_INSUFFICIENT_TILES = "🔢"
MARKER_OBJECTIVE = "🛡️"
SCORE_MARKERS = ["🔅", "☀️", "⭐", "🪐", "💫", "☄️", "🪩"]

_REJECTION_MARKERS = {
    Verdict.DUPLICATE: MARKER_DUPLICATE,
    Verdict.NOT_A_WORD: MARKER_NOT_A_WORD,
    Verdict.INSUFFICIENT_TILES: MARKER_INSUFFICIENT_TILES,
}


def score_markers(score: int) -> List[str]:
    """Spells a score as reaction markers, one per set bit, highest first."""
    remaining = min(score, 2 ** len(SCORE_MARKERS) - 1)
    markers = []
    while remaining > 0:
        for index in range(len(SCORE_MARKERS) - 1, -1, -1):
            threshold = 2 ** index
            if remaining >= threshold:
                remaining -= threshold
                markers.append(SCORE_MARKERS[index])
                break
    return markers


def _recipe_tile(code: str, rng: Random) -> Tile:
    if code == 'C':
        return random_consonant(rng)
    if code == 'V':
        return random_vowel(rng)
    return Tile[code]


def plan_waves(rng: Random) -> List[WavePlan]:
    """
    Pre-generates the tiles and objectives of every wave.

    All tiles are drawn before any objective so that a seed always yields the
    same game.
    """
    tiles = [[_recipe_tile(code, rng) for code in recipe] for recipe in WAVE_TILE_RECIPES]
    objectives = [[get_random_objective(tier, rng) for tier in tiers] for tiers in WAVE_OBJECTIVE_TIERS]
    return [WavePlan(tiles=wave_tiles, objectives=wave_objectives)
            for wave_tiles, wave_objectives in zip(tiles, objectives)]


class Game:
    """
    A single boss fight.

    The game runs through START, three WAVE/INTERMISSION pairs and END, in that
    order only. Words are adjudicated only during WAVE phases. Every accepted
    word is checked against the wave's objectives as it is played; objectives
    still incomplete when the wave closes hurt the team.
    """

    def __init__(self,
                 group_id: str,
                 participants: Sequence[Participant],
                 channel: Channel,
                 messenger,
                 word_list,
                 settings: Optional[GameSettings] = None,
                 seed: int = 0,
                 plan: Optional[List[WavePlan]] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic,
                 game_id: Optional[str] = None):
        settings = settings or GameSettings()
        if not participants:
            raise ValueError("A game needs at least one player")
        if len(participants) > settings.max_players:
            raise ValueError(f"Too many players (max {settings.max_players})")
        if plan is not None and len(plan) != NUMBER_OF_WAVES:
            raise ValueError(f"A plan must describe {NUMBER_OF_WAVES} waves")

        self.game_id = game_id or str(uuid.uuid4())
        self.group_id = group_id
        self.participants: List[Participant] = list(participants)
        self.channel = channel
        self.messenger = messenger
        self.word_list = word_list
        self.settings = settings
        self._sleep = sleep

        self.seed = seed
        self.random = Random(seed)
        self.plan = plan
        self.phase = Phase.START
        self.tiles: List[Tile] = []
        self.inventory = TileInventory(self.tiles)
        self.current_objectives: List[Objective] = []
        self._completed_objectives: Set[int] = set()
        self.players: Dict[str, Player] = {p.id: Player(p) for p in self.participants}
        self.words_played: Set[str] = set()
        self.team_health = settings.team_health
        self.boss_health = settings.boss_health
        self.outcome: Optional[Outcome] = None

        self._lock = threading.Lock()
        self.collector = MessageCollector(
            self._accepts_message, self.on_player_message, settings.session_time_limit, clock
        )

    # ------------------------------------------------------------------
    # Run loop
    # ------------------------------------------------------------------

    def run(self) -> Outcome:
        """Plays the game to the end and returns how it ended."""
        game_logger.log_game_event(
            self.game_id, 'game_started',
            group_id=self.group_id, channel_id=self.channel.id, seed=self.seed,
            players=[p.name for p in self.participants]
        )
        try:
            return self._play()
        finally:
            self.collector.stop('ended')

    def _play(self) -> Outcome:
        self._send_text(f"Game #{self.seed}")
        plan = self.plan if self.plan is not None else plan_waves(self.random)

        self._display_players()
        self._pause(0.5)
        self._display_boss_status()
        self._pause(1.5)

        for wave, wave_plan in enumerate(plan, start=1):
            if wave == NUMBER_OF_WAVES:
                self._display_title("Final Wave", NEUTRAL_COLOR)
                self._pause(1.5)

            self._set_objectives(wave_plan.objectives)
            if self.current_objectives:
                self._display_incoming_attacks(f"Wave {wave} | Incoming Enemies", "Defend yourself this wave")
                self._pause(3)

            self._update_tile_pool(self.tiles + list(wave_plan.tiles))
            self._display_tiles(f"Wave {wave} | Get Ready")
            self._pause(GET_READY_BASE_SECONDS + wave)

            self.phase = Phase[f"WAVE{wave}"]
            game_logger.log_game_event(self.game_id, 'wave_started', wave=wave,
                                       tiles=[tile.name for tile in self.tiles])
            self._run_wave_timer(self.settings.wave_seconds)

            self.phase = Phase[f"INTERMISSION{wave}"]
            self._display_words_crafted(f"Wave {wave} | Words Crafted")
            self._pause(3)
            self._resolve_wave_damage(wave, f"Wave {wave} | Damage")
            self._pause(3)

            if self.team_health <= 0:
                break

            self._display_leaderboard(f"Wave {wave} | Results")
            self._pause(3)

            for player in self.players.values():
                player.reset_wave()

        self.phase = Phase.END
        self.collector.stop('ended')
        self.outcome = self._determine_outcome()
        if self.outcome == Outcome.DEFEAT:
            self._display_title("YOU DIED 😨", ENEMY_COLOR)
        elif self.outcome == Outcome.VICTORY:
            self._display_title(f"You defeated the boss! {TEAM_SYMBOL}", PLAYER_COLOR)
        else:
            self._display_title(f"The boss got away! {BOSS_SYMBOL}", NEUTRAL_COLOR)
        self._pause(3)
        self._display_game_recap("Performance")
        self._send_text("All done")

        game_logger.log_game_event(
            self.game_id, 'game_finished', outcome=self.outcome.value,
            team_health=self.team_health, boss_health=self.boss_health,
            words_played=len(self.words_played)
        )
        return self.outcome

    def _determine_outcome(self) -> Outcome:
        if self.team_health <= 0:
            return Outcome.DEFEAT
        if self.boss_health <= 0:
            return Outcome.VICTORY
        return Outcome.ESCAPE

    def _pause(self, seconds: float) -> None:
        self._sleep(seconds)

    def _update_tile_pool(self, tiles: List[Tile]) -> None:
        self.tiles = tiles
        self.inventory = TileInventory(tiles)

    def _set_objectives(self, objectives: List[Objective]) -> None:
        self.current_objectives = list(objectives)
        self._completed_objectives = set()

    # ------------------------------------------------------------------
    # Message intake
    # ------------------------------------------------------------------

    def collect(self, message: ChatMessage) -> Optional[Verdict]:
        """Offers an inbound chat message to this game's collector."""
        return self.collector.collect(message)

    def _accepts_message(self, message: ChatMessage) -> bool:
        return message.author.id in self.players and message.channel_id == self.channel.id

    def on_player_message(self, message: ChatMessage) -> Verdict:
        """
        Evaluates a player's message as a word and reacts to it.

        Returns:
            Verdict: What became of the message
        """
        if not self.phase.accepts_words:
            return Verdict.IGNORED

        player = self.players.get(message.author.id)
        ensure(player is not None, "Collected a message from a non-player")
        word = message.content.strip().lower()

        with self._lock:
            if not self.phase.accepts_words:
                return Verdict.IGNORED
            verdict, score, completed = self._adjudicate(player, word)

        if verdict in _REJECTION_MARKERS:
            self._react(message, _REJECTION_MARKERS[verdict])
            return verdict

        for marker in score_markers(score):
            self._react(message, marker)
        for _ in completed:
            self._react(message, MARKER_OBJECTIVE)
        return verdict

    def _adjudicate(self, player: Player, word: str) -> Tuple[Verdict, int, List[Objective]]:
        if word in self.words_played:
            return Verdict.DUPLICATE, 0, []
        if not self.word_list.is_word(word):
            return Verdict.NOT_A_WORD, 0, []

        tiles = word_to_tiles(word, self.inventory)
        if tiles is None:
            return Verdict.INSUFFICIENT_TILES, 0, []

        self.words_played.add(word)
        score = score_word(tiles)
        player.attribute_word(word, score)
        completed = self._complete_objectives(player, word, score)

        game_logger.log_game_event(
            self.game_id, 'word_played', level=logging.DEBUG,
            player=player.name, word=word, score=score,
            objectives_completed=[obj.description() for obj in completed]
        )
        return Verdict.ACCEPTED, score, completed

    def _complete_objectives(self, player: Player, word: str, score: int) -> List[Objective]:
        completed = []
        for index, objective in enumerate(self.current_objectives):
            if index in self._completed_objectives:
                continue
            if objective.is_satisfied_by(word, score):
                self._completed_objectives.add(index)
                player.attribute_objective(objective)
                completed.append(objective)
        return completed

    def unmet_objectives(self) -> List[Objective]:
        return [obj for index, obj in enumerate(self.current_objectives)
                if index not in self._completed_objectives]

    # ------------------------------------------------------------------
    # Output. Failures to deliver output never stop the game.
    # ------------------------------------------------------------------

    def _deliver(self, action: str, method: Callable, *args):
        try:
            return method(*args)
        except Exception as e:
            game_logger.log_game_event(
                self.game_id, 'output_failed', level=logging.WARNING,
                output=action, error_type=type(e).__name__, error_message=str(e)
            )
            return None

    def _send_panel(self, panel: Panel):
        return self._deliver('send_panel', self.messenger.send_panel, self.channel.id, panel)

    def _edit_panel(self, handle, panel: Panel) -> None:
        if handle is not None:
            self._deliver('edit_panel', self.messenger.edit_panel, self.channel.id, handle, panel)

    def _send_text(self, text: str):
        return self._deliver('send_text', self.messenger.send_text, self.channel.id, text)

    def _delete(self, handle) -> None:
        if handle is not None:
            self._deliver('delete_message', self.messenger.delete_message, self.channel.id, handle)

    def _react(self, message: ChatMessage, marker: str) -> None:
        self._deliver('react', self.messenger.react, message, marker)

    def _players_by_total_damage(self) -> List[Player]:
        return sorted(self.players.values(), key=lambda player: player.total_damage, reverse=True)

    def _display_players(self) -> None:
        fields = [PanelField(name=player.name, value=player.name) for player in self.players.values()]
        self._send_panel(Panel(title=f"Team{TEAM_SYMBOL}", color=PLAYER_COLOR, fields=fields))

    def _display_boss_status(self) -> None:
        self._send_panel(Panel(
            title=f"Boss{BOSS_SYMBOL}",
            color=ENEMY_COLOR,
            fields=[PanelField(name="Health", value=f"{self.boss_health}{HEART_SYMBOL}")],
        ))

    def _display_tiles(self, title: str) -> None:
        rows = [" ".join(tile_symbol(tile) for tile in row) for row in chunk(self.tiles, TILES_PER_ROW)]
        self._send_panel(Panel(
            title=title,
            description="Spell as many words as possible using these tiles.",
            color=PLAYER_COLOR,
            fields=[PanelField(name="Tiles", value="\n".join(rows))],
        ))

    def _display_incoming_attacks(self, title: str, description: str) -> None:
        """Posts the wave's objectives, revealing them one at a time."""
        fields = [
            PanelField(name=f"(-{obj.damage}{BOSS_SYMBOL * obj.damage})", value=obj.description())
            for obj in self.current_objectives
        ]
        panel = Panel(title=title, description=description, color=ENEMY_COLOR)
        handle = self._send_panel(panel)
        self._pause(1)

        for index in range(len(fields)):
            self._pause(1)
            panel.fields = fields[:index + 1]
            self._edit_panel(handle, panel)

    @staticmethod
    def _timer_bar(seconds_left: int) -> str:
        return f"⏱️ {seconds_left}s {'⬜' * (seconds_left // 5)}"

    def _run_wave_timer(self, seconds: int) -> None:
        """Shows a countdown and returns when it expires."""
        ensure(isinstance(seconds, int) and seconds >= 1, "wave timer needs a whole number of seconds")

        seconds_left = seconds
        panel = Panel(title="Go!", description=self._timer_bar(seconds_left), color=NEUTRAL_COLOR)
        handle = self._send_panel(panel)

        time_warning = None
        while seconds_left > 0:
            self._sleep(1)
            seconds_left -= 1

            if seconds_left % 5 == 0:
                panel.description = self._timer_bar(seconds_left)
                self._edit_panel(handle, panel)

            if seconds_left == 10:
                time_warning = self._send_text("10 seconds remaining")

        self._delete(time_warning)

    def _display_words_crafted(self, title: str) -> None:
        fields = []
        for player in self.players.values():
            words = player.best_words(len(player.wave_words), wave_only=True)
            lines = [f"**{word.upper()}**: {score} dmg" for word, score in words[:WORDS_SHOWN_PER_PLAYER]]
            if not lines:
                lines = ["none"]
            if len(words) > WORDS_SHOWN_PER_PLAYER:
                lines.append(f"(...{len(words) - WORDS_SHOWN_PER_PLAYER} more)")
            fields.append(PanelField(name=player.name, value="\n".join(lines)))

        self._send_panel(Panel(title=title, color=NEUTRAL_COLOR, fields=fields))

    def _display_leaderboard(self, title: str) -> None:
        fields = [
            PanelField(name=player.name, value=f"+{player.wave_damage} dmg ({player.total_damage} dmg)")
            for player in self._players_by_total_damage()
        ]
        self._send_panel(Panel(title=title, color=NEUTRAL_COLOR, fields=fields))

    def _resolve_wave_damage(self, wave: int, title: str) -> None:
        """Shows both health pools, then deals the wave's damage to each."""
        boss_hurt = sum(player.wave_damage for player in self.players.values())
        unmet = self.unmet_objectives()
        team_hurt = sum(obj.damage for obj in unmet)

        boss_field = PanelField(
            name=f"Boss{BOSS_SYMBOL}",
            value=f"{BOOM_SYMBOL if boss_hurt > 0 else ''}{self.boss_health} {HEART_SYMBOL}",
        )
        team_field = PanelField(
            name=f"Team{TEAM_SYMBOL}",
            value=f"{BOOM_SYMBOL if team_hurt > 0 else ''}{self.team_health} {HEART_SYMBOL}",
        )
        panel = Panel(title=title, color=NEUTRAL_COLOR, fields=[boss_field, team_field])
        if self.current_objectives:
            panel.fields.append(PanelField(name="Objectives", value=self._objective_report()))
        handle = self._send_panel(panel)

        self._pause(1.5)

        self.boss_health -= boss_hurt
        self.team_health -= team_hurt
        boss_field.value = f"{self.boss_health} {HEART_SYMBOL} (-{boss_hurt})"
        team_field.value = f"{self.team_health} {HEART_SYMBOL} (-{team_hurt})"
        self._edit_panel(handle, panel)

        game_logger.log_game_event(
            self.game_id, 'wave_finished', wave=wave,
            boss_damage=boss_hurt, team_damage=team_hurt,
            boss_health=self.boss_health, team_health=self.team_health,
            objectives_missed=len(unmet)
        )

    def _objective_report(self) -> str:
        lines = []
        for index, obj in enumerate(self.current_objectives):
            mark = "✅" if index in self._completed_objectives else f"-{obj.damage}"
            lines.append(f"{mark} {obj.description()}")
        return "\n".join(lines)

    def _display_title(self, title: str, color: Optional[int]) -> None:
        self._send_panel(Panel(title=title, color=color))

    def _display_game_recap(self, title: str) -> None:
        fields = []
        for player in self._players_by_total_damage():
            items = [
                f"**Total Damage**: {player.total_damage} dmg",
                f"**Objectives**: {player.total_objectives_completed} ({player.total_defended} dmg blocked)",
                "**Best Words**:",
            ]
            items.extend(f"{word.upper()} ({score})"
                         for word, score in player.best_words(RECAP_WORDS_PER_PLAYER))
            fields.append(PanelField(name=player.name, value="\n".join(items)))

        self._send_panel(Panel(title=title, color=NEUTRAL_COLOR, fields=fields))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def cleanup(self) -> None:
        """Releases the message collector. Safe to call more than once."""
        self.collector.stop('cleanup')

    def snapshot(self) -> Dict:
        """Returns the public state of this game."""
        return {
            'game_id': self.game_id,
            'group_id': self.group_id,
            'channel_id': self.channel.id,
            'seed': self.seed,
            'phase': self.phase.value,
            'team_health': self.team_health,
            'boss_health': self.boss_health,
            'tiles': [tile_symbol(tile) for tile in self.tiles],
            'objectives': [
                {
                    'description': obj.description(),
                    'damage': obj.damage,
                    'completed': index in self._completed_objectives,
                }
                for index, obj in enumerate(self.current_objectives)
            ],
            'players': [
                {
                    'id': player.participant.id,
                    'name': player.name,
                    'wave_damage': player.wave_damage,
                    'total_damage': player.total_damage,
                    'objectives_completed': player.total_objectives_completed,
                }
                for player in self.players.values()
            ],
            'words_played': len(self.words_played),
            'outcome': self.outcome.value if self.outcome else None,
        }
