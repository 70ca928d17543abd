"""
Lobby Service

Tracks which players are bound to a running game in each group, admits new
games and tears them down when they finish or crash.
"""

import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Sequence

from ..config.game_settings import GameSettings
from ..models.game import AdmissionError, Channel, ChatMessage, Verdict
from ..models.player import Participant
from ..utils.game_logger import game_logger
from ..utils.helpers import unique
from .game_service import Game
from .random_service import game_number_for

_ADMISSION_MESSAGES = {
    AdmissionError.ALREADY_IN_SESSION: "Could not create game: A user is already in a game.",
    AdmissionError.INVALID_CHANNEL: "Could not create game: This is not a server text channel.",
    AdmissionError.TOO_MANY_PLAYERS: "Could not create game: Too many players.",
    AdmissionError.NO_PLAYERS: "Could not create game: No players.",
}

GAME_ERROR_MESSAGE = "Uh oh, an error occurred during the game."


def _start_thread(target: Callable, *args) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, daemon=True)
    thread.start()
    return thread


class LobbyService:
    """
    Registry of running games.

    Each player belongs to at most one game per group. Admission and teardown
    are serialized by a lock so two games cannot claim the same player.
    """

    def __init__(self,
                 word_list,
                 messenger,
                 settings: Optional[GameSettings] = None,
                 start_task: Callable = _start_thread,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            word_list: Dictionary oracle shared by every game
            messenger: Output collaborator games post panels and reactions through
            settings: Game limits
            start_task: Launches `target(*args)` in the background
            sleep: Wait primitive used by game timers
        """
        self.word_list = word_list
        self.messenger = messenger
        self.settings = settings or GameSettings()
        self._start_task = start_task
        self._sleep = sleep
        self._lock = threading.RLock()
        self.games: Dict[str, Dict[str, Game]] = {}  # group_id -> participant_id -> game

    def try_new_game(self,
                     group_id: str,
                     participants: Sequence[Participant],
                     channel: Channel,
                     seed: Optional[int] = None,
                     plan=None) -> Dict:
        """
        Creates and starts a new game with the given participants.

        Returns:
            Dict with 'success' and either 'game' or 'error' and 'message'
        """
        participants = unique(participants)
        with self._lock:
            group_games = self.games.get(group_id, {})
            error = None
            if any(p.id in group_games for p in participants):
                error = AdmissionError.ALREADY_IN_SESSION
            elif not channel.supports_games:
                error = AdmissionError.INVALID_CHANNEL
            elif len(participants) > self.settings.max_players:
                error = AdmissionError.TOO_MANY_PLAYERS
            elif not participants:
                error = AdmissionError.NO_PLAYERS

            if error is not None:
                game_logger.log_game_event(
                    None, 'game_refused', group_id=group_id, channel_id=channel.id, reason=error.value
                )
                return {
                    'success': False,
                    'error': error.value,
                    'message': _ADMISSION_MESSAGES[error],
                }

            game = Game(
                group_id, participants, channel, self.messenger, self.word_list,
                settings=self.settings,
                seed=game_number_for() if seed is None else seed,
                plan=plan,
                sleep=self._sleep,
            )
            group_games = self.games.setdefault(group_id, {})
            for participant in participants:
                group_games[participant.id] = game

        try:
            self._start_task(self._run_game, game)
        except Exception as e:
            game_logger.log_error(e, 'start_game', game.game_id, exc_info=True)
            self.destroy_game(game)
            raise
        return {'success': True, 'game': game}

    def _run_game(self, game: Game) -> None:
        """Runs a game to completion and always releases it afterwards."""
        try:
            outcome = game.run()
            game_logger.log_game_event(game.game_id, 'game_completed', outcome=outcome.value)
        except Exception as e:
            game_logger.log_error(e, 'run_game', game.game_id, exc_info=True)
            try:
                self.messenger.send_text(game.channel.id, GAME_ERROR_MESSAGE)
            except Exception as notify_error:
                game_logger.log_game_event(
                    game.game_id, 'error_notice_failed', level=logging.WARNING,
                    error_type=type(notify_error).__name__, error_message=str(notify_error)
                )
        finally:
            self.destroy_game(game)

    def destroy_game(self, game: Game) -> None:
        """Releases a game's resources and unbinds its players. Idempotent."""
        game.cleanup()
        with self._lock:
            group_games = self.games.get(game.group_id, {})
            for participant in game.participants:
                if group_games.get(participant.id) is game:
                    del group_games[participant.id]
            if not group_games:
                self.games.pop(game.group_id, None)

    def route_message(self, group_id: str, message: ChatMessage) -> Optional[Verdict]:
        """
        Delivers a chat message to the game its author is playing in this group.

        Returns:
            The game's verdict, or None if no game took the message
        """
        game = self.game_for(group_id, message.author.id)
        if game is None:
            return None
        return game.collect(message)

    def game_for(self, group_id: str, participant_id: str) -> Optional[Game]:
        with self._lock:
            return self.games.get(group_id, {}).get(participant_id)

    def get_game(self, game_id: str) -> Optional[Game]:
        for game in self.active_games():
            if game.game_id == game_id:
                return game
        return None

    def active_games(self) -> List[Game]:
        with self._lock:
            games = [game for group_games in self.games.values() for game in group_games.values()]
        return unique(games)

    def get_lobby_state(self) -> Dict:
        """Get the state of every running game."""
        return {'success': True, 'games': [game.snapshot() for game in self.active_games()]}

    def shutdown(self) -> None:
        """Stops every game's message intake and clears all bindings."""
        for game in self.active_games():
            self.destroy_game(game)
        game_logger.logger.info("Lobby shut down")
