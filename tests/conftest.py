import os
import sys
import pytest

# Ensure the project root (containing the `wordraid` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from wordraid import create_app
from wordraid.config import GameSettings, TestingConfig
from wordraid.models import Channel, ChatMessage, Participant, Tile, WavePlan
from wordraid.services.dictionary_service import WordList
from wordraid.services.game_service import Game
from wordraid.services.lobby_service import LobbyService

WORDS = [
    'a', 'at', 'act', 'cat', 'bat', 'tab', 'cab', 'cot', 'coat', 'taco', 'boat',
    'stab', 'bats', 'ox', 'dog', 'god', 'ball', 'sass', 'tacos',
]

ALICE = Participant(id='u1', name='alice')
BOB = Participant(id='u2', name='bob')
CAROL = Participant(id='u3', name='carol')

CHANNEL = Channel(id='guild:general')


class RecordingMessenger:
    """Messenger that keeps everything games send, or fails every call."""

    def __init__(self, fail=False):
        self.fail = fail
        self.events = []
        self._next_id = 0

    def _record(self, *event):
        if self.fail:
            raise RuntimeError('channel unavailable')
        self.events.append(event)

    def _new_id(self):
        self._next_id += 1
        return f"out-{self._next_id}"

    def send_panel(self, channel_id, panel):
        self._record('panel', channel_id, panel.title, panel.to_dict())
        return self._new_id()

    def edit_panel(self, channel_id, handle, panel):
        self._record('panel_edit', channel_id, handle, panel.to_dict())

    def send_text(self, channel_id, text):
        self._record('text', channel_id, text)
        return self._new_id()

    def delete_message(self, channel_id, handle):
        self._record('delete', channel_id, handle)

    def react(self, message, marker):
        self._record('react', message.id, marker)

    def panel_titles(self):
        return [event[2] for event in self.events if event[0] == 'panel']

    def panels(self, title):
        return [event[3] for event in self.events if event[0] == 'panel' and event[2] == title]

    def texts(self):
        return [event[2] for event in self.events if event[0] == 'text']

    def reactions(self, message_id):
        return [event[2] for event in self.events if event[0] == 'react' and event[1] == message_id]


class ScriptedSleep:
    """
    Stand-in for time.sleep that plays scripted chat messages.

    `script` maps a wave number to (participant, content) pairs. They are sent
    to the game on the first sleep of that wave.
    """

    def __init__(self, script=None, channel_id=CHANNEL.id):
        self.script = dict(script or {})
        self.channel_id = channel_id
        self.game = None
        self.calls = []
        self.results = []  # (wave, message, verdict)

    def __call__(self, seconds):
        self.calls.append(seconds)
        game = self.game
        if game is None or not game.phase.accepts_words:
            return
        wave = int(game.phase.value[-1])
        for participant, content in self.script.pop(wave, []):
            message = ChatMessage(
                id=f"in-{len(self.results) + 1}",
                author=participant,
                channel_id=self.channel_id,
                content=content,
            )
            self.results.append((wave, message, game.collect(message)))

    def verdicts(self):
        return [(wave, message.content, verdict) for wave, message, verdict in self.results]


def make_plan(tiles, objectives=None):
    """Plan of three waves, each adding `tiles` and facing the matching objectives."""
    objectives = objectives or [[], [], []]
    return [WavePlan(tiles=list(tiles), objectives=list(objectives[index])) for index in range(3)]


CAT_TILES = [Tile.C, Tile.A, Tile.T, Tile.B, Tile.O]


@pytest.fixture()
def word_list():
    return WordList(WORDS)


@pytest.fixture()
def messenger():
    return RecordingMessenger()


@pytest.fixture()
def make_game(word_list, messenger):
    """Factory for games wired to a recording messenger and scripted sleep."""
    def factory(script=None, plan=None, participants=(ALICE, BOB), settings=None, seed=7, output=None):
        sleep = ScriptedSleep(script)
        game = Game(
            'guild', list(participants), CHANNEL, output or messenger, word_list,
            settings=settings or GameSettings(wave_seconds=1),
            seed=seed,
            plan=plan if plan is not None else make_plan(CAT_TILES),
            sleep=sleep,
        )
        sleep.game = game
        return game, sleep

    return factory


class DeferredTasks:
    """start_task stand-in that queues games instead of running them."""

    def __init__(self):
        self.pending = []

    def __call__(self, target, *args):
        self.pending.append((target, args))

    def run_all(self):
        while self.pending:
            target, args = self.pending.pop(0)
            target(*args)


@pytest.fixture()
def tasks():
    return DeferredTasks()


@pytest.fixture()
def lobby(word_list, messenger, tasks):
    return LobbyService(
        word_list, messenger,
        settings=GameSettings(wave_seconds=1, max_players=3),
        start_task=tasks,
        sleep=lambda seconds: None,
    )


@pytest.fixture()
def server(lobby):
    application, socketio = create_app(TestingConfig, lobby_service=lobby)
    return application, socketio


@pytest.fixture()
def flask_app(server):
    application, _ = server
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(server):
    application, socketio = server
    clients = []

    def connect():
        test_client = socketio.test_client(application, flask_test_client=application.test_client())
        clients.append(test_client)
        return test_client

    yield connect
    for test_client in clients:
        try:
            test_client.disconnect()
        except Exception:
            pass
