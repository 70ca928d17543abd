import logging

import pytest

from conftest import ALICE, BOB, CAROL, CHANNEL, RecordingMessenger
from wordraid.config import GameSettings
from wordraid.models import Channel, ChannelKind, ChatMessage, Outcome, Participant, Verdict
from wordraid.services.lobby_service import GAME_ERROR_MESSAGE, LobbyService


def chat(author, content='cat', channel_id=CHANNEL.id):
    return ChatMessage(id='m1', author=author, channel_id=channel_id, content=content)


def test_new_game_binds_every_player(lobby, tasks):
    result = lobby.try_new_game('guild', [ALICE, BOB], CHANNEL, seed=3)

    assert result['success'] is True
    game = result['game']
    assert lobby.game_for('guild', ALICE.id) is game
    assert lobby.game_for('guild', BOB.id) is game
    assert game.seed == 3
    assert len(tasks.pending) == 1


def test_player_cannot_join_two_games_in_a_group(lobby):
    assert lobby.try_new_game('guild', [ALICE, BOB], CHANNEL)['success']

    result = lobby.try_new_game('guild', [BOB, CAROL], CHANNEL)
    assert result == {
        'success': False,
        'error': 'already_in_session',
        'message': 'Could not create game: A user is already in a game.',
    }
    assert lobby.game_for('guild', CAROL.id) is None


def test_same_player_may_play_in_another_group(lobby):
    first = lobby.try_new_game('guild', [ALICE], CHANNEL)['game']
    second = lobby.try_new_game('other-guild', [ALICE], Channel(id='other-guild:general'))['game']
    assert first is not second
    assert lobby.game_for('other-guild', ALICE.id) is second


def test_games_need_a_text_channel(lobby):
    for kind in (ChannelKind.DIRECT, ChannelKind.VOICE):
        result = lobby.try_new_game('guild', [ALICE], Channel(id='guild:dm', kind=kind))
        assert result['success'] is False
        assert result['error'] == 'invalid_channel'
    assert lobby.active_games() == []


def test_player_limit_enforced(lobby):
    crowd = [Participant(id=f"p{index}", name=f"player{index}") for index in range(4)]
    result = lobby.try_new_game('guild', crowd, CHANNEL)
    assert result['error'] == 'too_many_players'
    assert lobby.games == {}


def test_duplicate_participants_counted_once(lobby):
    result = lobby.try_new_game('guild', [ALICE, ALICE, BOB, CAROL], CHANNEL)
    assert result['success'] is True
    assert len(result['game'].participants) == 3


def test_membership_checked_before_channel(lobby):
    lobby.try_new_game('guild', [ALICE], CHANNEL)
    result = lobby.try_new_game('guild', [ALICE], Channel(id='guild:dm', kind=ChannelKind.DIRECT))
    assert result['error'] == 'already_in_session'


def test_finished_games_release_players(lobby, tasks, messenger):
    game = lobby.try_new_game('guild', [ALICE, BOB], CHANNEL, seed=3)['game']
    tasks.run_all()

    # Nobody played, so wave 2's objectives (16 dmg) finish off the team
    assert game.outcome == Outcome.DEFEAT
    assert game.collector.ended
    assert lobby.games == {}
    assert lobby.try_new_game('guild', [ALICE, BOB], CHANNEL)['success']
    assert 'All done' in messenger.texts()


def test_route_message_reaches_authors_game(lobby):
    game = lobby.try_new_game('guild', [ALICE], CHANNEL)['game']

    # The game has not started its first wave yet
    assert lobby.route_message('guild', chat(ALICE)) == Verdict.IGNORED
    assert lobby.route_message('guild', chat(BOB)) is None
    assert lobby.route_message('other-guild', chat(ALICE)) is None
    assert game.words_played == set()


def test_crashed_game_is_torn_down_and_reported(word_list, messenger, tasks):
    def broken_sleep(seconds):
        raise RuntimeError('timer failed')

    lobby = LobbyService(word_list, messenger, GameSettings(wave_seconds=1), start_task=tasks, sleep=broken_sleep)
    game = lobby.try_new_game('guild', [ALICE], CHANNEL)['game']
    tasks.run_all()

    assert GAME_ERROR_MESSAGE in messenger.texts()
    assert game.collector.ended
    assert lobby.game_for('guild', ALICE.id) is None


def test_crash_notice_failure_still_tears_down(word_list, tasks, caplog):
    def broken_sleep(seconds):
        raise RuntimeError('timer failed')

    lobby = LobbyService(
        word_list, RecordingMessenger(fail=True), GameSettings(wave_seconds=1),
        start_task=tasks, sleep=broken_sleep,
    )
    lobby.try_new_game('guild', [ALICE], CHANNEL)
    with caplog.at_level(logging.WARNING, logger='wordraid'):
        tasks.run_all()

    assert lobby.active_games() == []
    messages = [record.getMessage() for record in caplog.records]
    assert any('run_game' in message for message in messages)
    assert any('error_notice_failed' in message for message in messages)


def test_destroy_game_is_idempotent(lobby):
    game = lobby.try_new_game('guild', [ALICE, BOB], CHANNEL)['game']
    lobby.destroy_game(game)
    lobby.destroy_game(game)
    assert lobby.games == {}
    assert game.collector.end_reason == 'cleanup'


def test_lobby_state_lists_running_games(lobby):
    game = lobby.try_new_game('guild', [ALICE, BOB], CHANNEL, seed=12)['game']
    state = lobby.get_lobby_state()

    assert state['success'] is True
    assert [entry['game_id'] for entry in state['games']] == [game.game_id]
    assert state['games'][0]['seed'] == 12
    assert lobby.get_game(game.game_id) is game
    assert lobby.get_game('missing') is None


def test_shutdown_releases_everything(lobby):
    first = lobby.try_new_game('guild', [ALICE], CHANNEL)['game']
    second = lobby.try_new_game('guild', [BOB], CHANNEL)['game']
    lobby.shutdown()

    assert lobby.games == {}
    assert first.collector.ended and second.collector.ended


def test_unplayed_game_escapes_when_team_outlasts_objectives(word_list, messenger, tasks):
    lobby = LobbyService(
        word_list, messenger, GameSettings(team_health=40, wave_seconds=1),
        start_task=tasks, sleep=lambda seconds: None,
    )
    game = lobby.try_new_game('guild', [ALICE], CHANNEL, seed=3)['game']
    tasks.run_all()

    # Waves 2 and 3 deal 16 + 21 objective damage
    assert game.outcome == Outcome.ESCAPE
    assert game.team_health == 40 - 37
    assert game.boss_health == 60


def test_empty_team_refused(lobby, tasks):
    result = lobby.try_new_game('guild', [], CHANNEL)
    assert result == {
        'success': False,
        'error': 'no_players',
        'message': 'Could not create game: No players.',
    }
    assert lobby.games == {}
    assert tasks.pending == []


def test_failed_start_releases_players(word_list, messenger):
    def refuse_task(target, *args):
        raise RuntimeError('no workers left')

    lobby = LobbyService(word_list, messenger, GameSettings(wave_seconds=1), start_task=refuse_task)
    with pytest.raises(RuntimeError):
        lobby.try_new_game('guild', [ALICE, BOB], CHANNEL)

    assert lobby.games == {}
    assert lobby.game_for('guild', ALICE.id) is None
