"""
WebSocket Event Handlers

Handles all WebSocket events: joining channels, the play command and chat
messages that games adjudicate as words.
"""

import uuid

from flask import request
from flask_socketio import emit, join_room, leave_room

from ..models.game import Channel, ChannelKind, ChatMessage
from ..models.player import Participant
from ..utils.decorators import websocket_payload_required
from ..utils.game_logger import game_logger
from ..utils.helpers import room_key

# Simple tracking of connected users: socket_id -> {'participant', 'group', 'channel'}
connected_users = {}


def register_websocket_handlers(socketio, lobby_service):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        game_logger.log_user_action(request, 'connect')

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Forget the user. A game they are in keeps running without them."""
        connected_users.pop(request.sid, None)

    @socketio.on('join_channel')
    @websocket_payload_required('group', 'channel', 'username')
    def handle_join_channel(data):
        """Join a channel of a group so its messages and game output are received."""
        try:
            kind = ChannelKind(data.get('kind', ChannelKind.TEXT.value))
        except ValueError:
            emit('error', {'error': f"Unknown channel kind: {data.get('kind')}"})
            return

        previous = connected_users.get(request.sid)
        if previous:
            leave_room(previous['channel'].id)

        group_id = str(data['group'])
        room = room_key(group_id, str(data['channel']))
        participant = Participant(id=str(data.get('user_id') or request.sid), name=str(data['username']))
        join_room(room)
        connected_users[request.sid] = {
            'participant': participant,
            'group': group_id,
            'channel': Channel(id=room, kind=kind),
        }

        game_logger.log_user_action(request, 'join_channel', group_id=group_id, channel=room)
        emit('joined', {'group': group_id, 'channel': room, 'user_id': participant.id})

    @socketio.on('play')
    def handle_play(data=None):
        """Start a game with the caller and any named members of the same channel."""
        user = connected_users.get(request.sid)
        if not user:
            emit('error', {'error': 'Join a channel first'})
            return

        data = data if isinstance(data, dict) else {}
        invited = set(data.get('players') or [])
        participants = [user['participant']] + [
            other['participant'] for sid, other in connected_users.items()
            if sid != request.sid
            and other['group'] == user['group']
            and other['channel'] == user['channel']
            and other['participant'].name in invited
        ]
        game_number = data.get('game_number')
        seed = game_number if isinstance(game_number, int) and not isinstance(game_number, bool) else None

        game_logger.log_user_action(request, 'play', group_id=user['group'], players=len(participants))
        result = lobby_service.try_new_game(user['group'], participants, user['channel'], seed=seed)

        if result['success']:
            emit('play_result', {'success': True, 'game_id': result['game'].game_id})
        else:
            emit('play_result', {'success': False, 'error': result['error'], 'message': result['message']})

    @socketio.on('chat_message')
    @websocket_payload_required('content')
    def handle_chat_message(data):
        """Post a chat message to the channel and hand it to the author's game."""
        user = connected_users.get(request.sid)
        if not user:
            emit('error', {'error': 'Join a channel first'})
            return

        message = ChatMessage(
            id=str(uuid.uuid4()),
            author=user['participant'],
            channel_id=user['channel'].id,
            content=str(data['content']),
        )
        socketio.emit('chat_message', {
            'id': message.id,
            'author': message.author.name,
            'content': message.content,
        }, room=message.channel_id)

        lobby_service.route_message(user['group'], message)

    @socketio.on('ping_check')
    def handle_ping_check(data=None):
        """Liveness check."""
        emit('pong', {'success': True})
