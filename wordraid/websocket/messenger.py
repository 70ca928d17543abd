"""
Socket.IO Messenger

Delivers game output to the channel rooms of connected clients.
"""

import uuid

from ..models.game import ChatMessage, Panel


class SocketIOMessenger:
    """
    Emits panels, texts and reactions to a channel's Socket.IO room.

    Channel ids handed to the messenger are room names. Every posted message
    gets an id so later edits and deletions can refer to it.
    """

    def __init__(self, socketio):
        self.socketio = socketio

    def send_panel(self, channel_id: str, panel: Panel) -> str:
        message_id = str(uuid.uuid4())
        self.socketio.emit('panel', {'id': message_id, 'panel': panel.to_dict()}, room=channel_id)
        return message_id

    def edit_panel(self, channel_id: str, message_id: str, panel: Panel) -> None:
        self.socketio.emit('panel_edit', {'id': message_id, 'panel': panel.to_dict()}, room=channel_id)

    def send_text(self, channel_id: str, text: str) -> str:
        message_id = str(uuid.uuid4())
        self.socketio.emit('text', {'id': message_id, 'content': text}, room=channel_id)
        return message_id

    def delete_message(self, channel_id: str, message_id: str) -> None:
        self.socketio.emit('message_delete', {'id': message_id}, room=channel_id)

    def react(self, message: ChatMessage, marker: str) -> None:
        self.socketio.emit('reaction', {'message_id': message.id, 'marker': marker}, room=message.channel_id)
