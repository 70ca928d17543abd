"""
Handler Decorators

Contains decorators shared by the WebSocket event handlers.
"""

from functools import wraps
from flask_socketio import emit


def websocket_payload_required(*fields):
    """
    Decorator requiring a dict payload carrying the given non-empty fields.

    Emits an 'error' event and skips the handler when a field is missing.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(data=None, *args, **kwargs):
            if not isinstance(data, dict):
                emit('error', {'error': 'Payload must be an object'})
                return
            missing = [name for name in fields if not data.get(name)]
            if missing:
                emit('error', {'error': f"Missing fields: {', '.join(missing)}"})
                return
            return f(data, *args, **kwargs)

        return decorated_function

    return decorator
