"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Iterable, List, Sequence


def get_user_identity(request_obj) -> Dict[str, str]:
    """Extract identity information from an HTTP or Socket.IO request."""
    if request_obj is None:
        return {'user_ip': 'unknown', 'session_id': None}

    return {
        'user_ip': getattr(request_obj, 'remote_addr', None) or 'unknown',
        'session_id': getattr(request_obj, 'sid', None),
    }


def chunk(items: Sequence, size: int) -> List[Sequence]:
    """Split a sequence into consecutive slices of at most `size` items."""
    return [items[index:index + size] for index in range(0, len(items), size)]


def room_key(group_id: str, channel_id: str) -> str:
    """Socket.IO room name of a channel inside a group."""
    return f"{group_id}:{channel_id}"


def unique(items: Iterable) -> List:
    """Remove duplicates while keeping first-seen order."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
