"""
Error Types

Contains the exception raised when an internal game invariant is broken.
"""


class InvariantError(RuntimeError):
    """Raised when game state violates an invariant that should always hold."""


def ensure(condition: bool, message: str = "invariant violated") -> None:
    """Raise InvariantError with `message` unless `condition` holds."""
    if not condition:
        raise InvariantError(message)
