class NumberGameError(Exception):
    """Base class for every recoverable error raised by the game core."""


class InvalidInput(NumberGameError, ValueError):
    """Malformed, negative or too-short sequence."""


class InvalidMove(NumberGameError):
    """Move requested out of turn, after the game ended, or on an empty sequence."""


class IllegalConfiguration(NumberGameError):
    """Runner built without a starting sequence or starting role."""
