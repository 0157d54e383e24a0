"""Errors raised when a room action is rejected.

A rejected action never changes room state; the Socket.IO layer reports
``message`` to the sender only.
"""


class MatchError(Exception):
    """Base exception for rejected room actions."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ValidationError(MatchError):
    """A join request that cannot be accepted."""


class IllegalActionError(MatchError):
    """A move that is not allowed in the current game state."""


# Validation codes
MISSING_FIELDS = "MISSING_FIELDS"
ALREADY_SEATED = "ALREADY_SEATED"
WRONG_PASSWORD = "WRONG_PASSWORD"
ROOM_FULL = "ROOM_FULL"
ROLE_TAKEN = "ROLE_TAKEN"
ROLES_FILLED = "ROLES_FILLED"

# Illegal action codes
WAITING_FOR_OPPONENT = "WAITING_FOR_OPPONENT"
MATCH_FINISHED = "MATCH_FINISHED"
GAME_DECIDED = "GAME_DECIDED"
ALREADY_PLAYED = "ALREADY_PLAYED"
UNKNOWN_CARD = "UNKNOWN_CARD"
NO_CARDS_LEFT = "NO_CARDS_LEFT"
