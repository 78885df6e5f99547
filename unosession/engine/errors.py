"""Rule errors raised by the engine.

Every error is request-local: the operation that raised it made no change to
the session it was given.
"""


class RuleError(Exception):
    """Base class for rejected requests."""

    kind = "RuleError"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.kind)
        self.message = message or self.kind


class SessionFull(RuleError):
    kind = "SessionFull"


class AlreadyJoined(RuleError):
    kind = "AlreadyJoined"


class PlayerNotFound(RuleError):
    kind = "PlayerNotFound"


class NotStarted(RuleError):
    kind = "NotStarted"


class NotYourTurn(RuleError):
    kind = "NotYourTurn"


class CardNotInHand(RuleError):
    kind = "CardNotInHand"


class IllegalPlay(RuleError):
    kind = "IllegalPlay"


class MissingColorDeclaration(RuleError):
    kind = "MissingColorDeclaration"


class DeckEmpty(RuleError):
    kind = "DeckEmpty"


class GameOver(RuleError):
    kind = "GameOver"


class SessionNotFound(RuleError):
    kind = "SessionNotFound"


class SessionExists(RuleError):
    kind = "SessionExists"
