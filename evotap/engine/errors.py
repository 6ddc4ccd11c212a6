"""Game errors — every rejected operation raises one of these before mutating."""

from __future__ import annotations


class GameError(Exception):
    """Base class for locally detected, caller-facing failures."""

    kind: str = "game_error"
    status: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class NotFoundError(GameError):
    """Referenced era, organelle, organism or player id is unknown."""

    kind = "not_found"
    status = 404


class InvalidInputError(GameError):
    """A required field is missing or malformed."""

    kind = "invalid_input"
    status = 400


class AlreadyOwnedError(GameError):
    """The organelle has already been purchased."""

    kind = "already_owned"
    status = 409


class AlreadyUnlockedError(GameError):
    """The era is already unlocked."""

    kind = "already_unlocked"
    status = 409


class InsufficientFundsError(GameError):
    """Not enough DNA for the requested spend."""

    kind = "insufficient_funds"
    status = 400


class BelowMinimumError(GameError):
    """Exchange amount is under the configured minimum."""

    kind = "below_minimum"
    status = 400


class ExchangeFailedError(GameError):
    """Token issuance failed during an exchange; the debit has been reversed."""

    kind = "exchange_failed"
    status = 502
