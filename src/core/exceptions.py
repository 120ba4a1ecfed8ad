"""
Exceptions raised across layers.

Everything derives from GameError, so the service (and whatever sits on top of it) can catch a single type.
InputError subclasses are recoverable: the caller re-asks the offending field.
"""


class GameError(Exception):
    """Top-level exception of the score keeper."""


# --- RECOVERABLE INPUT ERRORS ---
class InputError(GameError):
    """A supplied value was rejected. Nothing was changed, the value can be entered again."""


class DuplicateNameError(InputError):
    pass


class RegistryFullError(InputError):
    pass


class ShapeMismatchError(InputError):
    """Contractors do not match the shape required by the contract."""


class BidOutOfRangeError(InputError):
    pass


class MissingContractorsError(InputError):
    pass


class MissingBidError(InputError):
    pass


class MissingTricksError(InputError):
    pass


class InvalidInputError(InputError):
    pass


class TricksOutOfRangeError(InvalidInputError):
    pass


class TooManyPlayerError(InputError):
    """More contractors selected than any contractor shape allows."""


class UnexpectedInputError(InputError):
    """A value was supplied that the current contract never asks for."""


# --- STATE ERRORS ---
class GameStateError(GameError):
    """Operation not allowed in the current state of the session."""


class HandAlreadyBuiltError(GameStateError):
    pass


class EmptyHistoricError(GameStateError):
    pass


# --- BOUNDARY ERRORS ---
class RepositoryError(GameError):
    pass


class InvalidRequestError(GameError):
    pass
