"""Errors raised by board operations.

Every error aborts the whole operation; the service layer rolls back the
transaction it was running in.
"""


class TreasureBoardError(Exception):
    """Base class for every failure of a board operation."""


class InsufficientDeposit(TreasureBoardError):
    pass


class GameNotFound(TreasureBoardError):
    pass


class SlotOutOfRange(TreasureBoardError):
    pass


class SlotTaken(TreasureBoardError):
    pass


class BoardClosed(TreasureBoardError):
    pass


class BoardNotClosed(TreasureBoardError):
    pass


class Unauthorized(TreasureBoardError):
    pass


class SolutionHashMismatch(TreasureBoardError):
    pass


class SolutionSizeInvalid(TreasureBoardError):
    pass


class AlreadyRevealed(TreasureBoardError):
    pass


class AmountOverflow(TreasureBoardError):
    pass


class AllocationError(TreasureBoardError):
    """Residual treasure could not be assigned to anyone."""


class RegistryNotInitialized(TreasureBoardError):
    pass


class RegistryAlreadyInitialized(TreasureBoardError):
    pass


class InvalidTransferAmount(TreasureBoardError):
    """Ledger transfers must move a positive amount."""


class BoardIdsExhausted(TreasureBoardError):
    pass
