from fastapi import HTTPException, status

from treasure_board.domain.errors import (
    AllocationError,
    AlreadyRevealed,
    AmountOverflow,
    BoardClosed,
    BoardIdsExhausted,
    BoardNotClosed,
    GameNotFound,
    InsufficientDeposit,
    InvalidTransferAmount,
    SlotOutOfRange,
    SlotTaken,
    SolutionHashMismatch,
    SolutionSizeInvalid,
    TreasureBoardError,
    Unauthorized,
)

ERROR_STATUS = {
    InsufficientDeposit: status.HTTP_402_PAYMENT_REQUIRED,
    GameNotFound: status.HTTP_404_NOT_FOUND,
    SlotOutOfRange: status.HTTP_400_BAD_REQUEST,
    SlotTaken: status.HTTP_409_CONFLICT,
    BoardClosed: status.HTTP_409_CONFLICT,
    BoardNotClosed: status.HTTP_409_CONFLICT,
    AlreadyRevealed: status.HTTP_409_CONFLICT,
    Unauthorized: status.HTTP_403_FORBIDDEN,
    SolutionHashMismatch: status.HTTP_400_BAD_REQUEST,
    SolutionSizeInvalid: status.HTTP_400_BAD_REQUEST,
    AmountOverflow: status.HTTP_400_BAD_REQUEST,
    AllocationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    InvalidTransferAmount: status.HTTP_400_BAD_REQUEST,
    BoardIdsExhausted: status.HTTP_409_CONFLICT,
}


def to_http_exception(error: TreasureBoardError) -> HTTPException:
    """Map a failed board operation to the response sent to the client"""
    status_code = ERROR_STATUS.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return HTTPException(
        status_code=status_code,
        detail={"error": type(error).__name__, "message": str(error)},
    )
