from treasure_board.domain.board_rules import BoardSize, board_status
from treasure_board.models.schema_models import (
    BoardSchema,
    BoardSummarySchema,
    SlotAssignmentSchema,
    TransferSchema,
)
from treasure_board.models.schemas import Board, LedgerTransfer


class DataConverter:
    """This class is used to convert data between different formats."""

    @staticmethod
    def assignments_of(board: Board) -> dict[int, str]:
        """Claimed slot -> claimant, as the domain layer expects it"""
        return {assignment.slot: assignment.claimant for assignment in board.assignments}

    @staticmethod
    def convert_board_to_schema(board: Board) -> BoardSchema:
        """Convert a board row to the view sent to clients

        Args:
            board (Board): Board row with assignments loaded

        Returns:
            BoardSchema: Board with its derived status
        """
        size = BoardSize(board.size)
        return BoardSchema(
            id=board.board_id,
            creator=board.creator,
            size=size,
            commitment=board.commitment.hex(),
            deposit=int(board.deposit),
            status=board_status(size, len(board.assignments), board.revealed_at is not None),
            created_at=board.created_at,
            revealed_at=board.revealed_at,
            assignments=[
                SlotAssignmentSchema.model_validate(assignment)
                for assignment in sorted(board.assignments, key=lambda a: a.slot)
            ],
        )

    @staticmethod
    def convert_board_to_summary(board: Board) -> BoardSummarySchema:
        return BoardSummarySchema(
            id=board.board_id,
            size=BoardSize(board.size),
            claimed_slots=sorted(assignment.slot for assignment in board.assignments),
        )

    @staticmethod
    def convert_transfer_to_schema(transfer: LedgerTransfer) -> TransferSchema:
        return TransferSchema(
            transfer_id=transfer.transfer_id,
            board_id=transfer.board_id,
            sender=transfer.sender,
            receiver=transfer.receiver,
            amount=int(transfer.amount),
            memo=transfer.memo,
            created_at=transfer.created_at,
        )
