from pydantic import BaseModel
from datetime import datetime
from uuid import UUID

from treasure_board.domain.board_rules import BoardSize, BoardStatus


class SlotAssignmentSchema(BaseModel):
    slot: int
    claimant: str

    class Config:
        from_attributes = True


class BoardSchema(BaseModel):
    id: int
    creator: str
    size: BoardSize
    commitment: str  # hex digest
    deposit: int
    status: BoardStatus
    created_at: datetime | None = None
    revealed_at: datetime | None = None
    assignments: list[SlotAssignmentSchema] = []


class BoardSummarySchema(BaseModel):
    id: int
    size: BoardSize
    claimed_slots: list[int]


class PayoutSchema(BaseModel):
    recipient: str
    amount: int


class RevealSchema(BaseModel):
    id: int
    bombs: list[int]
    payouts: list[PayoutSchema]


class TransferSchema(BaseModel):
    transfer_id: UUID
    board_id: int | None
    sender: str
    receiver: str
    amount: int
    memo: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class BalanceSchema(BaseModel):
    account_id: str
    balance: int
    transfers: list[TransferSchema] = []
