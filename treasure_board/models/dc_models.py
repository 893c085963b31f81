from pydantic import BaseModel, Field, field_validator
from typing import Annotated, List

from treasure_board.domain.board_rules import U128_MAX, BoardSize
from treasure_board.domain.commitment import DIGEST_SIZE

Amount = Annotated[int, Field(ge=0, le=U128_MAX)]
Byte = Annotated[int, Field(ge=0, le=255)]


class CreateGameModel(BaseModel):
    size: BoardSize
    commitment: str  # hex digest of the solution
    deposit: Amount

    @field_validator("commitment")
    @classmethod
    def check_commitment(cls, value: str) -> str:
        try:
            digest = bytes.fromhex(value)
        except ValueError:
            raise ValueError("commitment must be a hex string")
        if len(digest) != DIGEST_SIZE:
            raise ValueError(f"commitment must be {DIGEST_SIZE} bytes long")
        return digest.hex()

    @property
    def commitment_bytes(self) -> bytes:
        return bytes.fromhex(self.commitment)


class ClaimSlotModel(BaseModel):
    slot: Byte
    stake: Amount


class RevealModel(BaseModel):
    solution: List[Byte]  # bomb slots followed by salt
