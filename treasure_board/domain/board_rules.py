"""Board rules that are independent from HTTP and DB.

Rule of thumb:
- OK: sizes, prices, status derivation, claim validation, checked arithmetic.
- Not OK: touching DB sessions, the ledger, FastAPI, datetime.now(), etc.
"""

from enum import Enum

from treasure_board.domain.errors import (
    AmountOverflow,
    BoardClosed,
    InsufficientDeposit,
    SlotOutOfRange,
    SlotTaken,
)

# One stake unit is the price of one slot, in the smallest monetary unit (10^24 per coin).
STAKE_UNIT = 10**24
U128_MAX = 2**128 - 1


class BoardSize(str, Enum):
    Small = "Small"  # 2 x 2
    Medium = "Medium"  # 4 x 4
    Big = "Big"  # 6 x 6


class BoardStatus(str, Enum):
    open = "open"
    closed = "closed"
    revealed = "revealed"


SLOT_COUNTS = {
    BoardSize.Small: 4,
    BoardSize.Medium: 16,
    BoardSize.Big: 36,
}


def slot_count(size: BoardSize) -> int:
    """Return the number of slots on a board of the given size."""
    return SLOT_COUNTS[BoardSize(size)]


def claim_limit(size: BoardSize) -> int:
    """Return how many slots can be claimed before the board closes (half of them)."""
    return slot_count(size) // 2


def unit_value(slots: int) -> int:
    """Return the value of ``slots`` stake units."""
    return checked_mul(slots, STAKE_UNIT)


def board_price(size: BoardSize) -> int:
    """Return the deposit a creator must attach to fund a board."""
    return unit_value(slot_count(size))


def checked_add(a: int, b: int) -> int:
    result = a + b
    if result > U128_MAX:
        raise AmountOverflow(f"{a} + {b} does not fit in 128 bits")
    return result


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise AmountOverflow(f"{a} - {b} would be negative")
    return a - b


def checked_mul(a: int, b: int) -> int:
    result = a * b
    if result > U128_MAX:
        raise AmountOverflow(f"{a} * {b} does not fit in 128 bits")
    return result


def board_status(size: BoardSize, claimed: int, revealed: bool) -> BoardStatus:
    """Derive the status of a board; it is never stored."""
    if revealed:
        return BoardStatus.revealed
    if claimed >= claim_limit(size):
        return BoardStatus.closed
    return BoardStatus.open


def validate_deposit(size: BoardSize, deposit: int) -> int:
    """Check the funding of a new board.

    Returns:
        int: Part of the deposit that must be returned to the creator.
    """
    price = board_price(size)
    if deposit < price:
        raise InsufficientDeposit(
            f"Attached deposit {deposit} is not sufficient for a {BoardSize(size).value} board "
            f"(requires {price})"
        )
    return deposit - price


def validate_claim(
    size: BoardSize,
    assignments: dict[int, str],
    slot: int,
    stake: int,
    revealed: bool = False,
) -> int:
    """Check that ``slot`` can be claimed with ``stake``.

    Checks run in a fixed order: closed board, slot range, slot taken, stake.
    ``assignments`` is not modified.

    Returns:
        int: Part of the stake that must be returned to the claimant.
    """
    if revealed or len(assignments) >= claim_limit(size):
        raise BoardClosed("This board is closed and takes no more claims")
    if slot < 0 or slot >= slot_count(size):
        raise SlotOutOfRange(
            f"Slot {slot} is outside a board of {slot_count(size)} slots"
        )
    if slot in assignments:
        raise SlotTaken(f"Slot {slot} has already been taken")
    if stake < STAKE_UNIT:
        raise InsufficientDeposit(
            f"Attached stake {stake} is insufficient (requires {STAKE_UNIT})"
        )
    return stake - STAKE_UNIT
