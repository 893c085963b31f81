"""Reveal of a closed board and distribution of its funds.

The payout pass walks every slot in ascending order with a single generator
seeded once per reveal, so a fixed seed always yields the same payouts.

Value is conserved: the payouts of one reveal add up to the board price plus
one stake unit per claimed slot, which is exactly what the contract holds for
the board.
"""

import random
from dataclasses import dataclass, field

from treasure_board.domain.board_rules import (
    STAKE_UNIT,
    BoardSize,
    board_price,
    checked_add,
    checked_sub,
    claim_limit,
    slot_count,
)
from treasure_board.domain.commitment import HashProvider, sha256_digest, verify_commitment
from treasure_board.domain.errors import (
    AllocationError,
    AlreadyRevealed,
    BoardNotClosed,
    SolutionHashMismatch,
    SolutionSizeInvalid,
    Unauthorized,
)


@dataclass
class RevealOutcome:
    bombs: list[int]
    payouts: list[tuple[str, int]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(amount for _, amount in self.payouts)


def bomb_slots(size: BoardSize, solution: bytes) -> set[int]:
    """Interpret the head of the solution as bomb slot indices.

    The first ``slot_count / 2`` bytes are slot indices; duplicates are allowed.
    """
    return set(solution[: claim_limit(size)])


def _credit(payouts: dict[str, int], recipient: str, amount: int) -> None:
    payouts[recipient] = checked_add(payouts.get(recipient, 0), amount)


def compute_payouts(
    size: BoardSize,
    creator: str,
    assignments: dict[int, str],
    bombs: set[int],
    rng: random.Random,
) -> tuple[dict[str, int], int]:
    """Run the payout pass over every slot of the board.

    Args:
        size (BoardSize): Size of the board
        creator (str): Account that funded the board
        assignments (dict[int, str]): Claimed slot -> claimant
        bombs (set[int]): Bomb slot indices
        rng (random.Random): Generator seeded for this reveal

    Returns:
        tuple[dict[str, int], int]: Accumulated payout per recipient (in the order
        recipients were first credited) and the treasure left undistributed
    """
    remaining_treasure = board_price(size)
    payouts: dict[str, int] = {}

    for slot in range(slot_count(size)):
        claimant = assignments.get(slot)
        is_bomb = slot in bombs

        if claimant is None:
            if is_bomb or remaining_treasure == 0:
                continue
            drawn = rng.randint(0, remaining_treasure)
            _credit(payouts, creator, drawn)
            remaining_treasure = checked_sub(remaining_treasure, drawn)
        elif is_bomb:
            # the claimant's stake is forfeited to the creator
            _credit(payouts, creator, STAKE_UNIT)
        else:
            drawn = 0
            if remaining_treasure > 0:
                drawn = rng.randint(0, remaining_treasure)
                remaining_treasure = checked_sub(remaining_treasure, drawn)
            _credit(payouts, claimant, checked_add(drawn, STAKE_UNIT))

    return payouts, remaining_treasure


def allocate_residual(payouts: dict[str, int], remaining_treasure: int, rng: random.Random) -> None:
    """Give what is left of the treasure to one recipient picked at random.

    Applied once, after the payout pass. ``payouts`` is updated in place.
    """
    if remaining_treasure == 0:
        return
    if not payouts:
        raise AllocationError(
            f"No recipient available for the residual treasure of {remaining_treasure}"
        )
    recipient = rng.choice(list(payouts))
    _credit(payouts, recipient, remaining_treasure)


def reveal(
    *,
    size: BoardSize,
    creator: str,
    caller: str,
    commitment: bytes,
    assignments: dict[int, str],
    solution: bytes,
    seed: int,
    revealed: bool = False,
    hash_provider: HashProvider = sha256_digest,
) -> RevealOutcome:
    """Verify a revealed solution and compute who gets paid what.

    Checks run in this order: caller is the creator, board not revealed yet,
    board closed, solution matches the commitment, solution long enough.

    Raises:
        Unauthorized, AlreadyRevealed, BoardNotClosed, SolutionHashMismatch,
        SolutionSizeInvalid, AllocationError, AmountOverflow
    """
    if caller != creator:
        raise Unauthorized("Only the creator of a board can reveal its solution")
    if revealed:
        raise AlreadyRevealed("This board has already been revealed")
    if len(assignments) != claim_limit(size):
        raise BoardNotClosed(
            f"Board has {len(assignments)} of {claim_limit(size)} claims and cannot be revealed yet"
        )
    if not verify_commitment(solution, commitment, hash_provider):
        raise SolutionHashMismatch("The solution does not match the board commitment")
    if len(solution) < claim_limit(size):
        raise SolutionSizeInvalid(
            f"Solution has {len(solution)} bytes, at least {claim_limit(size)} required"
        )

    bombs = bomb_slots(size, solution)
    rng = random.Random(seed)
    payouts, remaining_treasure = compute_payouts(size, creator, assignments, bombs, rng)
    allocate_residual(payouts, remaining_treasure, rng)

    return RevealOutcome(
        bombs=sorted(slot for slot in bombs if slot < slot_count(size)),
        payouts=list(payouts.items()),
    )
