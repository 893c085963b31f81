from treasure_board.domain.board_rules import STAKE_UNIT
from treasure_board.domain.commitment import commitment_for

CONTRACT = "treasureboard.near"
CREATOR = "armin.near"

# Bombs on slots 0 and 1 of a small board, followed by salt.
SMALL_SOLUTION = bytes([0, 1, 200, 17, 42])
SMALL_COMMITMENT = commitment_for(SMALL_SOLUTION)


def units(count: int) -> int:
    """Value of ``count`` stake units."""
    return count * STAKE_UNIT
