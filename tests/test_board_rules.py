import pytest

from treasure_board.domain.board_rules import (
    STAKE_UNIT,
    U128_MAX,
    BoardSize,
    BoardStatus,
    board_price,
    board_status,
    checked_add,
    checked_sub,
    claim_limit,
    slot_count,
    validate_claim,
    validate_deposit,
)
from treasure_board.domain.errors import (
    AmountOverflow,
    BoardClosed,
    InsufficientDeposit,
    SlotOutOfRange,
    SlotTaken,
)

from board_helpers import units


@pytest.mark.parametrize(
    "size, slots",
    [(BoardSize.Small, 4), (BoardSize.Medium, 16), (BoardSize.Big, 36)],
)
def test_slot_count_and_price(size, slots):
    assert slot_count(size) == slots
    assert claim_limit(size) == slots // 2
    assert board_price(size) == units(slots)


def test_size_accepts_plain_names():
    assert slot_count("Medium") == 16


def test_board_status_transitions():
    assert board_status(BoardSize.Small, 0, False) == BoardStatus.open
    assert board_status(BoardSize.Small, 1, False) == BoardStatus.open
    assert board_status(BoardSize.Small, 2, False) == BoardStatus.closed
    assert board_status(BoardSize.Small, 2, True) == BoardStatus.revealed


def test_validate_deposit_big_board_with_four_units():
    with pytest.raises(InsufficientDeposit):
        validate_deposit(BoardSize.Big, units(4))


def test_validate_deposit_returns_excess():
    assert validate_deposit(BoardSize.Small, units(4)) == 0
    assert validate_deposit(BoardSize.Small, units(4) + 7) == 7


def test_validate_claim_accepts_free_slot():
    assert validate_claim(BoardSize.Small, {}, 3, STAKE_UNIT) == 0
    assert validate_claim(BoardSize.Small, {0: "alice"}, 1, STAKE_UNIT + 5) == 5


def test_validate_claim_rejects_closed_board():
    with pytest.raises(BoardClosed):
        validate_claim(BoardSize.Small, {0: "alice", 1: "bob"}, 2, STAKE_UNIT)


def test_validate_claim_rejects_revealed_board():
    with pytest.raises(BoardClosed):
        validate_claim(BoardSize.Small, {0: "alice"}, 2, STAKE_UNIT, revealed=True)


@pytest.mark.parametrize("slot", [4, 255, -1])
def test_validate_claim_rejects_out_of_range(slot):
    assignments = {0: "alice"}
    with pytest.raises(SlotOutOfRange):
        validate_claim(BoardSize.Small, assignments, slot, STAKE_UNIT)
    assert assignments == {0: "alice"}


def test_validate_claim_rejects_taken_slot():
    assignments = {0: "alice"}
    with pytest.raises(SlotTaken):
        validate_claim(BoardSize.Small, assignments, 0, STAKE_UNIT)
    assert assignments == {0: "alice"}


def test_validate_claim_rejects_low_stake():
    with pytest.raises(InsufficientDeposit):
        validate_claim(BoardSize.Small, {}, 0, STAKE_UNIT - 1)


def test_validate_claim_checks_closed_before_range():
    with pytest.raises(BoardClosed):
        validate_claim(BoardSize.Small, {0: "alice", 1: "bob"}, 99, 0)


def test_checked_arithmetic():
    assert checked_add(U128_MAX - 1, 1) == U128_MAX
    with pytest.raises(AmountOverflow):
        checked_add(U128_MAX, 1)
    with pytest.raises(AmountOverflow):
        checked_sub(1, 2)
