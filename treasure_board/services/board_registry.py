"""DB service layer for board use cases.

- Routers should not touch DB sessions directly; they call this module.
- This layer owns session/transaction boundaries: one public call is one
  transaction, and any error discards every row and transfer it wrote.
- Use CRUD helpers that do NOT commit inside session.begin().
"""

import logging
from asyncio import Lock
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from treasure_board.converter import DataConverter
from treasure_board.crud import CreateData, ReadData, UpdateData
from treasure_board.domain import reveal_engine
from treasure_board.domain.board_rules import (
    STAKE_UNIT,
    U128_MAX,
    BoardSize,
    board_price,
    validate_claim,
    validate_deposit,
)
from treasure_board.domain.commitment import HashProvider, sha256_digest
from treasure_board.domain.entropy import EntropySource, SystemEntropySource
from treasure_board.domain.errors import (
    BoardIdsExhausted,
    GameNotFound,
    RegistryAlreadyInitialized,
    RegistryNotInitialized,
)
from treasure_board.ledger import Ledger
from treasure_board.load_secrets import board_id_offset, contract_account_id
from treasure_board.models.schema_models import (
    BalanceSchema,
    BoardSchema,
    BoardSummarySchema,
    PayoutSchema,
    RevealSchema,
)
from treasure_board.models.schemas import Board, RegistryState


class BoardRegistry:
    """Owns every board: id allocation, lookup, claims and reveals."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        ledger: Ledger | None = None,
        entropy: EntropySource | None = None,
        hash_provider: HashProvider = sha256_digest,
        id_offset: int = board_id_offset,
    ):
        self.session_factory = session_factory
        self.ledger = ledger or Ledger(contract_account_id)
        self.entropy = entropy or SystemEntropySource()
        self.hash_provider = hash_provider
        self.id_offset = id_offset
        self.lock = Lock()  # one operation at a time per registry

    @property
    def contract_account_id(self) -> str:
        return self.ledger.contract_account_id

    async def is_initialized(self) -> bool:
        async with self.session_factory() as session:
            return await ReadData.read_registry_state(session) is not None

    async def initialize(self) -> None:
        """Mark the registry as initialized. Allowed exactly once."""
        async with self.lock:
            async with self.session_factory() as session:
                async with session.begin():
                    if await ReadData.read_registry_state(session, for_update=True) is not None:
                        raise RegistryAlreadyInitialized("The registry has already been initialized")
                    await CreateData.add_registry_state(self.id_offset, session)
        logging.info(f"Board registry initialized, first board id is {self.id_offset}")

    async def _registry_state(self, session: AsyncSession, for_update: bool = False) -> RegistryState:
        state = await ReadData.read_registry_state(session, for_update=for_update)
        if state is None:
            raise RegistryNotInitialized("The registry has not been initialized")
        return state

    async def _board(self, board_id: int, session: AsyncSession, for_update: bool = False) -> Board:
        if not 0 <= board_id <= U128_MAX:
            raise GameNotFound(f"No such a game exists: {board_id}")
        board = await ReadData.read_board(board_id, session, for_update=for_update)
        if board is None:
            raise GameNotFound(f"No such a game exists: {board_id}")
        return board

    async def create_game(self, size: BoardSize, commitment: bytes, creator: str, deposit: int) -> int:
        """Create a board funded by ``deposit``

        Args:
            size (BoardSize): Size of the board
            commitment (bytes): Digest of the hidden solution
            creator (str): Account funding the board
            deposit (int): Attached value; anything above the board price is returned

        Returns:
            int: Id of the new board
        """
        size = BoardSize(size)
        excess = validate_deposit(size, deposit)
        price = board_price(size)

        async with self.lock:
            async with self.session_factory() as session:
                async with session.begin():
                    state = await self._registry_state(session, for_update=True)
                    board_id = await UpdateData.allocate_board_id(state, session)
                    if board_id > U128_MAX:
                        raise BoardIdsExhausted(f"Board id {board_id} is beyond the id space")
                    await CreateData.add_board(board_id, creator, size.value, commitment, price, session)
                    await self.ledger.deposit(creator, deposit, session, board_id, "board deposit")
                    if excess:
                        await self.ledger.pay(creator, excess, session, board_id, "deposit excess")

        logging.info(f"Board {board_id} ({size.value}) created by {creator} with deposit {price}")
        return board_id

    async def get_game(self, board_id: int) -> BoardSchema:
        async with self.session_factory() as session:
            await self._registry_state(session)
            board = await self._board(board_id, session)
            return DataConverter.convert_board_to_schema(board)

    async def list_games(self) -> list[BoardSummarySchema]:
        """Every board with its claimed slots, in ascending id order"""
        async with self.session_factory() as session:
            await self._registry_state(session)
            boards = await ReadData.read_boards(session)
            return [DataConverter.convert_board_to_summary(board) for board in boards]

    async def claim_slot(self, board_id: int, slot: int, claimant: str, stake: int) -> BoardSchema:
        """Claim one slot of an open board

        Args:
            board_id (int): To identify the board
            slot (int): Slot index to claim
            claimant (str): Account claiming the slot
            stake (int): Attached value; anything above one stake unit is returned

        Returns:
            BoardSchema: The board after the claim
        """
        async with self.lock:
            async with self.session_factory() as session:
                async with session.begin():
                    await self._registry_state(session)
                    board = await self._board(board_id, session, for_update=True)
                    excess = validate_claim(
                        BoardSize(board.size),
                        DataConverter.assignments_of(board),
                        slot,
                        stake,
                        revealed=board.revealed_at is not None,
                    )
                    await CreateData.add_slot_assignment(board, slot, claimant, STAKE_UNIT, session)
                    await self.ledger.deposit(claimant, stake, session, board_id, f"stake for slot {slot}")
                    if excess:
                        await self.ledger.pay(claimant, excess, session, board_id, "stake excess")
                    board_data = DataConverter.convert_board_to_schema(board)

        logging.info(
            f"Slot {slot} of board {board_id} claimed by {claimant} "
            f"({len(board_data.assignments)} claimed, {board_data.status.value})"
        )
        return board_data

    async def reveal(self, board_id: int, solution: bytes, caller: str) -> RevealSchema:
        """Reveal the solution of a closed board and pay everyone out

        Args:
            board_id (int): To identify the board
            solution (bytes): Plain solution whose digest was given at creation
            caller (str): Must be the creator of the board

        Returns:
            RevealSchema: Bomb slots and the payout of every recipient
        """
        async with self.lock:
            async with self.session_factory() as session:
                async with session.begin():
                    await self._registry_state(session)
                    board = await self._board(board_id, session, for_update=True)
                    outcome = reveal_engine.reveal(
                        size=BoardSize(board.size),
                        creator=board.creator,
                        caller=caller,
                        commitment=board.commitment,
                        assignments=DataConverter.assignments_of(board),
                        solution=solution,
                        seed=self.entropy.seed(),
                        revealed=board.revealed_at is not None,
                        hash_provider=self.hash_provider,
                    )
                    await UpdateData.mark_board_revealed(board, datetime.now(), session)
                    for recipient, amount in outcome.payouts:
                        if amount:
                            await self.ledger.pay(recipient, amount, session, board_id, "reveal payout")

        payout_text = ", ".join(f"{recipient}={amount}" for recipient, amount in outcome.payouts)
        logging.info(f"Board {board_id} revealed: bombs at slots {outcome.bombs}; payouts: {payout_text}")
        return RevealSchema(
            id=board_id,
            bombs=outcome.bombs,
            payouts=[
                PayoutSchema(recipient=recipient, amount=amount)
                for recipient, amount in outcome.payouts
            ],
        )

    async def balance(self, account_id: str) -> BalanceSchema:
        async with self.session_factory() as session:
            balance = await self.ledger.balance(account_id, session)
            transfers = await ReadData.read_transfers(account_id, session)
            return BalanceSchema(
                account_id=account_id,
                balance=balance,
                transfers=[DataConverter.convert_transfer_to_schema(t) for t in transfers],
            )

    async def custody(self, board_id: int) -> int:
        """Value the contract still holds for one board"""
        async with self.session_factory() as session:
            return await self.ledger.balance(self.contract_account_id, session, board_id=board_id)
