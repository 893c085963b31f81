# import database
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload
from typing import List
import logging

from treasure_board.models.schemas import (
    Base,
    Board,
    LedgerTransfer,
    RegistryState,
    SlotAssignment,
    UserTable,
)

# None of these helpers commit. The caller owns the transaction (session.begin()).


async def create_tables(engine: AsyncEngine) -> None:
    """Create tables if not exists"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logging.info("Tables are ready")


class CreateData:
    @staticmethod
    async def add_registry_state(next_id: int, session: AsyncSession) -> RegistryState:
        """Create the singleton registry row that marks the registry as initialized

        Args:
            next_id (int): First board id to hand out
        """
        state = RegistryState(id=1, next_id=next_id)
        session.add(state)
        await session.flush()
        return state

    @staticmethod
    async def add_board(
        board_id: int,
        creator: str,
        size: str,
        commitment: bytes,
        deposit: int,
        session: AsyncSession,
    ) -> Board:
        """Create a board without any claimed slot

        Args:
            board_id (int): Id allocated by the registry
            creator (str): Account that funds the board
            size (str): Board size name
            commitment (bytes): Digest of the hidden solution
            deposit (int): Deposit retained by the contract
        """
        board = Board(
            board_id=board_id,
            creator=creator,
            size=size,
            commitment=commitment,
            deposit=str(deposit),
        )
        session.add(board)
        await session.flush()
        return board

    @staticmethod
    async def add_slot_assignment(
        board: Board, slot: int, claimant: str, stake: int, session: AsyncSession
    ) -> SlotAssignment:
        """Append a claimed slot to a board

        Args:
            board (Board): Board row with assignments loaded
            slot (int): Claimed slot index
            claimant (str): Account claiming the slot
            stake (int): Stake retained by the contract
        """
        assignment = SlotAssignment(slot=slot, claimant=claimant, stake=str(stake))
        board.assignments.append(assignment)
        await session.flush()
        return assignment

    @staticmethod
    async def add_transfer(
        board_id: int | None,
        sender: str,
        receiver: str,
        amount: int,
        memo: str,
        session: AsyncSession,
    ) -> LedgerTransfer:
        transfer = LedgerTransfer(
            board_id=board_id,
            sender=sender,
            receiver=receiver,
            amount=str(amount),
            memo=memo,
        )
        session.add(transfer)
        await session.flush()
        return transfer

    @staticmethod
    async def add_user(username: str, hash_password: str, salt: str, session: AsyncSession) -> None:
        session.add(UserTable(username=username, hash_password=hash_password, salt=salt))
        await session.flush()


class ReadData:
    @staticmethod
    async def read_registry_state(session: AsyncSession, for_update: bool = False) -> RegistryState | None:
        """Read the singleton registry row

        Args:
            for_update (bool): Lock the row until the transaction ends

        Returns:
            RegistryState | None: None while the registry is not initialized
        """
        stmt = select(RegistryState).where(RegistryState.id == 1)
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read_board(board_id: int, session: AsyncSession, for_update: bool = False) -> Board | None:
        """Read a board with its claimed slots

        Args:
            board_id (int): To identify the board
            for_update (bool): Lock the board row until the transaction ends

        Returns:
            Board | None: Board with assignments loaded
        """
        stmt = (
            select(Board)
            .where(Board.board_id == board_id)
            .options(selectinload(Board.assignments))
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read_boards(session: AsyncSession) -> List[Board]:
        """Read every board in ascending id order"""
        stmt = (
            select(Board)
            .options(selectinload(Board.assignments))
            .order_by(Board.board_id)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def read_transfers(account_id: str, session: AsyncSession) -> List[LedgerTransfer]:
        """Read every transfer sent or received by an account"""
        stmt = (
            select(LedgerTransfer)
            .where(
                or_(
                    LedgerTransfer.sender == account_id,
                    LedgerTransfer.receiver == account_id,
                )
            )
            .order_by(LedgerTransfer.transfer_id)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def read_board_transfers(board_id: int, session: AsyncSession) -> List[LedgerTransfer]:
        stmt = (
            select(LedgerTransfer)
            .where(LedgerTransfer.board_id == board_id)
            .order_by(LedgerTransfer.transfer_id)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def read_user(username: str, session: AsyncSession) -> UserTable | None:
        stmt = select(UserTable).where(UserTable.username == username)
        result = await session.execute(stmt)
        return result.scalars().first()


class UpdateData:
    @staticmethod
    async def allocate_board_id(state: RegistryState, session: AsyncSession) -> int:
        """Hand out the next board id and advance the counter

        Args:
            state (RegistryState): Registry row read with for_update=True

        Returns:
            int: The allocated board id
        """
        board_id = state.next_id
        state.next_id = board_id + 1
        await session.flush()
        return board_id

    @staticmethod
    async def mark_board_revealed(board: Board, revealed_at, session: AsyncSession) -> None:
        board.revealed_at = revealed_at
        await session.flush()
