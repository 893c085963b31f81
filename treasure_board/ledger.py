"""Ledger of value moved between accounts.

Transfers are appended to ``ledger_transfer`` in the caller's session, so they
are committed or discarded together with the board operation that issued them.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from treasure_board.crud import CreateData, ReadData
from treasure_board.domain.board_rules import checked_add
from treasure_board.domain.errors import InvalidTransferAmount
from treasure_board.models.schemas import LedgerTransfer


class Ledger:
    def __init__(self, contract_account_id: str):
        self.contract_account_id = contract_account_id

    async def transfer(
        self,
        sender: str,
        receiver: str,
        amount: int,
        session: AsyncSession,
        board_id: int | None = None,
        memo: str = "",
    ) -> LedgerTransfer:
        """Move ``amount`` from ``sender`` to ``receiver``

        Args:
            sender (str): Paying account
            receiver (str): Credited account
            amount (int): Positive amount in base units
            board_id (int | None): Board the transfer belongs to
            memo (str): Free text shown in transfer listings
        """
        if amount <= 0:
            raise InvalidTransferAmount(f"Transfer amount must be positive, got {amount}")
        transfer = await CreateData.add_transfer(board_id, sender, receiver, amount, memo, session)
        logging.debug(f"transfer {transfer.transfer_id}: {sender} -> {receiver} {amount} ({memo})")
        return transfer

    async def deposit(self, account_id: str, amount: int, session: AsyncSession, board_id: int, memo: str):
        """Take value from ``account_id`` into contract custody"""
        return await self.transfer(account_id, self.contract_account_id, amount, session, board_id, memo)

    async def pay(self, account_id: str, amount: int, session: AsyncSession, board_id: int, memo: str):
        """Release value from contract custody to ``account_id``"""
        return await self.transfer(self.contract_account_id, account_id, amount, session, board_id, memo)

    async def balance(self, account_id: str, session: AsyncSession, board_id: int | None = None) -> int:
        """Net amount received minus amount sent by ``account_id``

        Args:
            board_id (int | None): Only count transfers of this board
        """
        if board_id is None:
            transfers = await ReadData.read_transfers(account_id, session)
        else:
            transfers = await ReadData.read_board_transfers(board_id, session)

        received = 0
        sent = 0
        for transfer in transfers:
            if transfer.receiver == account_id:
                received = checked_add(received, int(transfer.amount))
            if transfer.sender == account_id:
                sent = checked_add(sent, int(transfer.amount))
        return received - sent
