from sqlalchemy import ForeignKey, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, relationship
from sqlalchemy.schema import Column
from sqlalchemy.types import Integer, String, TypeDecorator, Uuid, DateTime, LargeBinary
from uuid6 import uuid7
from datetime import datetime


class Base(DeclarativeBase):
    pass


# Amounts are stored as decimal strings: 128-bit values do not fit every backend's integers.

BOARD_ID_DIGITS = 39


class BoardId(TypeDecorator):
    """128-bit board id kept as a zero-padded decimal string, so string order is id order."""

    impl = String
    cache_ok = True

    def __init__(self):
        super().__init__(length=BOARD_ID_DIGITS)

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(int(value)).zfill(BOARD_ID_DIGITS)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)


class RegistryState(Base):
    __tablename__ = "registry_state"
    id = Column(Integer, primary_key=True)
    next_id = Column(BoardId(), nullable=False)
    initialized_at = Column(DateTime, default=datetime.now)


class Board(Base):
    __tablename__ = "board"
    board_id = Column(BoardId(), primary_key=True, autoincrement=False)
    creator = Column(String, nullable=False)
    size = Column(String, nullable=False)
    commitment = Column(LargeBinary, nullable=False)
    deposit = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    revealed_at = Column(DateTime, nullable=True)

    assignments = relationship(
        "SlotAssignment",
        back_populates="board",
        order_by="SlotAssignment.slot",
        cascade="all, delete",
    )


class SlotAssignment(Base):
    __tablename__ = "slot_assignment"
    __table_args__ = (UniqueConstraint("board_id", "slot"),)
    id = Column(Integer, primary_key=True, autoincrement=True)
    board_id = Column(BoardId(), ForeignKey("board.board_id"), nullable=False, index=True)
    slot = Column(Integer, nullable=False)
    claimant = Column(String, nullable=False)
    stake = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.now)

    board = relationship("Board", back_populates="assignments")


class LedgerTransfer(Base):
    __tablename__ = "ledger_transfer"
    transfer_id = Column(Uuid, primary_key=True, default=uuid7)
    board_id = Column(BoardId(), nullable=True, index=True)
    sender = Column(String, nullable=False, index=True)
    receiver = Column(String, nullable=False, index=True)
    amount = Column(String, nullable=False)
    memo = Column(String)
    created_at = Column(DateTime, default=datetime.now)


class UserTable(Base):
    __tablename__ = "users"
    username = Column(String, primary_key=True, index=True)
    hash_password = Column(String)
    salt = Column(String)
