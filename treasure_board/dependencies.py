from sqlalchemy.ext.asyncio import async_sessionmaker

from treasure_board.db import Session
from treasure_board.services.board_registry import BoardRegistry

board_registry = BoardRegistry(Session)


def get_session_factory() -> async_sessionmaker:
    return Session


def get_board_registry() -> BoardRegistry:
    return board_registry
