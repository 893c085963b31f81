import os
import tempfile

# Tests never reach postgres: point the application engine at a throwaway sqlite file.
os.environ.setdefault("DB_BACKEND", "sqlite")
os.environ.setdefault("SQLITE_PATH", os.path.join(tempfile.gettempdir(), "treasure_board_test.sqlite3"))

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from treasure_board.create_sqlite_engine import create_sqlite_engine
from treasure_board.crud import create_tables
from treasure_board.domain.entropy import FixedEntropySource
from treasure_board.ledger import Ledger
from treasure_board.services.board_registry import BoardRegistry

from board_helpers import CONTRACT


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_sqlite_engine(tmp_path / "treasure_board.sqlite3")
    await create_tables(engine)
    yield async_sessionmaker(
        autocommit=False, class_=AsyncSession, bind=engine, expire_on_commit=False
    )
    await engine.dispose()


@pytest_asyncio.fixture
async def registry(session_factory):
    registry = BoardRegistry(
        session_factory,
        ledger=Ledger(CONTRACT),
        entropy=FixedEntropySource(20220607),
        id_offset=1,
    )
    await registry.initialize()
    return registry
