import pathlib

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from treasure_board.load_secrets import sqlite_path


def create_sqlite_engine(path: str | pathlib.Path) -> AsyncEngine:
    sqlite_url = f"sqlite+aiosqlite:///{pathlib.Path(path)}"
    return create_async_engine(url=sqlite_url, echo=False)


engine = create_sqlite_engine(sqlite_path)
