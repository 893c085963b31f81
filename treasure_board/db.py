from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from treasure_board.load_secrets import db_backend

if db_backend == "sqlite":
    from treasure_board.create_sqlite_engine import engine
else:
    from treasure_board.create_postgres_engine import engine

# Centralized session factory to avoid creating it in router modules.
Session = async_sessionmaker(
    autocommit=False,
    class_=AsyncSession,
    autoflush=True,
    bind=engine,
    expire_on_commit=False,
)
