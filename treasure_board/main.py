import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from treasure_board.crud import create_tables
from treasure_board.db import engine
from treasure_board.dependencies import board_registry
from treasure_board.load_secrets import log_level
from treasure_board.routers import board
from treasure_board.routers import restapi

logging.basicConfig(level=log_level)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app):
    """Create tables and initialize the board registry on first start.
    This function is called to start the server.
    """
    await create_tables(engine)
    if not await board_registry.is_initialized():
        await board_registry.initialize()
    try:
        yield
    finally:
        await engine.dispose()
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan)
app.include_router(board.board_router)
app.include_router(restapi.rest_router)
