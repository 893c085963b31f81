import logging
from typing import List

from fastapi import APIRouter, Depends

from treasure_board.dependencies import get_board_registry
from treasure_board.domain.errors import TreasureBoardError
from treasure_board.models.schema_models import BalanceSchema, BoardSchema, BoardSummarySchema
from treasure_board.routers.error_handling import to_http_exception
from treasure_board.services.board_registry import BoardRegistry

rest_router = APIRouter()


class GameAPI:
    @staticmethod
    @rest_router.get("/games", response_model=List[BoardSummarySchema])
    async def list_games(registry: BoardRegistry = Depends(get_board_registry)):
        try:
            return await registry.list_games()
        except TreasureBoardError as e:
            raise to_http_exception(e)

    @staticmethod
    @rest_router.get("/games/{board_id}", response_model=BoardSchema)
    async def get_game(board_id: int, registry: BoardRegistry = Depends(get_board_registry)):
        try:
            return await registry.get_game(board_id)
        except TreasureBoardError as e:
            logging.info(f"get_game {board_id}: {e}")
            raise to_http_exception(e)


class AccountAPI:
    @staticmethod
    @rest_router.get("/accounts/{account_id}/balance", response_model=BalanceSchema)
    async def get_balance(account_id: str, registry: BoardRegistry = Depends(get_board_registry)):
        return await registry.balance(account_id)
