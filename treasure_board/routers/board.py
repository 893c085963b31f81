import logging

from fastapi import APIRouter, Depends

from treasure_board.authentication.basic_authentication import BasicAuthentication
from treasure_board.dependencies import get_board_registry
from treasure_board.domain.commitment import solution_bytes
from treasure_board.domain.errors import TreasureBoardError
from treasure_board.models.basic_authentication_models import UserModel
from treasure_board.models.dc_models import ClaimSlotModel, CreateGameModel, RevealModel
from treasure_board.models.schema_models import BoardSchema, RevealSchema
from treasure_board.routers.error_handling import to_http_exception
from treasure_board.services.board_registry import BoardRegistry

board_router = APIRouter()
basic_auth = BasicAuthentication()


class BoardServer:
    @staticmethod
    @board_router.post("/games", response_model=int)
    async def create_game(
        game: CreateGameModel,
        user_data: UserModel = Depends(basic_auth.check_user_data),
        registry: BoardRegistry = Depends(get_board_registry),
    ) -> int:
        """Create a board funded by the attached deposit

        Args:
            game (CreateGameModel):
                    size: Small | Medium | Big
                    commitment: hex digest of the solution
                    deposit: attached value

        Returns:
            int: Id of the new board
        """
        try:
            return await registry.create_game(
                game.size, game.commitment_bytes, user_data.username, game.deposit
            )
        except TreasureBoardError as e:
            logging.error(f"create_game failed for {user_data.username}: {e}")
            raise to_http_exception(e)

    @staticmethod
    @board_router.post("/games/{board_id}/claim", response_model=BoardSchema)
    async def claim_slot(
        board_id: int,
        claim: ClaimSlotModel,
        user_data: UserModel = Depends(basic_auth.check_user_data),
        registry: BoardRegistry = Depends(get_board_registry),
    ) -> BoardSchema:
        """Claim a slot of an open board with the attached stake"""
        try:
            return await registry.claim_slot(board_id, claim.slot, user_data.username, claim.stake)
        except TreasureBoardError as e:
            logging.error(f"claim_slot failed for {user_data.username} on board {board_id}: {e}")
            raise to_http_exception(e)

    @staticmethod
    @board_router.post("/games/{board_id}/reveal", response_model=RevealSchema)
    async def reveal(
        board_id: int,
        request: RevealModel,
        user_data: UserModel = Depends(basic_auth.check_user_data),
        registry: BoardRegistry = Depends(get_board_registry),
    ) -> RevealSchema:
        """Reveal the solution of a closed board. Only its creator may call this"""
        try:
            return await registry.reveal(board_id, solution_bytes(request.solution), user_data.username)
        except TreasureBoardError as e:
            logging.error(f"reveal failed for {user_data.username} on board {board_id}: {e}")
            raise to_http_exception(e)
