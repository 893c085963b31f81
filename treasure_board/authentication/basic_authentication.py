from fastapi import Depends, status, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import async_sessionmaker
import secrets

from treasure_board.authentication.basic_authentication_crud import (
    ReadAuthentication,
    hash_password,
)
from treasure_board.dependencies import get_session_factory
from treasure_board.models.basic_authentication_models import UserModel

security = HTTPBasic()
read_auth = ReadAuthentication()


class BasicAuthentication:
    async def check_user_data(
        self,
        credentials: HTTPBasicCredentials = Depends(security),
        session_factory: async_sessionmaker = Depends(get_session_factory),
    ) -> UserModel:
        """Check the caller's credentials. The username is the caller's account id

        Args:
            credentials (HTTPBasicCredentials, optional): Defaults to Depends(security).

        Raises:
            HTTPException: The user data is not found in the database
            HTTPException: The password is incorrect

        Returns:
            UserModel: The authenticated user
        """
        user_data = await read_auth.read_user_data(credentials.username, session_factory)
        if user_data is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid username",
                headers={"WWW-Authenticate": "Basic"},
            )

        hashed_password = hash_password(credentials.password, user_data.salt)
        if not secrets.compare_digest(hashed_password, user_data.hash_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid password",
                headers={"WWW-Authenticate": "Basic"},
            )
        return user_data
