import hashlib
import logging
import secrets
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker

from treasure_board.crud import CreateData, ReadData
from treasure_board.models.basic_authentication_models import UserModel
from treasure_board.load_secrets import pepper_data


def hash_password(password: str, salt: str) -> str:
    return hashlib.sha256((password + salt + pepper_data).encode()).hexdigest()


class CreateAuthentication:
    @staticmethod
    async def create_user_data(username: str, password: str, session_factory: async_sessionmaker) -> UserModel:
        """Create user data to authenticate the user

        Args:
            username (str): Account id used as the caller identity
            password (str): Plain password, stored salted and peppered

        Raises:
            ValueError: The username is already taken
        """
        salt = secrets.token_hex(8)
        user = UserModel(username=username, hash_password=hash_password(password, salt), salt=salt)
        try:
            async with session_factory() as session:
                async with session.begin():
                    await CreateData.add_user(user.username, user.hash_password, user.salt, session)
        except IntegrityError as e:
            logging.error(f"Error creating user data: {e}")
            raise ValueError(f"User {username} already exists") from e
        return user


class ReadAuthentication:
    @staticmethod
    async def read_user_data(username: str, session_factory: async_sessionmaker) -> UserModel | None:
        """Read user data to get salt and password hash

        Args:
            username (str): username of the user

        Returns:
            UserModel: username, password and salt
        """
        async with session_factory() as session:
            result = await ReadData.read_user(username, session)
            if result is None:
                logging.warning(f"User not found: {username}")
                return None
            return UserModel(
                username=result.username,
                hash_password=result.hash_password,
                salt=result.salt,
            )
