from typing import Optional
from loguru import logger

from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..core.exceptions import InvalidCredentialsError, UnauthorizedError
from ..core.security import verify_password, issue_token, extract_token


class AuthService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def login(self, username: str, password: str) -> User:
        """
        Checks the credentials and stores a fresh token on the user. The
        previous token, if any, stops working.
        """
        logger.info(f"Login attempt for username={username!r}")
        user = await self.user_repo.get_by_username(username)
        if not user or not verify_password(password, user.password):
            logger.warning(f"Login failed for username={username!r}: invalid credentials")
            raise InvalidCredentialsError()

        user = await self.user_repo.set_token(user, issue_token())
        logger.info(f"User {user.id} logged in")
        return user

    async def logout(self, user: User) -> None:
        user_id = user.id
        await self.user_repo.set_token(user, None)
        logger.info(f"User {user_id} logged out")

    async def resolve_token(self, authorization: Optional[str]) -> User:
        token = extract_token(authorization)
        if not token:
            raise UnauthorizedError()

        user = await self.user_repo.get_by_token(token)
        if not user:
            logger.warning("Rejected request with unknown token")
            raise UnauthorizedError()
        return user
