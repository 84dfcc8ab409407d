from typing import List, Tuple
from loguru import logger
from sqlalchemy.exc import IntegrityError

from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..views.user import UserCreate, UserUpdate
from ..core.exceptions import DuplicateUsernameError, ForbiddenError, UserNotFoundError, ValidationError
from ..core.security import hash_password


class UserService:
    def __init__(self, user_repo: UserRepository, page_size: int = 5):
        self.user_repo = user_repo
        self.page_size = page_size

    async def register(self, data: UserCreate) -> User:
        logger.info(f"Registration attempt for username={data.username!r}")
        if await self.user_repo.get_by_username(data.username):
            logger.warning(f"Registration failed: username={data.username!r} already exists")
            raise DuplicateUsernameError()

        fields = data.model_dump(exclude={"password"})
        try:
            user = await self.user_repo.create(password=hash_password(data.password), **fields)
        except IntegrityError:
            # A concurrent registration took the username after the lookup
            logger.warning(f"Registration failed: username={data.username!r} hit the unique constraint")
            raise DuplicateUsernameError()
        logger.info(f"User {user.id} registered")
        return user

    async def get_user(self, user_id: int) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            logger.warning(f"User {user_id} not found")
            raise UserNotFoundError()
        return user

    async def list_users(self, page: int) -> Tuple[List[User], int]:
        if page < 1:
            raise ValidationError("page number is not valid or missing from request")
        users, total = await self.user_repo.paginate(page, self.page_size)
        logger.debug(f"Page {page} of users: {len(users)} of {total}")
        return users, total

    async def search_by_username(self, keyword: str) -> List[User]:
        users = await self.user_repo.search_by_username(keyword)
        logger.info(f"Username search for {keyword!r} returned {len(users)} users")
        return users

    async def _get_owned_user(self, caller: User, user_id: int) -> User:
        user = await self.get_user(user_id)
        if user.id != caller.id:
            logger.warning(f"User {caller.id} tried to modify user {user_id}")
            raise ForbiddenError()
        return user

    async def update_user(self, caller: User, user_id: int, data: UserUpdate) -> User:
        user = await self._get_owned_user(caller, user_id)
        fields = data.model_dump(exclude={"password"})
        fields["password"] = hash_password(data.password)
        user = await self.user_repo.update(user, **fields)
        logger.info(f"User {user_id} updated")
        return user

    async def delete_user(self, caller: User, user_id: int) -> None:
        user = await self._get_owned_user(caller, user_id)
        await self.user_repo.delete(user)
        logger.warning(f"User account {user_id} deleted")
