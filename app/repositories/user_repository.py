from typing import List, Optional, Tuple
from sqlalchemy import delete, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.future import select
from ..models.user import User
from ..models.relationship import Relationship
from .base_repository import BaseRepository, in_id_range

class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(db)

    async def create(self, **kwargs) -> User:
        user = User(**kwargs)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise
        await self.db.refresh(user)
        return user

    async def get_by_id(self, id: int) -> Optional[User]:
        if not in_id_range(id):
            return None
        return await self._first(select(User).filter(User.id == id))

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self._first(select(User).filter(User.username == username))

    async def get_by_token(self, token: str) -> Optional[User]:
        return await self._first(select(User).filter(User.token == token))

    async def search_by_username(self, keyword: str) -> List[User]:
        """Case-insensitive substring match, ordered by username descending."""
        result = await self.db.execute(
            select(User)
            .filter(func.lower(User.username).contains(keyword.lower(), autoescape=True))
            .order_by(User.username.desc())
        )
        return result.scalars().all()

    async def paginate(self, page: int, page_size: int) -> Tuple[List[User], int]:
        total = await self.db.scalar(select(func.count()).select_from(User))
        result = await self.db.execute(
            select(User)
            .order_by(User.username.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return result.scalars().all(), total or 0

    async def update(self, user: User, **fields) -> User:
        for key, value in fields.items():
            setattr(user, key, value)
        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def set_token(self, user: User, token: Optional[str]) -> User:
        return await self.update(user, token=token)

    async def delete(self, user: User) -> None:
        # Relationship rows go in the same transaction, whichever side the user is on
        await self.db.execute(
            delete(Relationship).where(
                or_(Relationship.follower_id == user.id, Relationship.followee_id == user.id)
            )
        )
        await self.db.delete(user)
        await self.db.commit()
