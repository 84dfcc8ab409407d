from typing import List, Optional, Tuple
from sqlalchemy import and_, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.future import select
from ..models.relationship import Relationship
from ..models.user import User
from .base_repository import BaseRepository, in_id_range

class RelationshipRepository(BaseRepository[Relationship]):
    def __init__(self, db: Session):
        super().__init__(db)

    def _edge(self, follower_id: int, followee_id: int):
        return and_(Relationship.follower_id == follower_id, Relationship.followee_id == followee_id)

    async def create(self, follower_id: int, followee_id: int) -> Relationship:
        """
        Inserts the edge in both directions and commits them together.
        Returns the follower -> followee row. On a unique-constraint violation
        nothing is written and the IntegrityError propagates.
        """
        forward = Relationship(follower_id=follower_id, followee_id=followee_id)
        backward = Relationship(follower_id=followee_id, followee_id=follower_id)
        self.db.add_all([forward, backward])
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise
        return forward

    async def get_by_id(self, id: int) -> Optional[Relationship]:
        if not in_id_range(id):
            return None
        return await self._first(select(Relationship).filter(Relationship.id == id))

    async def exists(self, follower_id: int, followee_id: int) -> bool:
        if not (in_id_range(follower_id) and in_id_range(followee_id)):
            return False
        result = await self.db.execute(
            select(Relationship.id).filter(self._edge(follower_id, followee_id)).limit(1)
        )
        return result.first() is not None

    async def delete_pair(self, follower_id: int, followee_id: int) -> Tuple[bool, bool]:
        """
        Deletes both directions in one transaction and reports which of them
        existed. The deletion is only committed when both did; otherwise it is
        rolled back and the store is left untouched.
        """
        forward = await self.db.execute(delete(Relationship).where(self._edge(follower_id, followee_id)))
        backward = await self.db.execute(delete(Relationship).where(self._edge(followee_id, follower_id)))
        existed = (forward.rowcount > 0, backward.rowcount > 0)

        if all(existed):
            await self.db.commit()
        else:
            await self.db.rollback()
        return existed

    async def get_followers(self, user_id: int) -> List[User]:
        """Users with an edge pointing at user_id, ordered by username descending."""
        result = await self.db.execute(
            select(User)
            .join(Relationship, Relationship.follower_id == User.id)
            .filter(Relationship.followee_id == user_id)
            .order_by(User.username.desc())
        )
        return result.scalars().all()

    async def get_following(self, user_id: int) -> List[User]:
        """Users that user_id has an edge to, ordered by username descending."""
        result = await self.db.execute(
            select(User)
            .join(Relationship, Relationship.followee_id == User.id)
            .filter(Relationship.follower_id == user_id)
            .order_by(User.username.desc())
        )
        return result.scalars().all()
