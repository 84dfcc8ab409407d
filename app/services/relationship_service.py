from typing import List, Tuple
from loguru import logger
from sqlalchemy.exc import IntegrityError

from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..repositories.relationship_repository import RelationshipRepository
from ..core.exceptions import (
    AlreadyFollowingError,
    InconsistentRelationshipError,
    LocationNotSetError,
    NotFollowingError,
    SelfFollowError,
    UserNotFoundError,
    ValidationError,
)
from ..utils.geo import haversine_km


class RelationshipService:
    """
    Follow graph and nearby-friends discovery.

    Following is mutual: following someone makes both users follow each other,
    and unfollowing removes both edges.
    """

    def __init__(self, user_repo: UserRepository, relationship_repo: RelationshipRepository):
        self.user_repo = user_repo
        self.relationship_repo = relationship_repo

    async def _get_target(self, user_id: int) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            logger.warning(f"Relationship target {user_id} not found")
            raise UserNotFoundError()
        return user

    async def follow(self, follower: User, followee_id: int) -> None:
        follower_id = follower.id
        await self._get_target(followee_id)

        if follower_id == followee_id:
            logger.warning(f"User {follower_id} tried to follow themselves")
            raise SelfFollowError()

        if await self.relationship_repo.exists(follower_id, followee_id):
            logger.info(f"User {follower_id} already follows {followee_id}")
            raise AlreadyFollowingError()

        try:
            await self.relationship_repo.create(follower_id, followee_id)
        except IntegrityError:
            # A concurrent follow (or a stray one-way edge) won the insert
            logger.warning(f"Follow {follower_id} <-> {followee_id} hit the unique constraint")
            raise AlreadyFollowingError()

        logger.info(f"Follow relationship created: {follower_id} <-> {followee_id}")

    async def unfollow(self, follower: User, followee_id: int) -> None:
        follower_id = follower.id
        await self._get_target(followee_id)

        forward, backward = await self.relationship_repo.delete_pair(follower_id, followee_id)
        if forward and backward:
            logger.info(f"Follow relationship removed: {follower_id} <-> {followee_id}")
            return

        if not forward and not backward:
            logger.info(f"Unfollow failed: {follower_id} does not follow {followee_id}")
            raise NotFollowingError()

        logger.error(
            f"Inconsistent relationship between {follower_id} and {followee_id}: "
            f"{follower_id}->{followee_id} exists={forward}, {followee_id}->{follower_id} exists={backward}"
        )
        raise InconsistentRelationshipError()

    async def is_following(self, follower_id: int, followee_id: int) -> bool:
        return await self.relationship_repo.exists(follower_id, followee_id)

    async def list_followers(self, user: User) -> List[User]:
        followers = await self.relationship_repo.get_followers(user.id)
        logger.info(f"User {user.id} has {len(followers)} followers")
        return followers

    async def list_following(self, user: User) -> List[User]:
        return await self.relationship_repo.get_following(user.id)

    async def find_nearby_friends(self, user: User, radius_km: float) -> List[Tuple[User, float]]:
        """
        Users the caller follows whose distance from the caller is strictly
        less than radius_km, nearest first, paired with that distance.

        Every followed user is distance-checked; there is no spatial index.
        """
        if radius_km is None or radius_km < 0:
            raise ValidationError("radius must be a non-negative number", field="radius")
        if not user.has_location:
            logger.warning(f"Nearby friends failed: user {user.id} has no location")
            raise LocationNotSetError()

        nearby = []
        for candidate in await self.relationship_repo.get_following(user.id):
            if candidate.id == user.id or not candidate.has_location:
                continue
            distance = haversine_km(user.latitude, user.longitude, candidate.latitude, candidate.longitude)
            if distance < radius_km:
                nearby.append((candidate, distance))

        nearby.sort(key=lambda pair: pair[1])
        logger.info(f"Nearby friends for user {user.id} within {radius_km} km: {len(nearby)}")
        return nearby
