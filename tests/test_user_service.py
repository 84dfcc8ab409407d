import pytest
from sqlalchemy import func, select

from app.core.exceptions import DuplicateUsernameError, NotFoundError, SelfActionError, UserNotFoundError
from app.models.user import User
from app.repositories.base_repository import MAX_ID
from app.repositories.relationship_repository import RelationshipRepository
from app.repositories.user_repository import UserRepository
from app.services.user_service import UserService
from app.views.user import UserCreate


def _registration(username):
    return UserCreate(
        name="Racer",
        username=username,
        email=f"{username}@example.com",
        password="password123",
        address="Racer address",
        description="Racer description",
        latitude=-6.2087634,
        longitude=106.845599,
    )


@pytest.fixture
def service(db):
    return UserService(UserRepository(db))


async def test_register_loses_the_race_for_a_username(service, db, make_user, monkeypatch):
    await make_user("racer")

    # The lookup misses the row another request has just committed
    async def not_found(username):
        return None

    monkeypatch.setattr(service.user_repo, "get_by_username", not_found)

    with pytest.raises(DuplicateUsernameError):
        await service.register(_registration("racer"))

    # The failed insert was rolled back and the session is still usable
    count = await db.scalar(select(func.count()).select_from(User).filter(User.username == "racer"))
    assert count == 1


async def test_register_after_a_lost_race_can_still_succeed(service, make_user, monkeypatch):
    await make_user("racer")
    lookup = service.user_repo.get_by_username

    async def not_found(username):
        return None

    monkeypatch.setattr(service.user_repo, "get_by_username", not_found)
    with pytest.raises(DuplicateUsernameError):
        await service.register(_registration("racer"))
    monkeypatch.setattr(service.user_repo, "get_by_username", lookup)

    user = await service.register(_registration("racer2"))

    assert user.id is not None
    assert user.username == "racer2"


@pytest.mark.parametrize("user_id", [0, -1, MAX_ID + 1, 99999999999999999999])
async def test_get_user_outside_the_id_range_is_not_found(service, user_id):
    with pytest.raises(UserNotFoundError):
        await service.get_user(user_id)


async def test_repository_lookups_outside_the_id_range(db):
    assert await UserRepository(db).get_by_id(99999999999999999999) is None
    assert await RelationshipRepository(db).get_by_id(99999999999999999999) is None
    assert not await RelationshipRepository(db).exists(1, 99999999999999999999)


def test_missing_user_and_self_action_are_unprocessable():
    assert NotFoundError.status_code == 422
    assert UserNotFoundError().status_code == 422
    assert SelfActionError.status_code == 422
    assert UserNotFoundError().errors == {"message": ["cant found any user for this id"]}
