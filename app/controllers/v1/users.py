import math
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, status

from ...views.user import (
    UserCreate,
    UserUpdate,
    UserLogin,
    UserEnvelope,
    UserLoginEnvelope,
    UserListEnvelope,
    UserPageEnvelope,
    UserResponse,
    NearbyFriendResponse,
)
from ...views.message import MessageEnvelope
from ...views.relationship import FollowingStatusEnvelope
from ...models.user import User
from ...services.auth_service import AuthService
from ...services.user_service import UserService
from ...services.relationship_service import RelationshipService
from ...core.exceptions import ValidationError
from ...core.dependencies import (
    get_auth_service,
    get_user_service,
    get_relationship_service,
    get_current_user,
)


router = APIRouter()

INVALID_PAGE_MESSAGE = "page number is not valid or missing from request"
# Keeps the row offset inside a 64-bit integer
MAX_PAGE = 2**31 - 1


def _parse_page(page: Optional[str]) -> int:
    try:
        value = int(page)
    except (TypeError, ValueError):
        raise ValidationError(INVALID_PAGE_MESSAGE)
    if value < 1 or value > MAX_PAGE:
        raise ValidationError(INVALID_PAGE_MESSAGE)
    return value


@router.post("", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def register(
    user: UserCreate,
    service: UserService = Depends(get_user_service)
):
    return {"data": await service.register(user)}

@router.post("/login", response_model=UserLoginEnvelope)
async def login(
    credentials: UserLogin,
    auth_service: AuthService = Depends(get_auth_service)
):
    return {"data": await auth_service.login(credentials.username, credentials.password)}

@router.post("/logout", response_model=MessageEnvelope)
async def logout(
    current_user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    await auth_service.logout(current_user)
    return {"data": {"message": "Successfully logged out"}}

@router.get("", response_model=UserPageEnvelope)
async def list_users(
    request: Request,
    page: Optional[str] = Query(None),
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    page_number = _parse_page(page)
    users, total = await service.list_users(page_number)
    last_page = max(1, math.ceil(total / service.page_size))

    def page_url(number: int) -> str:
        return str(request.url.include_query_params(page=number))

    return {
        "data": users,
        "links": {
            "first": page_url(1),
            "last": page_url(last_page),
            "prev": page_url(page_number - 1) if page_number > 1 else None,
            "next": page_url(page_number + 1) if page_number < last_page else None,
        },
        "meta": {
            "current_page": page_number,
            "last_page": last_page,
            "per_page": service.page_size,
            "total": total,
            "path": str(request.url.remove_query_params("page")),
        },
    }

@router.get("/detail/{user_id}", response_model=UserEnvelope)
async def get_user_detail(
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return {"data": await service.get_user(user_id)}

@router.get("/current", response_model=UserEnvelope)
async def get_current(current_user: User = Depends(get_current_user)):
    return {"data": current_user}

@router.get("/followers", response_model=UserListEnvelope)
async def get_followers(
    current_user: User = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service)
):
    return {"data": await service.list_followers(current_user)}

@router.get("/following", response_model=UserListEnvelope)
async def get_following(
    current_user: User = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service)
):
    return {"data": await service.list_following(current_user)}

@router.get("/is-following/{user_id}", response_model=FollowingStatusEnvelope)
async def is_following(
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service)
):
    return {"data": {"is_following": await service.is_following(current_user.id, user_id)}}

@router.get("/find-by-username", response_model=UserListEnvelope)
async def find_by_username(
    keyword: str = Query(..., alias="username-keyword", min_length=1, max_length=100),
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return {"data": await service.search_by_username(keyword)}

@router.get("/find-nearby-friends", response_model=List[NearbyFriendResponse])
async def find_nearby_friends(
    radius: float = Query(..., ge=0),
    current_user: User = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service)
):
    """Nearest first. Unlike the other endpoints the body is a bare array."""
    nearby = await service.find_nearby_friends(current_user, radius)
    return [
        NearbyFriendResponse(**UserResponse.model_validate(friend).model_dump(), distance_km=distance)
        for friend, distance in nearby
    ]

@router.post("/follow/{user_id}", response_model=MessageEnvelope, status_code=status.HTTP_201_CREATED)
async def follow(
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service)
):
    await service.follow(current_user, user_id)
    return {"data": {"message": "Successfully followed user"}}

@router.delete("/unfollow/{user_id}", response_model=MessageEnvelope)
async def unfollow(
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: RelationshipService = Depends(get_relationship_service)
):
    await service.unfollow(current_user, user_id)
    return {"data": {"message": "Successfully unfollowed user"}}

@router.put("/{user_id}", response_model=UserEnvelope)
async def update_user(
    user_id: int,
    user_update: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    return {"data": await service.update_user(current_user, user_id, user_update)}

@router.delete("/{user_id}", response_model=MessageEnvelope)
async def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service)
):
    await service.delete_user(current_user, user_id)
    return {"data": {"message": "User account deleted successfully"}}
