from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.session import get_db
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..repositories.relationship_repository import RelationshipRepository
from ..services.auth_service import AuthService
from ..services.user_service import UserService
from ..services.relationship_service import RelationshipService
from .config import settings

# Repositories
def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)

def get_relationship_repository(db: AsyncSession = Depends(get_db)) -> RelationshipRepository:
    return RelationshipRepository(db)

# Services (request-scoped, sharing the request's session)
def get_auth_service(user_repo: UserRepository = Depends(get_user_repository)) -> AuthService:
    return AuthService(user_repo)

def get_user_service(user_repo: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(user_repo, page_size=settings.USERS_PAGE_SIZE)

def get_relationship_service(
    user_repo: UserRepository = Depends(get_user_repository),
    relationship_repo: RelationshipRepository = Depends(get_relationship_repository)
) -> RelationshipService:
    return RelationshipService(user_repo, relationship_repo)

# Authentication
async def get_current_user(
    authorization: Optional[str] = Header(None),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    return await auth_service.resolve_token(authorization)
