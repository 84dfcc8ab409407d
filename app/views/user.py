from datetime import date
from typing import List, Optional
from pydantic import BaseModel, Field

class UserProfile(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=100)
    dob: Optional[date] = None
    address: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=200)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

class UserCreate(UserProfile):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=100)

class UserUpdate(UserProfile):
    # Every profile field must be sent again on update
    password: str = Field(..., min_length=1, max_length=100)
    dob: date

class UserLogin(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=100)

class UserResponse(BaseModel):
    id: int
    name: str
    username: str
    email: str
    dob: Optional[date] = None
    address: Optional[str] = None
    description: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    class Config:
        from_attributes = True

class UserLoginResponse(UserResponse):
    token: str

class NearbyFriendResponse(UserResponse):
    distance_km: float

class UserEnvelope(BaseModel):
    data: UserResponse

class UserLoginEnvelope(BaseModel):
    data: UserLoginResponse

class UserListEnvelope(BaseModel):
    data: List[UserResponse]

class PaginationLinks(BaseModel):
    first: str
    last: str
    prev: Optional[str] = None
    next: Optional[str] = None

class PaginationMeta(BaseModel):
    current_page: int
    last_page: int
    per_page: int
    total: int
    path: str

class UserPageEnvelope(BaseModel):
    data: List[UserResponse]
    links: PaginationLinks
    meta: PaginationMeta
