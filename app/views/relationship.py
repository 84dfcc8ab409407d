from pydantic import BaseModel

class FollowingStatus(BaseModel):
    is_following: bool

class FollowingStatusEnvelope(BaseModel):
    data: FollowingStatus
