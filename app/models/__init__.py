from .base import Base, BaseModel
from .user import User
from .relationship import Relationship

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "Relationship",
]
