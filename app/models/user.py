from sqlalchemy import Column, String, Float, Date, CheckConstraint
from .base import BaseModel

class User(BaseModel):
    __tablename__ = "users"
    __table_args__ = (
        # Coordinates are a pair: both set or both unset
        CheckConstraint("(latitude IS NULL) = (longitude IS NULL)", name="ck_users_location_pair"),
    )

    username = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False)
    password = Column(String(255), nullable=False)
    dob = Column(Date, nullable=True)
    address = Column(String(200), nullable=True)
    description = Column(String(200), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # Single active session; a new login overwrites it
    token = Column(String(100), unique=True, nullable=True, index=True)

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
