from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from sqlalchemy.orm import Session
from sqlalchemy import Select

ModelType = TypeVar("ModelType")

# Primary keys are INTEGER columns (int4 on Postgres)
MAX_ID = 2**31 - 1


def in_id_range(id: int) -> bool:
    """Ids outside the key range cannot exist, and the drivers reject them as parameters."""
    return 1 <= id <= MAX_ID


class BaseRepository(ABC, Generic[ModelType]):
    def __init__(self, db: Session):
        self.db = db

    async def _first(self, stmt: Select) -> Optional[ModelType]:
        result = await self.db.execute(stmt)
        return result.scalars().first()

    @abstractmethod
    async def create(self, **kwargs) -> ModelType:
        pass

    @abstractmethod
    async def get_by_id(self, id: int) -> Optional[ModelType]:
        pass
