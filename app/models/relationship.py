from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint, CheckConstraint
from .base import BaseModel

class Relationship(BaseModel):
    """
    A directed follow edge. Edges are always written and removed in mutual
    pairs, so (a -> b) exists exactly when (b -> a) does.
    """
    __tablename__ = "relationships"
    __table_args__ = (
        UniqueConstraint("follower_id", "followee_id", name="uq_relationships_pair"),
        CheckConstraint("follower_id <> followee_id", name="ck_relationships_not_self"),
    )

    follower_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    followee_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    def __repr__(self):
        return f"<Relationship(follower_id={self.follower_id}, followee_id={self.followee_id})>"
