import asyncio
import math
import os
import random
import sys
from datetime import date, timedelta
from dotenv import load_dotenv
from loguru import logger

# Add project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Load environment variables from .env file before the settings are read
load_dotenv()

from sqlalchemy import delete

from app.core.security import hash_password
from app.database.session import AsyncSessionLocal, init_models
from app.models.relationship import Relationship
from app.models.user import User

# Center point (Jakarta)
BASE_LAT = -6.2087634
BASE_LNG = 106.845599

# Ring radius in km -> offset in degrees (1 degree ~ 111 km)
RINGS = {
    10: 0.09009,
    20: 0.18018,
    30: 0.27027,
    50: 0.45045,
}
USERS_PER_RING = 2
FOLLOWS_PER_USER = 3
FOLLOWING_USERS = 10


def _random_dob() -> date:
    return date.today() - timedelta(days=365 * random.randint(25, 40) + random.randint(1, 365))


def build_users() -> list:
    users = [
        User(
            username="user_center",
            name="Center User",
            email="user1@example.com",
            password=hash_password("password1"),
            dob=_random_dob(),
            address="Central Business District",
            description="Primary user at center location",
            latitude=BASE_LAT,
            longitude=BASE_LNG,
        )
    ]

    counter = 2
    for km, degrees in RINGS.items():
        for i in range(1, USERS_PER_RING + 1):
            angle = math.radians(random.randint(0, 359))
            users.append(User(
                username=f"user_{km}km_{i}",
                name=f"User {counter}",
                email=f"user{counter}@example.com",
                password=hash_password(f"password{counter}"),
                dob=_random_dob(),
                address=f"{km}km Radius Area {i}",
                description=f"Located {km}km from center",
                latitude=BASE_LAT + degrees * math.cos(angle),
                longitude=BASE_LNG + degrees * math.sin(angle),
            ))
            counter += 1

    users.append(User(
        username="user_center2",
        name="Center User 2",
        email=f"user{counter}@example.com",
        password=hash_password(f"password{counter}"),
        dob=_random_dob(),
        address="Central Plaza",
        description="Additional user at center location",
        latitude=BASE_LAT,
        longitude=BASE_LNG,
    ))
    return users


def build_relationships(user_ids: list) -> list:
    """
    Each of the first users follows a few random others. Edges are mutual, so
    every chosen pair is stored in both directions exactly once.
    """
    pairs = set()
    for follower_id in user_ids[:FOLLOWING_USERS]:
        others = [user_id for user_id in user_ids if user_id != follower_id]
        for followee_id in random.sample(others, FOLLOWS_PER_USER):
            pairs.add((follower_id, followee_id))
            pairs.add((followee_id, follower_id))
    return [Relationship(follower_id=a, followee_id=b) for a, b in sorted(pairs)]


async def seed():
    logger.info("Starting seeding process...")
    await init_models()

    async with AsyncSessionLocal() as session:
        logger.info("Clearing existing users and relationships...")
        await session.execute(delete(Relationship))
        await session.execute(delete(User))
        await session.commit()

        users = build_users()
        session.add_all(users)
        await session.commit()
        logger.info(f"Inserted {len(users)} users around ({BASE_LAT}, {BASE_LNG})")

        relationships = build_relationships([user.id for user in users])
        session.add_all(relationships)
        await session.commit()
        logger.success(f"Inserted {len(relationships)} relationship rows ({len(relationships) // 2} mutual pairs)")


if __name__ == "__main__":
    logger.add("logs/seeding.log", rotation="500 MB")
    asyncio.run(seed())
