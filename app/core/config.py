from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "User Graph API"
    DATABASE_URL: str

    LOG_LEVEL: str = "INFO"
    CREATE_TABLES_ON_STARTUP: bool = True

    # Page size for GET /users?page=N
    USERS_PAGE_SIZE: int = 5

    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    class Config:
        env_file = ".env"

settings = Settings()
