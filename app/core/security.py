import uuid
from typing import Optional
from passlib.context import CryptContext

# argon2 has no 72-byte password limit, unlike bcrypt
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

# Password hashing

def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

# Session tokens

def issue_token() -> str:
    """Opaque session token; carries no claims and never expires on its own."""
    return str(uuid.uuid4())


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    The Authorization header carries the raw token. A "Bearer " prefix is
    tolerated but not required.
    """
    if not authorization:
        return None
    token = authorization.strip()
    scheme, _, value = token.partition(" ")
    if scheme.lower() == "bearer":
        token = value.strip()
    return token or None
