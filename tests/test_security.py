import uuid

from app.core.security import extract_token, hash_password, issue_token, verify_password


def test_password_round_trip():
    hashed = hash_password("password123")
    assert hashed != "password123"
    assert verify_password("password123", hashed)
    assert not verify_password("wrongpassword", hashed)


def test_tokens_are_unique_uuids():
    tokens = {issue_token() for _ in range(100)}
    assert len(tokens) == 100
    for token in tokens:
        uuid.UUID(token)


def test_extract_token_accepts_raw_and_bearer_values():
    assert extract_token("abc") == "abc"
    assert extract_token("Bearer abc") == "abc"
    assert extract_token("  abc  ") == "abc"
    assert extract_token("") is None
    assert extract_token(None) is None
    assert extract_token("Bearer ") is None
