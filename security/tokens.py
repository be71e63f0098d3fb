from datetime import datetime, timedelta, timezone

import jwt

ALGORITHM = "HS256"


def issue_token(claims: dict, secret: str, ttl_seconds: int) -> str:
    payload = dict(claims)
    payload["exp"] = datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str):
    """Returns the claims of a valid token, else None."""
    if not token:
        return None
    try:
        return jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        return None
