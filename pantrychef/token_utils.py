import jwt
from datetime import datetime, timedelta, timezone
from typing import Dict, Any

from pantrychef.config import SECRET_KEY

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 15
REFRESH_TOKEN_EXPIRE_DAYS = 7


def _encode(data: dict, expire: datetime, token_type: str) -> Dict[str, Any]:
    to_encode = data.copy()
    to_encode.update({"exp": expire, "type": token_type})
    token = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return {
        "token": token,
        "expires_at": expire.isoformat()
    }


def create_access_token(data: dict, expires_delta: timedelta = None) -> Dict[str, Any]:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    return _encode(data, expire, "access")


def create_refresh_token(data: dict, expires_delta: timedelta = None) -> Dict[str, Any]:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))
    return _encode(data, expire, "refresh")


def decode_token(token: str, expected_type: str = "access") -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise ValueError("Token expired")
    except jwt.InvalidTokenError:
        raise ValueError("Invalid token")
    if payload.get("type") != expected_type:
        raise ValueError("Invalid token")
    return payload
