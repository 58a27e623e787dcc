import os
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED

JWT_SECRET = os.getenv("JWT_SECRET", "changeme")
JWT_ALGORITHM = "HS256"
TOKEN_TTL_SECONDS = int(os.getenv("TOKEN_TTL_SECONDS", str(24 * 60 * 60)))
TOKEN_COOKIE = "token"


@dataclass(frozen=True)
class AuthenticatedUser:
    username: str
    interchange: Optional[str]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(username: str, interchange: str, expires_in: int = TOKEN_TTL_SECONDS) -> str:
    payload = {
        "username": username,
        "interchange": interchange,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> AuthenticatedUser:
    claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    return AuthenticatedUser(username=claims.get("username"), interchange=claims.get("interchange"))


def extract_token(request: Request) -> Optional[str]:
    """Bearer header first, then the login cookie."""
    header = request.headers.get("Authorization")
    if header:
        parts = header.split()
        if len(parts) == 2 and parts[0] == "Bearer":
            return parts[1]
    return request.cookies.get(TOKEN_COOKIE)


def get_current_user(request: Request) -> AuthenticatedUser:
    token = extract_token(request)
    if not token:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing or invalid Authorization header.")

    try:
        return decode_access_token(token)
    except jwt.InvalidTokenError as e:
        logging.warning(f"Rejected token: {e}")
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid or expired token.")


def home_interchange(user: AuthenticatedUser = Depends(get_current_user)) -> Optional[str]:
    return user.interchange
