# keeptrack/core/security.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from keeptrack import config
from keeptrack.core.errors import ErrorKind, ServiceError


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=config.BCRYPT_ROUNDS
)


@dataclass(frozen=True)
class TokenPayload:
    user_id: int
    email: str


# -------------------------------
# Passwords
# -------------------------------

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


# -------------------------------
# Bearer tokens
# -------------------------------

def create_access_token(user_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issues a signed token carrying the user id (as `sub`) and email.
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(seconds=config.JWT_EXPIRES_IN))
    to_encode = {"sub": str(user_id), "email": email, "exp": expire}
    return jwt.encode(to_encode, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenPayload:
    """
    Returns the token payload. Malformed, expired, tampered and incomplete
    tokens all raise the same INVALID_TOKEN error.
    """
    credentials_exception = ServiceError(ErrorKind.INVALID_TOKEN, "Invalid token")
    try:
        payload = jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except JWTError:
        raise credentials_exception

    subject = payload.get("sub")
    email = payload.get("email")
    if subject is None or email is None:
        raise credentials_exception
    try:
        user_id = int(subject)
    except (TypeError, ValueError):
        raise credentials_exception

    return TokenPayload(user_id=user_id, email=email)
