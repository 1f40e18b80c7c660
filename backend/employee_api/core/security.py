# backend/employee_api/core/security.py

from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Protocol

from jose import jwt, JWTError
from passlib.context import CryptContext

from employee_api.core.errors import InvalidOrExpiredToken

# ONLY pbkdf2_sha256 (no bcrypt anywhere)
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """Burn the same time as a real verify, for lookups that found no account."""
    pwd_context.dummy_verify()


class TokenSigner(Protocol):
    def issue(self, claims: dict[str, Any], now: Optional[datetime] = None) -> str: ...

    def verify(self, token: str) -> dict[str, Any]: ...


class JWTTokenSigner:
    """HMAC-signed JWTs. Holds no state besides the key: any holder of the
    secret can mint and verify tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_minutes: int = 60 * 24 * 7):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expires_minutes)

    def issue(self, claims: dict[str, Any], now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        to_encode = dict(claims)
        to_encode.update({"iat": issued_at, "exp": issued_at + self.expires_delta})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidOrExpiredToken() from e
