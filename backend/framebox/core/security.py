"""
Sign-in tokens and the single-operator credential check
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext

from framebox.core.config import settings

# Password hashing
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Bearer token scheme
bearer_scheme = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and validate a JWT token"""
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


@dataclass(frozen=True)
class AuthSession:
    """The signed-in operator, handed to protected routes"""
    email: str
    expires_at: Optional[datetime] = None


class CredentialVerifier:
    """Checks a login attempt. Subclass to plug in another identity source."""

    def verify(self, email: str, password: str) -> bool:
        raise NotImplementedError


class HashedCredentialVerifier(CredentialVerifier):
    """Accepts one account whose password is stored as a passlib hash"""

    def __init__(self, email: str, password_hash: Optional[str]):
        self.email = email
        self.password_hash = password_hash

    def verify(self, email: str, password: str) -> bool:
        if not self.password_hash:
            return False
        if (email or "").strip().lower() != self.email.strip().lower():
            return False
        return verify_password(password, self.password_hash)


def get_credential_verifier() -> CredentialVerifier:
    """Dependency returning the configured verifier"""
    return HashedCredentialVerifier(settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD_HASH)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_session(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> AuthSession:
    """
    Resolve the signed-in operator from the bearer token,
    falling back to an `access_token` cookie.
    """
    token = credentials.credentials if credentials else request.cookies.get("access_token")
    if not token:
        raise _unauthorized("Not authenticated")

    claims = decode_access_token(token)
    if claims is None:
        raise _unauthorized("Invalid or expired token")
    if not claims.get("sub"):
        raise _unauthorized("Invalid token payload")

    expires_at = None
    if claims.get("exp"):
        expires_at = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
    return AuthSession(email=claims["sub"], expires_at=expires_at)
