"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for token-aware routes

Portal routes stay open; login hands out a token that the client may send
back as "Authorization: Bearer <token>".
"""

from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from careerconnect.core.config import get_settings

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractors
bearer_scheme = HTTPBearer()
optional_bearer_scheme = HTTPBearer(auto_error=False)

ROLES = ("student", "admin", "company")


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def issue_token(username: str, role: str) -> dict:
    """Token fields merged into every login response."""
    token = create_access_token(data={"sub": username, "role": role})
    return {"access_token": token, "token_type": "bearer"}


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def _principal_from_payload(payload: Optional[dict]) -> Optional[dict]:
    if not payload:
        return None
    username = payload.get("sub")
    role = payload.get("role")
    if not username or role not in ROLES:
        return None
    return {"username": username, "role": role}


async def get_current_principal(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> dict:
    """
    FastAPI dependency - Get the authenticated user behind a bearer token.

    Usage:
        @router.get("/me")
        async def route(principal: dict = Depends(get_current_principal)):
            return principal
    """
    principal = _principal_from_payload(decode_token(credentials.credentials))
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal


async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_bearer_scheme)
) -> Optional[dict]:
    """Dependency - Same as get_current_principal, but None when no valid token is sent."""
    if credentials is None:
        return None
    return _principal_from_payload(decode_token(credentials.credentials))
