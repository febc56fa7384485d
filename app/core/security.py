from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from app.config import settings
from app.core.exceptions import AuthException

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)

ADMIN_ROLE = "admin"

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def authenticate_admin(email: str, password: str) -> bool:
    if not settings.ADMIN_PASSWORD_HASH:
        logger.warning("⚠️ ADMIN_PASSWORD_HASH is not set, admin login disabled")
        return False
    if email.strip().lower() != settings.ADMIN_EMAIL.lower():
        return False
    return verify_password(password, settings.ADMIN_PASSWORD_HASH)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})

    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return encoded_jwt

def verify_token(token: str):
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload
    except JWTError:
        return None

def get_current_admin(token: Optional[str] = Depends(oauth2_scheme)) -> dict:
    """Gate for approval and block management routes."""
    if token is None:
        raise AuthException("Not authenticated")

    payload = verify_token(token)
    if payload is None or payload.get("rol") != ADMIN_ROLE or not payload.get("sub"):
        raise AuthException("Could not validate credentials")

    return {"email": payload["sub"], "rol": payload["rol"]}
