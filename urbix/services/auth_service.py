from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger

from urbix.api.deps import get_user_directory
from urbix.core.config import settings
from urbix.core.errors import InvalidCredentials
from urbix.core.security import decode_access_token, hash_password
from urbix.models.enums import UserRole
from urbix.models.user import User
from urbix.services.user_directory import UserDirectory

security = HTTPBearer()


def register_user(
    directory: UserDirectory,
    username: str,
    password: str,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    role: UserRole = UserRole.CITIZEN,
) -> User:
    user = User(
        username=username.strip(),
        hashed_password=hash_password(password),
        email=email.strip() if email else None,
        phone=phone.strip() if phone else None,
        role=role,
    )
    return directory.append_user(user)


def authenticate_user(directory: UserDirectory, username: str, password: str) -> User:
    user = directory.find_user(username, password)
    if user is None:
        raise InvalidCredentials()
    return user


def ensure_bootstrap_admin(directory: UserDirectory) -> Optional[User]:
    """Create the configured admin account once; registration never grants admin."""
    username = settings.BOOTSTRAP_ADMIN_USERNAME
    password = settings.BOOTSTRAP_ADMIN_PASSWORD
    if not username or not password:
        return None
    existing = directory.get_user(username)
    if existing:
        return existing
    user = register_user(directory, username, password, role=UserRole.ADMIN)
    logger.info('auth.bootstrap_admin.created', username=user.username)
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    directory: UserDirectory = Depends(get_user_directory),
) -> User:
    username = decode_access_token(credentials.credentials)
    if not username:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid token')
    user = directory.get_user(username)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='User not found')
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != UserRole.ADMIN:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Admin only')
    return user
