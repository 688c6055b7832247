"""
Authentication dependencies.
Resolves the bearer token on each request to the calling user.
"""
import logging
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from .config import Settings
from .database import get_db
from .exceptions import AuthenticationError
from .permissions import AccessPolicy
from ..models import User
from ..services.auth import AuthService

# Configure logging
logger = logging.getLogger(__name__)

# Security scheme; missing credentials are reported by get_current_user
security = HTTPBearer(
    scheme_name="Bearer Token",
    description="JWT bearer token issued by /auth/login",
    auto_error=False,
)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_policy(request: Request) -> AccessPolicy:
    return request.app.state.policy


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(db, settings)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """
    Dependency to get current authenticated user.

    Raises:
        AuthenticationError: If the token is missing, invalid or expired, or
            the account no longer exists or is inactive
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    user = auth.authenticate(credentials.credentials)
    logger.debug(f"Authenticated user: {user}")
    return user


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth: AuthService = Depends(get_auth_service),
) -> Optional[User]:
    """The authenticated caller when a token is presented, otherwise None"""
    if credentials is None:
        return None
    return auth.authenticate(credentials.credentials)
