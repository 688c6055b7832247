import logging
from datetime import timedelta
from typing import Tuple
from sqlalchemy.orm import Session

from ..core.config import Settings
from ..core.exceptions import AuthenticationError
from ..models import User
from ..utils.dates import utcnow
from ..utils.security import verify_password, create_access_token, decode_token

logger = logging.getLogger(__name__)


class AuthService:
    """Issues and validates session tokens."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    @property
    def token_lifetime(self) -> timedelta:
        return timedelta(minutes=self.settings.access_token_expire_minutes)

    def login(self, email: str, password: str) -> Tuple[str, User]:
        user = self.db.query(User).filter(User.email == email.lower()).first()
        if not user or not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login attempt for {email}")
            raise AuthenticationError("Incorrect email or password")
        if not user.is_active:
            logger.warning(f"Login attempt for inactive account {user.id}")
            raise AuthenticationError("Account is inactive")

        user.last_login = utcnow()
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)

        token = create_access_token(
            {"sub": str(user.id), "role": user.role},
            self.settings.secret_key,
            algorithm=self.settings.algorithm,
            expires_delta=self.token_lifetime,
        )
        logger.info(f"User {user.id} logged in")
        return token, user

    def authenticate(self, token: str) -> User:
        """Resolve a bearer token to an active user"""
        payload = decode_token(token, self.settings.secret_key, self.settings.algorithm)
        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            raise AuthenticationError("Could not validate credentials")

        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise AuthenticationError("User not found")
        if not user.is_active:
            raise AuthenticationError("Account is inactive")
        return user
