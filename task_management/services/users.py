import logging
from typing import List, Optional

from ..core.exceptions import ConflictError
from ..models import User, UserRole
from ..schemas.user import UserCreate, UserUpdate
from ..utils.security import get_password_hash
from .base import BaseService

logger = logging.getLogger(__name__)

ACCOUNT_FLAGS = ("role", "is_active")


class UserService(BaseService):
    """User directory"""

    def find_by_email(self, email: str):
        return self.db.query(User).filter(User.email == email.lower()).first()

    def register(self, user_in: UserCreate) -> User:
        email = user_in.email.lower()
        if self.find_by_email(email):
            raise ConflictError("Email already registered")

        user = User(
            email=email,
            hashed_password=get_password_hash(user_in.password),
            first_name=user_in.first_name,
            last_name=user_in.last_name,
            role=user_in.role.value,
        )
        self.db.add(user)
        self.commit(user, conflict_message="Email already registered")
        logger.info(f"Registered user {user.id} ({user.email})")
        return user

    def sign_up(self, caller: Optional[User], user_in: UserCreate) -> User:
        """Public registration.

        The first administrator may register freely; after that only an
        administrator can create administrator accounts.
        """
        if user_in.role == UserRole.ADMIN and self.admin_exists():
            self.policy.require(
                caller is not None and self.policy.can_change_account_flags(caller),
                "Only administrators can register administrator accounts",
            )
        return self.register(user_in)

    def admin_exists(self) -> bool:
        return self.db.query(User.id).filter(User.role == UserRole.ADMIN.value).first() is not None

    def get(self, user_id: int) -> User:
        return self.get_or_404(User, user_id)

    def list(self, skip: int = 0, limit: int = 20) -> List[User]:
        return self.db.query(User).order_by(User.id).offset(skip).limit(limit).all()

    def update(self, caller: User, user_id: int, user_update: UserUpdate) -> User:
        user = self.get(user_id)
        self.policy.require(
            self.policy.can_update_user(caller, user),
            "You can only update your own account",
        )

        changes = user_update.model_dump(exclude_unset=True)
        if any(field in changes for field in ACCOUNT_FLAGS):
            self.policy.require(
                self.policy.can_change_account_flags(caller),
                "Only administrators can change role or active status",
            )

        for field, value in changes.items():
            if field == "role":
                value = value.value
            setattr(user, field, value)

        self.commit(user)
        return user

    def deactivate(self, caller: User, user_id: int) -> User:
        """Soft delete: the record stays so references keep resolving"""
        user = self.get(user_id)
        self.policy.require(
            self.policy.can_delete_user(caller, user),
            "You can only delete your own account",
        )
        user.is_active = False
        self.commit(user)
        logger.info(f"Deactivated user {user.id} by user {caller.id}")
        return user
