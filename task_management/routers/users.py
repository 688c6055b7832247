from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..core.auth import get_current_user, get_policy
from ..core.database import get_db
from ..core.pagination import Page, get_page
from ..core.permissions import AccessPolicy
from ..models import User
from ..schemas.user import UserOut, UserUpdate
from ..services.users import UserService

router = APIRouter()


def get_user_service(
    db: Session = Depends(get_db),
    policy: AccessPolicy = Depends(get_policy),
) -> UserService:
    return UserService(db, policy)


@router.get("", response_model=List[UserOut])
def list_users(
    page: Page = Depends(get_page),
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    return users.list(skip=page.skip, limit=page.limit)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    return users.get(user_id)


@router.patch("/{user_id}", response_model=UserOut)
def update_user(
    user_id: int,
    user_update: UserUpdate,
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    """Partial update; only names, avatar, role and active flag are accepted"""
    return users.update(current_user, user_id, user_update)


@router.delete("/{user_id}", response_model=UserOut)
def delete_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    """Deactivate an account"""
    return users.deactivate(current_user, user_id)
