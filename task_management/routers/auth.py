from typing import Optional
from fastapi import APIRouter, Depends, status

from ..core.auth import get_auth_service, get_current_user, get_optional_user
from ..models import User
from ..schemas.user import UserCreate, UserOut, LoginRequest, Token
from ..services.auth import AuthService
from ..services.users import UserService
from .users import get_user_service

router = APIRouter()


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(
    user_in: UserCreate,
    caller: Optional[User] = Depends(get_optional_user),
    users: UserService = Depends(get_user_service),
):
    """Create an account"""
    return users.sign_up(caller, user_in)


@router.post("/login", response_model=Token)
def login(credentials: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Exchange email and password for a bearer token"""
    token, _ = auth.login(credentials.email, credentials.password)
    return Token(
        access_token=token,
        expires_in=int(auth.token_lifetime.total_seconds()),
    )


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user
