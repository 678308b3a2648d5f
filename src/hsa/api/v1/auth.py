"""Authentication endpoints for registration, login and the current user."""

from fastapi import APIRouter, Depends, status

from hsa.api.deps import get_auth_service, get_current_user
from hsa.models.user import User
from hsa.schemas.auth import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    UserRegister,
    UserResponse,
)
from hsa.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create a user and open their HSA account with a zero balance.",
)
async def register(
    data: UserRegister,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Register a new user account.

    Raises:
        400: Validation error or password too short
        409: Email already registered
    """
    user, token = await auth_service.register(
        email=data.email,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
    )
    return AuthResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="User login",
    description="Authenticate with email and password to receive a JWT access token.",
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Authenticate user and return a token.

    Raises:
        400: Missing email or password
        401: Invalid credentials
    """
    user, token = await auth_service.login(email=data.email, password=data.password)
    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
        token=token,
    )


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    summary="Get current user",
    description="Get the profile of the user identified by the bearer token.",
)
async def get_me(current_user: User = Depends(get_current_user)) -> CurrentUserResponse:
    return CurrentUserResponse(user=UserResponse.model_validate(current_user))
