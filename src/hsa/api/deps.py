"""FastAPI dependency injection for services, user identity and database."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from hsa.core.exceptions import AuthError, NotFoundError
from hsa.core.security import get_user_id_from_token
from hsa.db.session import get_db
from hsa.models.user import User
from hsa.repositories.account import AccountRepository
from hsa.repositories.user import UserRepository
from hsa.services.account import AccountService
from hsa.services.auth import AuthService
from hsa.services.card import CardService
from hsa.services.transaction import TransactionService

# Bearer token scheme; auto_error off so a missing header maps to AuthError
security = HTTPBearer(auto_error=False)

# Demo identity: endpoints take the user id as a query parameter.
UserIdParam = Annotated[UUID, Query(alias="userId", description="User ID")]


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    return UserRepository(db)


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        user_repo: User repository

    Returns:
        AuthService instance sharing the repository's session
    """
    return AuthService(user_repo, AccountRepository(user_repo.db))


async def get_account_service(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db)


async def get_card_service(db: AsyncSession = Depends(get_db)) -> CardService:
    return CardService(db)


async def get_transaction_service(db: AsyncSession = Depends(get_db)) -> TransactionService:
    return TransactionService(db)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """
    Extract and validate user from JWT token.

    Raises:
        AuthError: If token is missing, invalid, expired, or user not found
    """
    if credentials is None:
        raise AuthError("AUTH_002")

    try:
        user_id = get_user_id_from_token(credentials.credentials)
    except (JWTError, ValueError) as e:
        raise AuthError("AUTH_002") from e

    try:
        return await auth_service.get_current_user(user_id)
    except NotFoundError as e:
        raise AuthError("AUTH_002") from e
