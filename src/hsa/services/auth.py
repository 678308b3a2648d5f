"""Authentication service with business logic."""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from hsa.config import settings
from hsa.core.exceptions import AuthError, ConflictError, NotFoundError, StoreError, ValidationError
from hsa.core.money import ZERO
from hsa.core.security import create_access_token, hash_password, verify_password
from hsa.models.account import HSAAccount
from hsa.models.user import User
from hsa.repositories.account import AccountRepository
from hsa.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Service for registration, login and token-based user lookup."""

    def __init__(self, user_repo: UserRepository, account_repo: AccountRepository):
        """
        Initialize authentication service.

        Args:
            user_repo: User repository for database operations
            account_repo: Account repository, used to open the HSA account
                at registration
        """
        self.user_repo = user_repo
        self.account_repo = account_repo
        self.db = user_repo.db

    async def register(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> tuple[User, str]:
        """
        Register a new user and open their HSA account with a zero balance.

        The user row and the account row are committed together.

        Returns:
            Created user and an access token

        Raises:
            ValidationError: If the password is too short
            ConflictError: If email already exists
        """
        if len(password) < settings.password_min_length:
            raise ValidationError(
                "VAL_003", details={"min_length": settings.password_min_length}
            )

        if await self.user_repo.email_exists(email):
            raise ConflictError("CONF_001")

        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
        )
        try:
            await self.user_repo.add(user)
            await self.account_repo.add(HSAAccount(user_id=user.id, balance=ZERO))
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email.
            await self.db.rollback()
            raise ConflictError("CONF_001") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("User registration failed", extra={"error_type": type(e).__name__})
            raise StoreError("DB_001") from e

        await self.db.refresh(user)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user, create_access_token(user.id)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """
        Authenticate user and return an access token.

        Raises:
            AuthError: If email is unknown or password is wrong (same error
                for both, so callers cannot tell which emails are registered)
        """
        user = await self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed")
            raise AuthError("AUTH_001")

        return user, create_access_token(user.id)

    async def get_current_user(self, user_id: UUID) -> User:
        """
        Get user by ID for authenticated requests.

        Raises:
            NotFoundError: If user no longer exists
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("NF_002")
        return user
