"""
Authentication Service

Business logic for registration, login, token refresh and password reset.

Token Lifecycle:
================
    register / login ──► access token (short) + refresh token (long)
                                │
    POST /auth/refresh ─────────┘  only the refresh token stored on the user
                                   is accepted; each refresh rotates it
    POST /auth/logout  ──► stored refresh token cleared

Password Reset:
===============
    forgot_password(email)
        ├── unknown email       → logged, nothing sent
        ├── known email         → token hash + expiry stored, link emailed
        └── delivery failure    → logged
      The caller always sees success, so the endpoint never reveals
      whether an account exists.

    reset_password(token, new_password)
        └── hash(token) matches an unexpired reset → password replaced,
            reset token and refresh token cleared

Usage:
======
    from studyhub.shared.services.auth_service import AuthService

    service = AuthService(db)
    user, tokens = await service.register_user("Asha Karki", email, password)
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.config.settings import settings
from studyhub.shared.core.exceptions import (
    AuthenticationError,
    BusinessRuleError,
    DuplicateResourceError,
)
from studyhub.shared.core.logging import logger
from studyhub.shared.models.base import utcnow
from studyhub.shared.models.user import User
from studyhub.shared.repositories.user_repository import UserRepository
from studyhub.shared.services.email_service import EmailService
from studyhub.shared.utils.security import REFRESH_TOKEN_TYPE, SecurityUtils


@dataclass
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"


class AuthService:
    """
    Service for authentication-related business logic.

    Attributes:
        session: Database session
        repo: UserRepository instance
        email: EmailService used for reset links
    """

    def __init__(self, session: AsyncSession, email_service: Optional[EmailService] = None) -> None:
        self.session = session
        self.repo = UserRepository(session)
        self.email = email_service or EmailService()

    # ═══════════════════════════════════════════════════════════════════════════
    # REGISTRATION & LOGIN
    # ═══════════════════════════════════════════════════════════════════════════

    async def register_user(
        self,
        full_name: str,
        email: str,
        password: str,
    ) -> Tuple[User, TokenPair]:
        """
        Register a new user.

        Raises:
            DuplicateResourceError: If email already registered
        """
        if await self.repo.email_exists(email):
            raise DuplicateResourceError("Email already registered")

        user = await self.repo.create(
            full_name=full_name.strip(),
            email=email.lower(),
            password_hash=SecurityUtils.hash_password(password),
        )
        tokens = await self._issue_tokens(user)

        logger.info("User registered", user_id=str(user.id))
        return user, tokens

    async def login_user(self, email: str, password: str) -> Tuple[User, TokenPair]:
        """
        Authenticate user and issue tokens.

        Raises:
            AuthenticationError: If credentials are invalid
        """
        user = await self.repo.get_by_email(email)
        if not user or not SecurityUtils.verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        user.last_login_at = utcnow()
        tokens = await self._issue_tokens(user)

        logger.info("User logged in", user_id=str(user.id))
        return user, tokens

    # ═══════════════════════════════════════════════════════════════════════════
    # TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    async def refresh_tokens(self, refresh_token: str) -> Tuple[User, TokenPair]:
        """
        Exchange the current refresh token for a new pair.

        Raises:
            AuthenticationError: Token invalid, expired, or already rotated
        """
        try:
            payload = SecurityUtils.decode_access_token(
                refresh_token,
                settings.REFRESH_SECRET_KEY,
                algorithm=settings.JWT_ALGORITHM,
                token_type=REFRESH_TOKEN_TYPE,
            )
            user_id = UUID(payload["user_id"])
        except (ValueError, KeyError) as e:
            raise AuthenticationError(f"Invalid refresh token: {e}")

        user = await self.repo.get(user_id)
        if user is None or user.refresh_token != refresh_token:
            raise AuthenticationError("Invalid refresh token")

        return user, await self._issue_tokens(user)

    async def logout_user(self, user: User) -> None:
        user.refresh_token = None
        await self.session.flush()
        logger.info("User logged out", user_id=str(user.id))

    async def _issue_tokens(self, user: User) -> TokenPair:
        claims = {"user_id": str(user.id), "email": user.email}
        access_token = SecurityUtils.create_access_token(
            data=claims,
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )
        refresh_token = SecurityUtils.create_refresh_token(
            data=claims,
            secret_key=settings.REFRESH_SECRET_KEY,
            expires_delta=timedelta(minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )

        user.refresh_token = refresh_token
        await self.session.flush()

        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD RESET
    # ═══════════════════════════════════════════════════════════════════════════

    async def forgot_password(self, email: str) -> None:
        """Start a password reset. Never raises for unknown emails or mail failures."""
        user = await self.repo.get_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        token = SecurityUtils.generate_reset_token()
        user.password_reset_token_hash = SecurityUtils.hash_token(token)
        user.password_reset_expires_at = utcnow() + timedelta(
            minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES
        )
        await self.session.flush()

        try:
            await self.email.send_password_reset(user.email, token)
        except Exception:
            logger.exception("Password reset email failed", user_id=str(user.id))
            return

        logger.info("Password reset requested", user_id=str(user.id))

    async def reset_password(self, token: str, new_password: str) -> User:
        """
        Complete a password reset.

        Raises:
            BusinessRuleError: Token unknown or expired
        """
        user = await self.repo.get_by_reset_token_hash(SecurityUtils.hash_token(token))
        expires_at = user.password_reset_expires_at if user else None
        if expires_at is not None and expires_at.tzinfo is None:
            # SQLite returns naive datetimes
            expires_at = expires_at.replace(tzinfo=utcnow().tzinfo)

        if user is None or expires_at is None or expires_at < utcnow():
            raise BusinessRuleError("Invalid or expired reset token")

        user.password_hash = SecurityUtils.hash_password(new_password)
        user.password_reset_token_hash = None
        user.password_reset_expires_at = None
        user.refresh_token = None
        await self.session.flush()

        logger.info("Password reset completed", user_id=str(user.id))
        return user
