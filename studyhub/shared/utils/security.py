"""
Security Utilities

Password hashing, JWT tokens and password-reset tokens.

Password Hashing:
=================
Uses passlib's bcrypt scheme with automatic salt generation.

JWT Tokens:
===========
Uses PyJWT. Access and refresh tokens are signed with different secrets and
carry a ``type`` claim, so one can never be used in place of the other.

Reset Tokens:
=============
Random URL-safe strings from ``secrets``. Only their SHA-256 digest is
stored; the plain token exists in the emailed link alone.

Usage:
======
    from studyhub.shared.utils.security import SecurityUtils

    hashed = SecurityUtils.hash_password("password123")
    SecurityUtils.verify_password("password123", hashed)

    token = SecurityUtils.create_access_token(
        data={"user_id": "123"},
        secret_key="secret",
        expires_delta=timedelta(minutes=15),
    )
    payload = SecurityUtils.decode_access_token(token, "secret")
"""

from datetime import datetime, timedelta, timezone
import hashlib
import secrets
from typing import Optional

import jwt
from passlib.context import CryptContext


# Password hashing configuration
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class SecurityUtils:
    """
    Security utilities for authentication.

    Provides:
    - Password hashing with bcrypt
    - JWT access/refresh token creation and validation
    - Password reset token generation and hashing
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """
        Hash password using bcrypt.

        Returns:
            Bcrypt hash string (includes salt)
        """
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
        token_type: str = ACCESS_TOKEN_TYPE,
    ) -> str:
        """
        Create a signed JWT.

        Args:
            data: Payload data to encode (e.g., user_id, email)
            secret_key: Secret key for signing
            expires_delta: Token lifetime (default: 15 minutes)
            algorithm: JWT algorithm (default: HS256)
            token_type: Value of the ``type`` claim

        Returns:
            Encoded JWT token string
        """
        to_encode = data.copy()
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=15))

        # Standard claims; jti keeps two tokens issued in the same second distinct
        to_encode.update({
            "exp": expire,
            "iat": now,
            "jti": secrets.token_hex(8),
            "type": token_type,
        })

        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def create_refresh_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        return SecurityUtils.create_access_token(
            data,
            secret_key,
            expires_delta=expires_delta or timedelta(days=7),
            algorithm=algorithm,
            token_type=REFRESH_TOKEN_TYPE,
        )

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
        token_type: str = ACCESS_TOKEN_TYPE,
    ) -> dict:
        """
        Decode and verify a JWT.

        Raises:
            ValueError: If the token is expired, invalid, or of the wrong type

        Example:
            try:
                payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
                user_id = payload["user_id"]
            except ValueError as e:
                raise AuthenticationError(str(e))
        """
        try:
            payload = jwt.decode(
                token,
                secret_key,
                algorithms=[algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")

        if payload.get("type") != token_type:
            raise ValueError("Invalid token: wrong token type")
        return payload

    # ═══════════════════════════════════════════════════════════════════════════
    # RESET TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def generate_reset_token() -> str:
        return secrets.token_urlsafe(32)

    @staticmethod
    def hash_token(token: str) -> str:
        """SHA-256 hex digest, the stored form of a reset token."""
        return hashlib.sha256(token.encode("utf-8")).hexdigest()
