"""JWT token handling for the profiling server.

This module issues signed tokens carrying a user identifier and optional
role, and validates signature, expiration and asserted identity.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from src.core.config import get_settings
from src.utils.exceptions import UnauthorizedError
from src.utils.logger import get_security_logger

logger = get_security_logger()


class JWTManager:
    """Issues and validates JWT access tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expiration_minutes: int = 1440,
    ):
        """Initialize JWT manager.

        Args:
            secret_key: HMAC signing secret
            algorithm: Signing algorithm
            expiration_minutes: Token lifetime in minutes
        """
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expiration = timedelta(minutes=expiration_minutes)

    def generate_token(
        self,
        user_id: str,
        role: Optional[str] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """Create a signed token for a user.

        Args:
            user_id: Subject of the token
            role: Optional role claim
            expires_delta: Override for the configured lifetime

        Returns:
            str: Encoded JWT
        """
        issued_at = datetime.now(timezone.utc)
        claims: Dict[str, Any] = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + (expires_delta or self.expiration),
        }
        if role:
            claims["role"] = role

        token = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Created token for user: {user_id}")
        return token

    def extract_claims(self, token: str, verify_exp: bool = True) -> Dict[str, Any]:
        """Decode and verify a token.

        Args:
            token: Encoded JWT
            verify_exp: Whether an expired token is rejected

        Returns:
            Dict[str, Any]: Token claims

        Raises:
            UnauthorizedError: If the token is malformed, badly signed or expired
        """
        if not token:
            raise UnauthorizedError("Missing token")

        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": verify_exp},
            )
        except ExpiredSignatureError as e:
            raise UnauthorizedError("Token has expired", cause=e) from e
        except JWTError as e:
            raise UnauthorizedError("Invalid token", cause=e) from e

    def extract_user_id(self, token: str) -> str:
        """Get the subject of a valid token."""
        user_id = self.extract_claims(token).get("sub")
        if not user_id:
            raise UnauthorizedError("Invalid user ID in token")
        return user_id

    def extract_role(self, token: str) -> Optional[str]:
        """Get the role claim of a valid token, if any."""
        return self.extract_claims(token).get("role")

    def extract_expiration(self, token: str) -> datetime:
        """Get the expiration time of a valid token as an aware UTC datetime."""
        exp = self.extract_claims(token).get("exp")
        if exp is None:
            raise UnauthorizedError("Token has no expiration")
        return datetime.fromtimestamp(exp, tz=timezone.utc)

    def is_token_expired(self, token: str) -> bool:
        """Check expiration without rejecting the token for it."""
        exp = self.extract_claims(token, verify_exp=False).get("exp")
        if exp is None:
            return False
        return datetime.now(timezone.utc).timestamp() >= exp

    def validate_token(self, token: Optional[str], user_id: Optional[str] = None) -> bool:
        """Validate a token and optionally the identity it asserts.

        Args:
            token: Encoded JWT
            user_id: Expected subject, if the caller knows it

        Returns:
            bool: True if the token is well-formed, correctly signed, not
            expired and, when ``user_id`` is given, issued for that user
        """
        if not token:
            return False

        try:
            claims = self.extract_claims(token)
        except UnauthorizedError as e:
            logger.warning(f"JWT verification failed: {e.message}")
            return False

        if user_id is not None and claims.get("sub") != user_id:
            logger.warning(
                "Token subject mismatch",
                extra={"expected_user_id": user_id},
            )
            return False

        return True


def _build_default_manager() -> JWTManager:
    settings = get_settings()
    return JWTManager(
        secret_key=settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expiration_minutes=settings.JWT_EXPIRATION_MINUTES,
    )


jwt_manager = _build_default_manager()


def generate_token(user_id: str, role: Optional[str] = None) -> str:
    """Create token using the global JWT manager."""
    return jwt_manager.generate_token(user_id, role)


def extract_user_id(token: str) -> str:
    """Extract user ID using the global JWT manager."""
    return jwt_manager.extract_user_id(token)


def validate_token(token: Optional[str], user_id: Optional[str] = None) -> bool:
    """Validate token using the global JWT manager."""
    return jwt_manager.validate_token(token, user_id)
