import jwt
from datetime import datetime, timedelta
from typing import Optional, Tuple

from models import User, utcnow

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(hours=24)
REQUIRED_CLAIMS = ["sub", "exp", "iat", "iss", "aud"]


class JWTManager:
    """Issues and verifies HS256 bearer tokens"""

    def __init__(self, secret_key: str, issuer: str, audience: str):
        if not secret_key:
            raise ValueError("JWT secret key is not configured")
        self._secret_key = secret_key
        self.issuer = issuer
        self.audience = audience

    def create_token(self, user: User) -> Tuple[str, datetime]:
        """
        Create a signed token for an authenticated user

        Args:
            user: Stored user record

        Returns:
            Encoded token and its expiry timestamp
        """
        # exp is encoded in whole seconds; report the same instant
        issued_at = utcnow().replace(microsecond=0)
        expires = issued_at + TOKEN_LIFETIME
        payload = {
            "sub": str(user.id),
            "name": user.username,
            "email": user.email,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": issued_at,
            "exp": expires,
        }
        token = jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)
        return token, expires

    def verify_jwt(self, token: str) -> Optional[dict]:
        """
        Verify JWT token and return payload

        Args:
            token: JWT token string

        Returns:
            Decoded payload if valid, None otherwise
        """
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                leeway=0,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.InvalidTokenError:
            return None

    def get_user_id_from_token(self, token: str) -> Optional[int]:
        """
        Extract user ID from JWT token

        Args:
            token: JWT token string

        Returns:
            User ID if valid token, None otherwise
        """
        payload = self.verify_jwt(token)
        if not payload:
            return None
        try:
            return int(payload["sub"])  # Subject is user ID
        except (TypeError, ValueError):
            return None
