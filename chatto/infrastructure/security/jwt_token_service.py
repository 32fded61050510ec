"""
JWT implementation of TokenService.

Claims:
- sub:   user id (string, as required by RFC 7519)
- email: user email
- iat / exp / iss / aud: validated on decode
- jti:   random id, keeps tokens of logins within the same second distinct
"""

from datetime import datetime, timezone
from uuid import uuid4

import jwt

from chatto.domain.exceptions import UnauthenticatedError
from chatto.domain.ports.token_service import TokenClaims, TokenService
from chatto.domain.value_objects.user_email import UserEmail
from chatto.domain.value_objects.user_id import UserId

ALGORITHM = "HS256"


class JwtTokenService(TokenService):
    def __init__(self, secret: str, issuer: str, audience: str):
        if not secret:
            raise ValueError("JWT secret must be configured")
        self._secret = secret
        self._issuer = issuer
        self._audience = audience

    def issue(
        self, user_id: UserId, email: UserEmail, issued_at: datetime, expires_at: datetime
    ) -> str:
        return jwt.encode(
            {
                "sub": str(user_id.value),
                "email": email.value,
                "iat": int(issued_at.timestamp()),
                "exp": int(expires_at.timestamp()),
                "iss": self._issuer,
                "aud": self._audience,
                "jti": uuid4().hex,
            },
            self._secret,
            algorithm=ALGORITHM,
        )

    def decode(self, token: str) -> TokenClaims:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iat", "aud", "iss", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise UnauthenticatedError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise UnauthenticatedError(f"Invalid token: {e}") from e

        try:
            return TokenClaims(
                user_id=UserId(int(claims["sub"])),
                email=UserEmail(claims.get("email", "")),
                expires_at=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            )
        except (KeyError, ValueError) as e:
            raise UnauthenticatedError("Missing required claims in token") from e
