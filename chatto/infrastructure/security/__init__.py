from chatto.infrastructure.security.bcrypt_password_hasher import BcryptPasswordHasher
from chatto.infrastructure.security.jwt_token_service import JwtTokenService

__all__ = ["BcryptPasswordHasher", "JwtTokenService"]
