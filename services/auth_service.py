from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from sqlmodel import Session
from models.user import User
from config.settings import settings
from utils.logger import setup_logger

logger = setup_logger(__name__)


class AuthenticationError(Exception):
    pass


class AuthService:
    """Verifies bearer tokens issued by the account service.

    Session issuance lives outside this backend; tokens carry the numeric
    user id in ``sub`` and ``type == "access"``.
    """

    @staticmethod
    def verify_token(token: str, db: Session, secret_key: Optional[str] = None) -> User:
        if not token:
            raise AuthenticationError("Authentication required")

        secret = secret_key or settings.JWT_SECRET_KEY
        if not secret:
            raise AuthenticationError("Server configuration error")

        try:
            payload = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Access token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid access token")

        if payload.get("type") != "access":
            raise AuthenticationError("Invalid token type")

        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            raise AuthenticationError("Invalid access token")

        user = db.get(User, user_id)
        if not user:
            raise AuthenticationError("User not found")

        return user

    @staticmethod
    def create_access_token(user_id: int, secret_key: Optional[str] = None, expires_minutes: Optional[int] = None) -> str:
        secret = secret_key or settings.JWT_SECRET_KEY
        if not secret:
            raise AuthenticationError("Server configuration error")

        minutes = expires_minutes if expires_minutes is not None else settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES
        to_encode = {
            "sub": str(user_id),
            "type": "access",
            "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
        }
        return jwt.encode(to_encode, secret, algorithm=settings.JWT_ALGORITHM)
