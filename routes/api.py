from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Optional
from sqlmodel import Session
from config.database import get_session
from models import User
from services.auth_service import AuthService, AuthenticationError
from utils.logger import setup_logger

logger = setup_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(401, "Authentication required", headers={"WWW-Authenticate": "Bearer"})
    try:
        return AuthService.verify_token(credentials.credentials, session)
    except AuthenticationError as e:
        logger.warning("Authentication failed", extra={"reason": str(e)})
        raise HTTPException(401, str(e), headers={"WWW-Authenticate": "Bearer"})


def build_router() -> APIRouter:
    from routes.recommendations import router as recommendations_router

    router = APIRouter()
    router.include_router(recommendations_router)
    return router
