# /app/core/deps.py

"""
Shared FastAPI dependencies: the authenticated user, the process-wide LLM
service and rate limiter, and the caller's client IP.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import UnauthenticatedError, UserNotFoundError
from app.core.security import verify_session_token
from app.db.models.user_models import User
from app.services.database_service import DatabaseService, get_db_service
from app.services.llm_service import LLMService
from app.services.rate_limit_service import RateLimiter

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_clerk_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if credentials is None:
        raise UnauthenticatedError()
    clerk_user_id = verify_session_token(credentials.credentials)
    if not clerk_user_id:
        raise UnauthenticatedError()
    return clerk_user_id


def get_current_user(
    clerk_user_id: str = Depends(get_current_clerk_user_id),
    db: DatabaseService = Depends(get_db_service),
) -> User:
    user = db.get_user_by_clerk_id(clerk_user_id)
    if user is None:
        raise UserNotFoundError()
    return user


def get_llm_service(request: Request) -> LLMService:
    return request.app.state.llm_service


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"
