"""FastAPI authentication dependencies."""

from __future__ import annotations

import jwt
from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ecopulse.auth.jwt import verify_token
from ecopulse.config import get_settings

_bearer = HTTPBearer()


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(_bearer),
) -> str:
    """Extract and verify the bearer JWT, return the user id. Raises 401 on failure."""
    try:
        payload = verify_token(credentials.credentials)
    except jwt.InvalidTokenError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
    return str(payload["sub"])


async def require_moderator(
    user_id: str = Depends(get_current_user_id),
) -> str:
    """Same as get_current_user_id but the user must be a configured moderator."""
    if user_id not in get_settings().moderator_user_ids:
        raise HTTPException(status_code=403, detail="Moderator access required")
    return user_id
