from __future__ import annotations
from typing import Optional
import hmac
import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from railway_restarter.config import Settings
from railway_restarter.domain.services.restart_service import RestartService

logger = logging.getLogger(__name__)
_security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_restart_service(request: Request) -> RestartService:
    return request.app.state.restart_service


async def require_control_token(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(_security),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Guard manual trigger endpoints.

    When CONTROL_API_TOKEN is unset the endpoints are open; otherwise the
    request must carry ``Authorization: Bearer <CONTROL_API_TOKEN>``.
    """
    expected = settings.CONTROL_API_TOKEN
    if not expected:
        return

    if not creds or not creds.credentials:
        logger.warning("❌ Manual trigger rejected: no bearer token provided")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required - no bearer token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not hmac.compare_digest(creds.credentials, expected):
        logger.warning("❌ Manual trigger rejected: invalid bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
