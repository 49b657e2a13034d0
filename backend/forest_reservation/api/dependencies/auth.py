# backend/forest_reservation/api/dependencies/auth.py
"""
Admin authentication dependency.

Admin routes declare ``Depends(require_admin)``; it accepts the session
cookie set by /api/admin/login or an ``Authorization: Bearer <password>``
header.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, Request

from ...core.exceptions import UnauthorizedException
from ...services.admin_auth_service import AdminAuthService
from .services import get_admin_auth_service

logger = logging.getLogger(__name__)


def require_admin(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    auth_service: AdminAuthService = Depends(get_admin_auth_service),
) -> None:
    """
    Raises:
        UnauthorizedException: without a valid admin cookie or bearer password
    """
    cookie_token = request.cookies.get(auth_service.settings.admin_cookie_name)
    if not auth_service.is_authorized(cookie_token, authorization):
        logger.info("Rejected admin request", extra={"path": request.url.path})
        raise UnauthorizedException()
