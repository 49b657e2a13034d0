# backend/forest_reservation/routes/admin.py
"""
Admin session routes.

A successful login stores a signed session token in an httpOnly cookie;
logout clears it.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response

from ..api.dependencies import get_admin_auth_service
from ..core.messages import MSG_ADMIN_LOGIN_SUCCESS, MSG_ADMIN_LOGOUT_SUCCESS
from ..schemas.admin import AdminLoginRequest, AdminSessionResponse
from ..schemas.base_responses import ApiResponse
from ..services.admin_auth_service import AdminAuthService

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/login", response_model=ApiResponse[AdminSessionResponse])
async def login(
    payload: AdminLoginRequest,
    response: Response,
    auth_service: AdminAuthService = Depends(get_admin_auth_service),
) -> ApiResponse[AdminSessionResponse]:
    token = auth_service.login(payload.password)
    settings = auth_service.settings
    response.set_cookie(
        key=settings.admin_cookie_name,
        value=token,
        max_age=settings.admin_cookie_max_age,
        httponly=True,
        secure=settings.admin_cookie_secure,
        samesite="lax",
        path="/",
    )
    return ApiResponse(
        data=AdminSessionResponse(authenticated=True),
        message=MSG_ADMIN_LOGIN_SUCCESS,
    )


@router.post("/logout", response_model=ApiResponse[AdminSessionResponse])
async def logout(
    response: Response,
    auth_service: AdminAuthService = Depends(get_admin_auth_service),
) -> ApiResponse[AdminSessionResponse]:
    response.delete_cookie(key=auth_service.settings.admin_cookie_name, path="/")
    return ApiResponse(
        data=AdminSessionResponse(authenticated=False),
        message=MSG_ADMIN_LOGOUT_SUCCESS,
    )


@router.get("/me", response_model=ApiResponse[AdminSessionResponse])
async def me(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    auth_service: AdminAuthService = Depends(get_admin_auth_service),
) -> ApiResponse[AdminSessionResponse]:
    """Whether the caller currently holds a valid admin session."""
    cookie_token = request.cookies.get(auth_service.settings.admin_cookie_name)
    authenticated = auth_service.is_authorized(cookie_token, authorization)
    return ApiResponse(data=AdminSessionResponse(authenticated=authenticated))
