from __future__ import annotations

from typing import Annotated

from fastapi import (  # type: ignore[import-not-found]
    APIRouter,
    BackgroundTasks,
    Cookie,
    Depends,
    Request,
    Response,
)
from fastapi.responses import JSONResponse  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]
from starlette import status  # type: ignore[import-not-found]

from roopsnap.auth.depends import get_auth_service
from roopsnap.auth.schemas import (
    CheckResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    UserPublic,
)
from roopsnap.auth.service import FORGOT_PASSWORD_MESSAGE, AuthService
from roopsnap.commons.depends import database_session
from roopsnap.core.settings import settings

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_session_cookie(resp: Response, token: str) -> None:
    resp.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=str(settings.AUTH_COOKIE_SAMESITE),
        path="/",
        max_age=int(settings.AUTH_SESSION_TTL_HOURS) * 60 * 60,
    )


def _clear_session_cookie(resp: Response) -> None:
    resp.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        path="/",
    )


@router.post("/register", response_model=UserPublic)
async def register(
    req: RegisterRequest,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> UserPublic:
    user = await svc.register(session, email=req.email, password=req.password)
    return UserPublic(id=user.id, email=user.email)


@router.post("/login", response_model=UserPublic)
async def login(
    req: LoginRequest,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    user, token = await svc.login(session, email=req.email, password=req.password)
    data = UserPublic(id=user.id, email=user.email).model_dump(mode="json")
    resp = JSONResponse(status_code=status.HTTP_200_OK, content=data)
    _set_session_cookie(resp, token)
    return resp


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> JSONResponse:
    await svc.logout(session, token=request.cookies.get(settings.AUTH_COOKIE_NAME))
    resp = JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"message": "Logged out successfully"},
    )
    _clear_session_cookie(resp)
    return resp


@router.get("/check", response_model=CheckResponse)
async def check(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
    token: str | None = Cookie(default=None, alias=settings.AUTH_COOKIE_NAME),
) -> CheckResponse:
    ctx = await svc.check(session, token=token)
    return CheckResponse(
        authenticated=True, user=UserPublic(id=ctx.user_id, email=ctx.email)
    )


@router.post("/forgot-password", response_model=MessageResponse)
async def forgot_password(
    req: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    pending = await svc.forgot_password(session, email=req.email)
    if pending is not None:
        background_tasks.add_task(svc.deliver_reset_code, pending)
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    req: ResetPasswordRequest,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    message = await svc.reset_password(
        session, email=req.email, code=req.code, new_password=req.new_password
    )
    return MessageResponse(message=message)
