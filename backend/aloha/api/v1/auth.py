"""
Session authentication endpoints.

Login sets an HTTP-only cookie holding an opaque session id; the
identity itself lives in the session store.
"""

from fastapi import APIRouter, Request, Response, status

from aloha.api.dependencies import (
    AuthServiceDep,
    CurrentSessionDep,
    TransactionDep,
)
from aloha.core.config import settings
from aloha.schemas.auth import LoginRequest, SessionResponse
from aloha.schemas.envelope import ResponseEnvelope

router = APIRouter()


@router.post("/login", response_model=ResponseEnvelope[SessionResponse])
async def login(
    body: LoginRequest,
    response: Response,
    tx: TransactionDep,
    auth: AuthServiceDep,
):
    """
    Log in with username and password.

    Example:
        POST /api/auth/login
        {"username": "admin", "password": "changeme123"}

        Response:
        {"data": {"user_id": "...", "username": "admin"}, "pagination": null}

    Raises:
        InvalidRequestError 400: Unknown username
        AuthenticationError 401: Wrong password
    """
    session_id, identity = await auth.login(tx, body.username, body.password)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return ResponseEnvelope(data=SessionResponse(**identity.model_dump()))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request, _session: CurrentSessionDep, auth: AuthServiceDep) -> Response:
    await auth.logout(request.cookies[settings.session_cookie_name])
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.get("/me", response_model=ResponseEnvelope[SessionResponse])
async def me(session: CurrentSessionDep):
    return ResponseEnvelope(data=SessionResponse(**session.model_dump()))
