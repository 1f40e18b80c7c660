# backend/employee_api/api/deps_auth.py

from typing import Any, Callable, Coroutine, Iterator, Optional

from fastapi import Depends, Header, Request, Response
from fastapi.routing import APIRoute
from pydantic import BaseModel
from sqlalchemy.orm import Session

from employee_api.core.errors import InvalidOrExpiredToken, MalformedHeader, MissingToken
from employee_api.core.security import TokenSigner


class CurrentUser(BaseModel):
    id: int
    username: str
    role: str  # "admin"


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


def authenticate(raw_header: Optional[str], signer: TokenSigner) -> CurrentUser:
    """Turn an ``Authorization`` header value into the caller's identity.

    The header must be exactly ``Bearer <token>``. Identity comes from the
    token alone; the accounts table is never consulted here.
    """
    if not raw_header:
        raise MissingToken()

    parts = raw_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise MalformedHeader()

    payload = signer.verify(parts[1])

    try:
        return CurrentUser(
            id=int(payload["id"]),
            username=payload["username"],
            role=payload["role"],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidOrExpiredToken() from e


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    signer: TokenSigner = Depends(get_token_signer),
) -> CurrentUser:
    return authenticate(authorization, signer)


class GuardedRoute(APIRoute):
    """Route class that runs the access guard before the request body is read.

    A caller without a valid token gets a 401 even when the body is not JSON.
    The identity is kept on ``request.state.user`` for that request only.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def guarded_handler(request: Request) -> Response:
            request.state.user = authenticate(
                request.headers.get("authorization"),
                request.app.state.token_signer,
            )
            return await handler(request)

        return guarded_handler
