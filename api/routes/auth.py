"""
api/routes/auth.py -- Registration and login REST endpoints.

Routes:
  POST /auth/register  -- create a local account; 201 with the public user view
  POST /auth/login     -- password login; 200 with a bearer token

Both routes are public. Handlers are plain `def` so FastAPI runs them in its
thread pool and bcrypt never blocks the event loop.

Security:
  authenticate_user() provides timing equalization -- use it, never inline
  get_by_username() + verify_password().
  Unknown username and wrong password return the same 401 body.
  Cache-Control: no-store on both responses.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.models import Credentials, LoginResponse, PublicUser, RegisterResponse
from auth.store import UserStore
from auth.tokens import TokenService, authenticate_user
from core.exceptions import ValidationError

logger = logging.getLogger("stockroom.api")

router = APIRouter()


@router.post("/auth/register", response_model=RegisterResponse, status_code=201)
def register(request: Request, body: Credentials) -> JSONResponse:
    """Register a new user.

    Usernames are unique ignoring case; a clash raises DuplicateError, which
    the app-level handler renders as 409.
    """
    if not body.username or not body.password:
        raise ValidationError("Username and password are required")

    user_store: UserStore = request.app.state.user_store
    user = user_store.register(body.username, body.password)

    resp = JSONResponse(
        status_code=201,
        content=RegisterResponse(
            message="User registered successfully",
            user=PublicUser(**user.public_view()),
        ).model_dump(),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/auth/login", response_model=LoginResponse)
def login(request: Request, body: Credentials) -> JSONResponse:
    """Authenticate with username and password; return a signed bearer token.

    Missing fields, unknown usernames and wrong passwords all produce the
    same 401 so the response never reveals which usernames exist.
    """
    user = None
    if body.username and body.password:
        user = authenticate_user(request.app.state.user_store, body.username, body.password)

    if user is None:
        resp = JSONResponse(status_code=401, content={"error": "Invalid credentials"})
        resp.headers["Cache-Control"] = "no-store"
        return resp

    token_service: TokenService = request.app.state.token_service
    token = token_service.issue(user)
    logger.info("Issued token for user id=%d", user.id)

    resp = JSONResponse(
        status_code=200,
        content=LoginResponse(
            token=token,
            expires_in=token_service.expires_in,
            user=PublicUser(**user.public_view()),
        ).model_dump(by_alias=True),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp
