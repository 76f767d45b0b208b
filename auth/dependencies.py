"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

The only accepted credential is an `Authorization: Bearer <token>` header.

authenticate() is a pure request filter with no state of its own:
  - no bearer token            -> HTTP 401 (authentication required)
  - token fails verification   -> HTTP 403 (invalid or expired token)
  - token verifies             -> TokenClaim, also stored on request.state.claim

Layer rule: no imports from catalog/. auth/dependencies.py may import from
fastapi because this module is part of the FastAPI dependency injection
system.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from auth.models import TokenClaim
from auth.tokens import TokenService


def get_bearer_token(request: Request) -> str | None:
    """Return the token from the Authorization header, or None if absent.

    The scheme is matched case-insensitively. Any other scheme counts as no
    token at all.
    """
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def authenticate(request: Request) -> TokenClaim:
    """Require a valid bearer token.

    Use as a FastAPI dependency:
        router = APIRouter(dependencies=[Depends(authenticate)])
    or, to read the claim inside a handler:
        async def route(claim: TokenClaim = Depends(authenticate)): ...
    """
    token = get_bearer_token(request)
    if token is None:
        raise HTTPException(
            status_code=401,
            detail={
                "error": "Authentication required",
                "message": "Please include a valid JWT token in the Authorization header",
            },
            headers={"WWW-Authenticate": "Bearer"},
        )

    token_service: TokenService = request.app.state.token_service
    claim = token_service.verify(token)
    if claim is None:
        raise HTTPException(
            status_code=403,
            detail={
                "error": "Invalid token",
                "message": "The provided token is invalid or expired",
            },
        )

    request.state.claim = claim
    return claim
