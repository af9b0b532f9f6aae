"""Shared request dependencies."""
from typing import Annotated

from fastapi import Depends, Header, Query

from handbook.core.errors import Unauthorized


def optional_bearer_token(
    authorization: Annotated[str | None, Header()] = None,
    token: Annotated[str | None, Query()] = None,
) -> str | None:
    """Token from 'Authorization: Bearer ...', falling back to ?token=."""
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    return token or None


def bearer_token(token: Annotated[str | None, Depends(optional_bearer_token)]) -> str:
    if not token:
        raise Unauthorized("Missing authorization header")
    return token


def pick_token(body_token: str | None, header_token: str | None) -> str:
    """A token in the JSON body wins over the Authorization header."""
    token = body_token or header_token
    if not token:
        raise Unauthorized("Missing authorization header")
    return token
