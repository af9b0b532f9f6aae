"""Credential store access: user lookup, profile and enrolled course list."""
import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.core.errors import Forbidden, NotFound
from handbook.core.security import verify_token
from handbook.models.user import User
from handbook.schemas.base import MessageOutSchema
from handbook.schemas.user import UserOutSchema

logger = logging.getLogger(__name__)


def normalize_username(username: str | None) -> str:
    return (username or "").strip().lower()


def normalize_course_codes(codes: Iterable[str]) -> set[str]:
    return {c.strip().upper() for c in codes if c and c.strip()}


async def get_user(db: AsyncSession, username: str) -> User | None:
    result = await db.execute(select(User).where(User.username == normalize_username(username)))
    return result.scalar_one_or_none()


async def authenticate(db: AsyncSession, access_token: str) -> User:
    """Resolve an access token to an existing user."""
    username = verify_token(access_token, "access")
    user = await get_user(db, username)
    if user is None:
        raise NotFound(f"User with username {username} not found")
    return user


async def _authorize_owner(db: AsyncSession, access_token: str, username: str) -> User:
    user = await authenticate(db, access_token)
    if user.username != normalize_username(username):
        raise Forbidden("Token does not belong to this user")
    return user


async def get_profile(db: AsyncSession, access_token: str) -> UserOutSchema:
    user = await authenticate(db, access_token)
    return UserOutSchema.model_validate(user)


async def update_profile(
    db: AsyncSession,
    access_token: str,
    program: str | None,
    major: str | None,
) -> MessageOutSchema:
    user = await authenticate(db, access_token)
    user.program = program
    user.major = major
    await db.commit()
    return MessageOutSchema(message=f"{user.username}'s profile has been updated")


async def get_courses(db: AsyncSession, access_token: str, username: str) -> list[str]:
    user = await _authorize_owner(db, access_token, username)
    return list(user.courseslist or [])


async def _store_courses(db: AsyncSession, user: User, codes: set[str]) -> list[str]:
    # assign a fresh list so the JSON column is flagged dirty
    user.courseslist = sorted(codes)
    await db.commit()
    return list(user.courseslist)


async def add_courses(db: AsyncSession, access_token: str, username: str, codes: Iterable[str]) -> list[str]:
    """Union the given codes into the user's course list."""
    user = await _authorize_owner(db, access_token, username)
    merged = set(user.courseslist or []) | normalize_course_codes(codes)
    return await _store_courses(db, user, merged)


async def remove_courses(db: AsyncSession, access_token: str, username: str, codes: Iterable[str]) -> list[str]:
    """Drop the given codes; codes not in the list are ignored."""
    user = await _authorize_owner(db, access_token, username)
    remaining = set(user.courseslist or []) - normalize_course_codes(codes)
    return await _store_courses(db, user, remaining)


async def replace_courses(db: AsyncSession, access_token: str, username: str, codes: Iterable[str]) -> list[str]:
    user = await _authorize_owner(db, access_token, username)
    return await _store_courses(db, user, normalize_course_codes(codes))
