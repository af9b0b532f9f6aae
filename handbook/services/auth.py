"""Registration, login, token rotation and nickname assignment."""
import logging
import re
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.core.config import get_settings
from handbook.core.errors import Conflict, InvalidToken, NotFound, Unauthorized, ValidationError
from handbook.core.security import (
    create_access_token,
    create_refresh_token,
    hash_password,
    verify_password,
    verify_token,
)
from handbook.models.user import User
from handbook.models.verification import VerificationCode
from handbook.schemas.auth import AuthOutSchema
from handbook.schemas.base import MessageOutSchema
from handbook.services.users import authenticate, get_user, normalize_username

logger = logging.getLogger(__name__)

# upper case, lower case, digit, at least 8 characters
PASSWORD_RE = re.compile(r"^(?=.*?[A-Z])(?=.*?[a-z])(?=.*?[0-9]).{8,}$")
# bcrypt hard limit: 72 bytes (UTF-8)
PASSWORD_MAX_BYTES = 72
NICKNAME_MAX_LENGTH = 64


def validate_username(username: str | None) -> str:
    username = normalize_username(username)
    if not re.match(get_settings().username_pattern, username):
        raise ValidationError("Wrong email format")
    return username


def validate_password(password: str | None, confirm_password: str | None = None) -> None:
    pwd = password or ""
    if confirm_password is not None and pwd != confirm_password:
        raise ValidationError("Password and confirm password do not match")
    if not PASSWORD_RE.match(pwd):
        raise ValidationError(
            "Password must contain at least 8 characters, including uppercase, lowercase and numbers"
        )
    if len(pwd.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValidationError("Password is too long")


def _random_nickname() -> str:
    return f"user{secrets.randbelow(10**6):06d}"


async def _nickname_owner(db: AsyncSession, nickname: str) -> User | None:
    result = await db.execute(select(User).where(User.nickname == nickname))
    return result.scalar_one_or_none()


async def generate_nickname(db: AsyncSession) -> str:
    """Random 'user' + digits nickname. Checked and regenerated once only;
    the unique index rejects the rare second collision."""
    nickname = _random_nickname()
    if await _nickname_owner(db, nickname) is not None:
        nickname = _random_nickname()
    return nickname


def _issue_pair(user: User, message: str) -> AuthOutSchema:
    access_token = create_access_token(user.username)
    refresh_token = create_refresh_token(user.username)
    user.refresh_token = refresh_token
    return AuthOutSchema(message=message, access_token=access_token, refresh_token=refresh_token)


async def send_verification_code(db: AsyncSession, username: str) -> str:
    """Issue a fresh 6-digit code for the address. Only the hash is stored.

    Earlier codes for the address, and any expired code, are dropped first:
    at most one live code per address.

    Returns the code to the in-process caller; delivering it (mail) is not
    done here and the HTTP layer never echoes it.
    """
    settings = get_settings()
    username = validate_username(username)
    code = f"{secrets.randbelow(10**6):06d}"
    now = datetime.now(timezone.utc)
    expires_at = now + timedelta(minutes=settings.verification_code_expire_minutes)
    await db.execute(
        delete(VerificationCode).where(
            or_(VerificationCode.username == username, VerificationCode.expires_at <= now)
        ).execution_options(synchronize_session="fetch")
    )
    db.add(VerificationCode(username=username, code_hash=hash_password(code), expires_at=expires_at))
    await db.commit()
    logger.info("Issued verification code for %s, valid %d min", username, settings.verification_code_expire_minutes)
    return code


async def _verification_code_matches(db: AsyncSession, username: str, code: str) -> bool:
    if not code:
        return False
    static_code = get_settings().static_verification_code
    if static_code and secrets.compare_digest(code.encode("utf-8"), static_code.encode("utf-8")):
        return True
    result = await db.execute(
        select(VerificationCode.code_hash).where(
            VerificationCode.username == username,
            VerificationCode.expires_at > datetime.now(timezone.utc),
        )
    )
    return any(verify_password(code, code_hash) for code_hash in result.scalars())


async def register(
    db: AsyncSession,
    username: str,
    password: str,
    verification_code: str,
    confirm_password: str | None = None,
) -> AuthOutSchema:
    username = validate_username(username)
    validate_password(password, confirm_password)

    if await get_user(db, username) is not None:
        raise Conflict("User already exists")

    if not await _verification_code_matches(db, username, verification_code):
        raise ValidationError("Verification code is incorrect")

    user = User(
        username=username,
        hashed_password=hash_password(password),
        nickname=await generate_nickname(db),
        courseslist=[],
    )
    response = _issue_pair(user, "Register successful")
    db.add(user)
    try:
        # autoflushes the new user row
        await db.execute(delete(VerificationCode).where(VerificationCode.username == username))
        await db.commit()
    except IntegrityError:
        await db.rollback()
        if await get_user(db, username) is not None:
            raise Conflict("User already exists")
        # the unique nickname index caught a second collision
        logger.warning("Generated nickname collided twice for %s", username)
        raise Conflict("Generated nickname already taken, please try again")

    logger.info("Registered %s as %s", username, user.nickname)
    return response


async def login(db: AsyncSession, username: str, password: str) -> AuthOutSchema:
    user = await get_user(db, username)
    if user is None:
        raise NotFound("User does not exist")
    if not verify_password(password or "", user.hashed_password):
        logger.info("Failed login for %s", user.username)
        raise Unauthorized("Password is incorrect")

    response = _issue_pair(user, "Login successful")
    await db.commit()
    logger.info("Login %s", user.username)
    return response


async def refresh(db: AsyncSession, refresh_token: str) -> AuthOutSchema:
    """Exchange the current refresh token for a new pair.

    The old token is replaced with a compare-and-set on the user row, so of two
    concurrent refreshes with the same token only one succeeds.
    """
    if not refresh_token:
        raise Unauthorized("Missing refresh token")

    result = await db.execute(select(User).where(User.refresh_token == refresh_token))
    user = result.scalar_one_or_none()
    if user is None:
        logger.warning("Rejected refresh: token is not the current one for any user")
        raise Unauthorized("Refresh token is no longer valid")

    username = verify_token(refresh_token, "refresh")
    if username != user.username:
        raise InvalidToken()

    access_token = create_access_token(username)
    new_refresh_token = create_refresh_token(username)
    result = await db.execute(
        update(User)
        .where(User.id == user.id, User.refresh_token == refresh_token)
        .values(refresh_token=new_refresh_token)
    )
    if result.rowcount != 1:
        await db.rollback()
        logger.warning("Rejected refresh for %s: token rotated concurrently", username)
        raise Unauthorized("Refresh token is no longer valid")
    await db.commit()

    logger.info("Rotated refresh token for %s", username)
    return AuthOutSchema(
        message="Refresh successful",
        access_token=access_token,
        refresh_token=new_refresh_token,
    )


async def submit_nickname(db: AsyncSession, access_token: str, nickname: str) -> MessageOutSchema:
    user = await authenticate(db, access_token)

    nickname = (nickname or "").strip()
    if not nickname or len(nickname) > NICKNAME_MAX_LENGTH:
        raise ValidationError(f"Nickname must be 1 to {NICKNAME_MAX_LENGTH} characters")

    owner = await _nickname_owner(db, nickname)
    if owner is not None and owner.id != user.id:
        raise Conflict("Nickname already taken")

    user.nickname = nickname
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise Conflict("Nickname already taken")
    return MessageOutSchema(message="Submit nickname successful")
