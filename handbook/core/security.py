"""Password hashing and signed access/refresh tokens (JWT)."""
import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from handbook.core.config import get_settings
from handbook.core.errors import ExpiredToken, InvalidToken, TokenKind

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def _create_token(username: str, kind: TokenKind, lifetime: timedelta, now: datetime | None) -> str:
    settings = get_settings()
    issued_at = now or datetime.now(timezone.utc)
    to_encode = {
        "sub": username,
        "type": kind,
        # unique per token, so rotation never reissues an identical refresh token
        "jti": uuid.uuid4().hex,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def create_access_token(username: str, now: datetime | None = None) -> str:
    """Short-lived token attached to every authenticated request."""
    settings = get_settings()
    return _create_token(username, "access", timedelta(minutes=settings.access_token_expire_minutes), now)


def create_refresh_token(username: str, now: datetime | None = None) -> str:
    """Long-lived token whose only use is minting a new token pair."""
    settings = get_settings()
    return _create_token(username, "refresh", timedelta(days=settings.refresh_token_expire_days), now)


def verify_token(token: str, kind: TokenKind) -> str:
    """Return the username bound to a valid token of the given kind.

    Raises ExpiredToken(kind) when only the expiry check fails, so callers can
    tell "refresh needed" apart from "log in again"; InvalidToken otherwise.
    The kind is checked before expiry: an expired token of the other kind is
    invalid, not expired.
    """
    settings = get_settings()
    if not token:
        raise InvalidToken()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"verify_exp": False},
        )
    except JWTError:
        raise InvalidToken()

    username = payload.get("sub")
    if not username or payload.get("type") != kind:
        raise InvalidToken()

    exp = payload.get("exp")
    if not isinstance(exp, int):
        raise InvalidToken()
    if exp < datetime.now(timezone.utc).timestamp():
        raise ExpiredToken(kind)
    return username
