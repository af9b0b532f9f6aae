"""Auth routes: verification code, register, login, token refresh, nickname."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.db.session import get_db
from handbook.routers.deps import bearer_token
from handbook.schemas.auth import (
    AuthOutSchema,
    LoginSchema,
    NicknameSchema,
    RegisterSchema,
    VerificationCodeRequestSchema,
)
from handbook.schemas.base import MessageOutSchema
from handbook.services import auth as auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/send-verification-code", response_model=MessageOutSchema)
async def send_verification_code(
    body: VerificationCodeRequestSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Issue a verification code for the address (delivered out of band)."""
    await auth_service.send_verification_code(db, body.username)
    return MessageOutSchema(message="Verification code sent")


@router.post("/register", response_model=AuthOutSchema)
async def register(
    body: RegisterSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await auth_service.register(
        db,
        username=body.username,
        password=body.password,
        verification_code=body.verification_code,
        confirm_password=body.confirm_password,
    )


@router.post("/login", response_model=AuthOutSchema)
async def login(
    body: LoginSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await auth_service.login(db, body.username, body.password)


@router.post("/refreshToken", response_model=AuthOutSchema)
async def refresh_token(
    token: Annotated[str, Depends(bearer_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Rotate the refresh token sent as the bearer credential."""
    return await auth_service.refresh(db, token)


@router.post("/submitNickname", response_model=MessageOutSchema)
async def submit_nickname(
    body: NicknameSchema,
    token: Annotated[str, Depends(bearer_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await auth_service.submit_nickname(db, token, body.nick_name)
