"""User routes: profile and enrolled course list."""
from typing import Annotated

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.db.session import get_db
from handbook.routers.deps import bearer_token
from handbook.schemas.base import MessageOutSchema
from handbook.schemas.user import ProfileUpdateSchema, UserOutSchema
from handbook.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])

CourseCodes = Annotated[list[str], Body()]


@router.get("", response_model=UserOutSchema)
async def get_user(
    token: Annotated[str, Depends(bearer_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Profile of the token's user, without credentials."""
    return await user_service.get_profile(db, token)


@router.post("/profile", response_model=MessageOutSchema)
async def update_profile(
    body: ProfileUpdateSchema,
    token: Annotated[str, Depends(bearer_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await user_service.update_profile(db, token, body.program, body.major)


@router.get("/{username}/courseslist", response_model=list[str])
async def get_user_courses(
    username: str,
    token: Annotated[str, Depends(bearer_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await user_service.get_courses(db, token, username)


@router.post("/{username}/courseslist", response_model=list[str])
async def add_user_courses(
    username: str,
    course_codes: CourseCodes,
    token: Annotated[str, Depends(bearer_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await user_service.add_courses(db, token, username, course_codes)


@router.put("/{username}/courseslist", response_model=list[str])
async def replace_user_courses(
    username: str,
    course_codes: CourseCodes,
    token: Annotated[str, Depends(bearer_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await user_service.replace_courses(db, token, username, course_codes)


@router.delete("/{username}/courseslist", response_model=list[str])
async def remove_user_courses(
    username: str,
    course_codes: CourseCodes,
    token: Annotated[str, Depends(bearer_token)],
    db: Annotated[AsyncSession, Depends(get_db)],
):
    return await user_service.remove_courses(db, token, username, course_codes)
