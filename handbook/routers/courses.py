"""Course routes: course info with comments, comment CRUD, recommendations."""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.db.session import get_db
from handbook.routers.deps import optional_bearer_token, pick_token
from handbook.schemas.base import MessageOutSchema
from handbook.schemas.course import (
    CommentCreateSchema,
    CommentCreatedSchema,
    CommentDeleteSchema,
    CourseInfoOutSchema,
    CourseRatingSchema,
)
from handbook.services import courses as course_service
from handbook.services.ranking import recommend_courses

router = APIRouter(prefix="/course", tags=["course"])


# declared before /{code} so "recommend" is not taken for a course code
@router.get("/recommend", response_model=list[CourseRatingSchema])
async def get_recommendations(db: Annotated[AsyncSession, Depends(get_db)]):
    """Top courses by average usefulness, workload and difficulty."""
    return await recommend_courses(db)


@router.post("/comment", response_model=CommentCreatedSchema)
async def create_comment(
    body: CommentCreateSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
    header_token: Annotated[str | None, Depends(optional_bearer_token)],
):
    return await course_service.create_comment(
        db,
        course_code=body.course_code,
        access_token=pick_token(body.token, header_token),
        text=body.text,
        difficulty=body.difficulty,
        usefulness=body.usefulness,
        workload=body.workload,
    )


@router.delete("/comment", response_model=MessageOutSchema)
async def delete_comment(
    body: CommentDeleteSchema,
    db: Annotated[AsyncSession, Depends(get_db)],
    header_token: Annotated[str | None, Depends(optional_bearer_token)],
):
    return await course_service.delete_comment(db, body.comment_id, pick_token(body.token, header_token))


@router.get("/{code}", response_model=CourseInfoOutSchema)
async def get_course_info(
    code: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Static course info plus comments, each labelled with the author's nickname."""
    return await course_service.get_course_info(db, code)
