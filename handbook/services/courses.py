"""Course aggregates and their rated comments."""
import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.core.config import get_settings
from handbook.core.errors import Forbidden, NotFound, ValidationError
from handbook.models.course import Comment, Course
from handbook.models.user import User
from handbook.schemas.base import MessageOutSchema
from handbook.schemas.course import CommentCreatedSchema, CommentOutSchema, CourseInfoOutSchema
from handbook.services.catalog import get_catalog
from handbook.services.users import authenticate

logger = logging.getLogger(__name__)

RATING_FIELDS = ("difficulty", "usefulness", "workload")


def normalize_course_code(code: str | None) -> str:
    return (code or "").strip().upper()


def validate_ratings(**ratings: int | None) -> dict[str, int]:
    """Every dimension present and within the configured bounds."""
    settings = get_settings()
    for name in RATING_FIELDS:
        value = ratings.get(name)
        if value is None:
            raise ValidationError(f"Missing rating: {name}")
        if not settings.rating_min <= value <= settings.rating_max:
            raise ValidationError(
                f"Rating {name} must be between {settings.rating_min} and {settings.rating_max}"
            )
    return {name: ratings[name] for name in RATING_FIELDS}


async def get_or_create_course(db: AsyncSession, code: str) -> Course:
    """Return the aggregate for code, creating an empty one on first use."""
    result = await db.execute(select(Course).where(Course.course_code == code))
    course = result.scalar_one_or_none()
    if course is not None:
        return course

    course = Course(course_code=code)
    db.add(course)
    try:
        await db.commit()
    except IntegrityError:
        # created by a concurrent request
        await db.rollback()
        result = await db.execute(select(Course).where(Course.course_code == code))
        course = result.scalar_one()
    return course


async def get_course_info(db: AsyncSession, code: str) -> CourseInfoOutSchema:
    """Static course data merged with the course's comments.

    Nicknames come from a join on the owner's current user row, so renaming a
    user relabels all of their earlier comments.
    """
    code = normalize_course_code(code)
    basic_info = get_catalog().get_course(code)
    course = await get_or_create_course(db, code)

    result = await db.execute(
        select(Comment, User.nickname)
        .outerjoin(User, User.username == Comment.username)
        .where(Comment.course_id == course.id)
        .order_by(Comment.id.asc())
    )
    comments = [
        CommentOutSchema(
            comment_id=comment.comment_id,
            text=comment.text,
            nickname=nickname,
            difficulty=comment.difficulty,
            usefulness=comment.usefulness,
            workload=comment.workload,
            updated_at=comment.updated_at,
        )
        for comment, nickname in result.all()
    ]
    return CourseInfoOutSchema(basic_info=basic_info, comments=comments)


async def create_comment(
    db: AsyncSession,
    course_code: str,
    access_token: str,
    text: str | None,
    difficulty: int | None,
    usefulness: int | None,
    workload: int | None,
) -> CommentCreatedSchema:
    username = (await authenticate(db, access_token)).username
    ratings = validate_ratings(difficulty=difficulty, usefulness=usefulness, workload=workload)

    code = normalize_course_code(course_code)
    get_catalog().get_course(code)
    course = await get_or_create_course(db, code)

    comment = Comment(
        course_id=course.id,
        username=username,
        text=text or "",
        updated_at=datetime.now(timezone.utc),
        **ratings,
    )
    db.add(comment)
    await db.commit()

    logger.info("Comment %s on %s by %s", comment.comment_id, code, username)
    return CommentCreatedSchema(
        comment_id=comment.comment_id,
        course_code=code,
        username=username,
        text=comment.text,
        updated_at=comment.updated_at,
        **ratings,
    )


async def delete_comment(db: AsyncSession, comment_id: str, access_token: str) -> MessageOutSchema:
    """Delete a comment by id.

    With COMMENT_DELETE_POLICY=owner only the author may delete; with "any"
    every authenticated user may.
    """
    user = await authenticate(db, access_token)

    result = await db.execute(select(Comment).where(Comment.comment_id == comment_id))
    comment = result.scalar_one_or_none()
    if comment is None:
        raise NotFound("Course comment not found or already deleted")
    if get_settings().comment_delete_policy == "owner" and comment.username != user.username:
        raise Forbidden("Only the author can delete this comment")

    result = await db.execute(delete(Comment).where(Comment.comment_id == comment_id))
    if result.rowcount == 0:
        await db.rollback()
        raise NotFound("Course comment not found or already deleted")
    await db.commit()

    logger.info("Comment %s deleted by %s", comment_id, user.username)
    return MessageOutSchema(message=f"{comment_id} has been deleted")
