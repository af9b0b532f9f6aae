"""Average ratings per course and the top-N recommendation list."""
from collections.abc import Iterable, Mapping, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.core.config import get_settings
from handbook.models.course import Comment, Course
from handbook.schemas.course import CourseRatingSchema


def average_ratings(course_code: str, comments: Sequence) -> CourseRatingSchema | None:
    """Mean of each rating dimension; None for a course without comments."""
    if not comments:
        return None
    n = len(comments)
    return CourseRatingSchema(
        course_code=course_code,
        difficulty=sum(c.difficulty for c in comments) / n,
        usefulness=sum(c.usefulness for c in comments) / n,
        workload=sum(c.workload for c in comments) / n,
    )


def _sort_key(rating: CourseRatingSchema):
    # most useful first, then lighter workload, then easier; code keeps ties stable
    return (-rating.usefulness, rating.workload, rating.difficulty, rating.course_code)


def rank_courses(aggregates: Mapping[str, Sequence], limit: int = 5) -> list[CourseRatingSchema]:
    """Rank courses by averaged ratings; courses with no comments are left out."""
    averages = []
    for course_code, comments in aggregates.items():
        avg = average_ratings(course_code, comments)
        if avg is not None:
            averages.append(avg)
    return sorted(averages, key=_sort_key)[:limit]


def _group_by_course(rows: Iterable) -> dict[str, list]:
    grouped: dict[str, list] = {}
    for row in rows:
        comments = grouped.setdefault(row.course_code, [])
        if row.difficulty is not None:
            comments.append(row)
    return grouped


async def recommend_courses(db: AsyncSession, limit: int | None = None) -> list[CourseRatingSchema]:
    """Recompute the ranking over every course aggregate."""
    if limit is None:
        limit = get_settings().recommend_limit
    result = await db.execute(
        select(Course.course_code, Comment.difficulty, Comment.usefulness, Comment.workload)
        .outerjoin(Comment, Comment.course_id == Course.id)
    )
    return rank_courses(_group_by_course(result.all()), limit=limit)
