"""Pydantic schemas for course info, comments, programs and rankings."""
from datetime import datetime

from pydantic import Field, StrictInt

from handbook.schemas.base import CamelSchema


class CourseBasicInfoSchema(CamelSchema):
    code: str
    name: str
    uoc: int
    description: str = ""
    conditions: list[str] = []
    offer_terms: list[str] = []


class MajorOutSchema(CamelSchema):
    name: str
    uoc: int
    description: str = ""
    compulsory_courses: list[str] = []
    elective_courses: list[str] = []


class ProgramOutSchema(CamelSchema):
    code: str
    name: str
    uoc: int
    description: str = ""
    majors: list[MajorOutSchema] = []
    compulsory_courses: list[str] = []
    elective_courses: list[str] = []


class CommentOutSchema(CamelSchema):
    comment_id: str = Field(alias="commentID")
    text: str
    nickname: str | None = None  # owner's current nickname, resolved on read
    difficulty: int
    usefulness: int
    workload: int
    updated_at: datetime


class CommentCreatedSchema(CamelSchema):
    comment_id: str = Field(alias="commentID")
    course_code: str
    username: str
    text: str
    difficulty: int
    usefulness: int
    workload: int
    updated_at: datetime


class CourseInfoOutSchema(CamelSchema):
    basic_info: CourseBasicInfoSchema
    comments: list[CommentOutSchema]


class CommentCreateSchema(CamelSchema):
    course_code: str
    # falls back to the Authorization header when absent
    token: str | None = None
    text: str = ""
    # optional here so a missing rating surfaces as a service ValidationError;
    # strict so JSON true or 4.5 is not coerced to an int
    difficulty: StrictInt | None = None
    usefulness: StrictInt | None = None
    workload: StrictInt | None = None


class CommentDeleteSchema(CamelSchema):
    comment_id: str = Field(alias="commentID")
    token: str | None = None


class CourseRatingSchema(CamelSchema):
    course_code: str
    difficulty: float
    usefulness: float
    workload: float
