"""Pydantic schemas for user profile and course list."""
from handbook.schemas.base import CamelSchema


class UserOutSchema(CamelSchema):
    username: str
    nickname: str | None = None
    programs: str | None = None
    program: str | None = None
    major: str | None = None
    courseslist: list[str] = []


class ProfileUpdateSchema(CamelSchema):
    program: str | None = None
    major: str | None = None
