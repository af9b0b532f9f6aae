from handbook.schemas.auth import (
    AuthOutSchema,
    LoginSchema,
    NicknameSchema,
    RegisterSchema,
    VerificationCodeRequestSchema,
)
from handbook.schemas.base import MessageOutSchema
from handbook.schemas.course import (
    CommentCreateSchema,
    CommentCreatedSchema,
    CommentDeleteSchema,
    CommentOutSchema,
    CourseBasicInfoSchema,
    CourseInfoOutSchema,
    CourseRatingSchema,
    MajorOutSchema,
    ProgramOutSchema,
)
from handbook.schemas.user import ProfileUpdateSchema, UserOutSchema

__all__ = [
    "AuthOutSchema",
    "CommentCreateSchema",
    "CommentCreatedSchema",
    "CommentDeleteSchema",
    "CommentOutSchema",
    "CourseBasicInfoSchema",
    "CourseInfoOutSchema",
    "CourseRatingSchema",
    "LoginSchema",
    "MajorOutSchema",
    "MessageOutSchema",
    "NicknameSchema",
    "ProfileUpdateSchema",
    "ProgramOutSchema",
    "RegisterSchema",
    "UserOutSchema",
    "VerificationCodeRequestSchema",
]
