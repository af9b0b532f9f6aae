"""Pydantic schemas for registration, login and token exchange."""
from handbook.schemas.base import CamelSchema, MessageOutSchema


class VerificationCodeRequestSchema(CamelSchema):
    username: str


class RegisterSchema(CamelSchema):
    username: str
    password: str
    confirm_password: str | None = None
    verification_code: str = ""


class LoginSchema(CamelSchema):
    username: str
    password: str


class NicknameSchema(CamelSchema):
    nick_name: str


class AuthOutSchema(MessageOutSchema):
    access_token: str | None = None
    refresh_token: str | None = None
