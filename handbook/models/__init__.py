from handbook.models.user import User
from handbook.models.course import Course, Comment
from handbook.models.verification import VerificationCode

__all__ = ["User", "Course", "Comment", "VerificationCode"]
