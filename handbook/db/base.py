"""SQLAlchemy declarative base and model imports for Alembic."""
from handbook.db.session import Base

# Import all models so Alembic can see them
from handbook.models.course import Comment, Course  # noqa: F401
from handbook.models.user import User  # noqa: F401
from handbook.models.verification import VerificationCode  # noqa: F401

__all__ = ["Base", "User", "Course", "Comment", "VerificationCode"]
