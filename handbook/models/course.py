"""Course aggregate: one row per course code, owning its rated comments."""
import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from handbook.db.session import Base


def _new_comment_id() -> str:
    return uuid.uuid4().hex


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_code = Column(String(32), unique=True, nullable=False, index=True)  # uppercase
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    comments = relationship(
        "Comment",
        back_populates="course",
        order_by="Comment.id",
        cascade="all, delete-orphan",
    )


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)  # insertion order
    comment_id = Column(String(32), unique=True, nullable=False, index=True, default=_new_comment_id)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    # weak reference to users.username; nickname is looked up at read time
    username = Column(String(255), nullable=False, index=True)

    text = Column(Text, nullable=False, default="")
    difficulty = Column(Integer, nullable=False)
    usefulness = Column(Integer, nullable=False)
    workload = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    course = relationship("Course", back_populates="comments")
