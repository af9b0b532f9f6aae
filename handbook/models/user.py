"""User model: credentials, profile, enrolled courses and current refresh token."""
from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from handbook.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, nullable=False, index=True)  # institutional email
    hashed_password = Column(String(255), nullable=False)
    nickname = Column(String(64), unique=True, nullable=True, index=True)

    programs = Column(String(255), nullable=True)
    program = Column(String(255), nullable=True)
    major = Column(String(255), nullable=True)
    # uppercase course codes, kept sorted and free of duplicates
    courseslist = Column(JSON, nullable=False, default=list)

    # only the most recently issued refresh token is accepted
    refresh_token = Column(String(512), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)
