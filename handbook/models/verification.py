"""Verification code issued before registration; stored hashed, expires."""
from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from handbook.db.session import Base


class VerificationCode(Base):
    __tablename__ = "verification_codes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, index=True)
    code_hash = Column(String(255), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)
