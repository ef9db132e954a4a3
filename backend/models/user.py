"""User model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from backend.database import Base

CANDIDATE = "candidate"
EMPLOYER = "employer"
ADMIN = "admin"
USER_ROLES = (CANDIDATE, EMPLOYER, ADMIN)


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    """Represents a registered account."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default=CANDIDATE)  # candidate/employer/admin
    created_at = Column(DateTime, default=utc_now)
