"""SQLAlchemy models for login accounts."""

from sqlalchemy import Column, Integer, String, DateTime

from school_registry.db import Base, utcnow


class Account(Base):
    """Login account; role is ADMIN or SISWA."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(10), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
