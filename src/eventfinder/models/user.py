"""
User table
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from eventfinder.core.database import Base


class UserRow(Base):
    __tablename__ = "users"

    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False, index=True)
    # Stored lower-cased so uniqueness is case-insensitive
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=True)
    avatar = Column(String(1000), nullable=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<UserRow(id={self.id}, email='{self.email}')>"
