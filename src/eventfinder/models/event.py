"""
Event table for the SQL storage backend
"""
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, Float, Integer, String, Text

from eventfinder.core.database import Base


class EventRow(Base):
    __tablename__ = "events"

    # Surrogate key keeps insertion order for list_events
    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False, index=True)
    title = Column(String(500), nullable=False)
    short_description = Column(String(500), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    category = Column(String(100), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False, default="")
    end_date = Column(Date, nullable=False)
    end_time = Column(String(5), nullable=False, default="")
    venue = Column(String(500), nullable=False)
    address = Column(String(500), nullable=False, default="")
    city = Column(String(100), nullable=False, index=True)
    country = Column(String(100), nullable=False)
    image = Column(String(1000), nullable=False, default="")
    price = Column(Float, nullable=False, default=0)
    currency = Column(String(3), nullable=False)
    capacity = Column(Integer, nullable=False)
    registered = Column(Integer, nullable=False, default=0)
    organizer = Column(JSON, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    featured = Column(Boolean, nullable=False, default=False, index=True)
    highlights = Column(JSON, nullable=False, default=list)
    schedule = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<EventRow(id={self.id}, title='{self.title}', registered={self.registered}/{self.capacity})>"
