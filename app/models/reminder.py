import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import relationship

from app.database import Base


class Frequency(str, Enum):
    NEVER = "NEVER"   # one-time
    MONTH = "MONTH"
    YEAR = "YEAR"


class Reminder(Base):
    __tablename__ = "reminders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(256), nullable=False)
    description = Column(String, nullable=True)
    date_to_remember = Column(Date, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    should_expire = Column(Boolean, nullable=False)
    frequency = Column(SAEnum(Frequency, name="frequency"), nullable=False)
    user_id = Column(String(256), ForeignKey("users.id"), nullable=False, index=True)
    profile_id = Column(String(36), ForeignKey("profile.id"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    profile = relationship("Profile", backref="reminders")
