from datetime import datetime

from sqlalchemy import Column, DateTime, String
from app.database import Base


class User(Base):
    __tablename__ = "users"

    # Opaque id assigned by the identity provider
    id = Column(String(256), primary_key=True, index=True)

    email = Column(String(256), nullable=False)
    name = Column(String(256), nullable=False)
    phone_number = Column(String(256), nullable=True)   # optional

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
