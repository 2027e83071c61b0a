import uuid

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from app.database import Base


class Profile(Base):
    __tablename__ = "profile"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(256), nullable=False)
    description = Column(String, nullable=True)
    profile_img_url = Column(String(512), nullable=True)
    user_id = Column(String(256), ForeignKey("users.id"), nullable=False, index=True)

    user = relationship("User", backref="profiles")
