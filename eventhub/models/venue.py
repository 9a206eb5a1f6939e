from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from . import Base
from .user import _new_id


class Venue(Base):
    __tablename__ = "venues"

    id = Column(String(36), primary_key=True, default=_new_id)
    # NULL marks a reusable template venue
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), index=True, nullable=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    capacity = Column(Integer, nullable=True)
    position = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    event = relationship("Event", back_populates="venues")
