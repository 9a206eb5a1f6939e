from sqlalchemy import Column, Date, DateTime, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from . import Base
from .user import _new_id


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), index=True, nullable=False)
    name = Column(String, nullable=False)
    sport_type = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    event_date = Column(Date, index=True, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # The service deletes venues itself; ON DELETE CASCADE covers a failed cleanup
    venues = relationship(
        "Venue",
        back_populates="event",
        order_by="Venue.position",
        passive_deletes=True,
    )
