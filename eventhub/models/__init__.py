from sqlalchemy.orm import declarative_base

Base = declarative_base()

from .user import User, RevokedToken  # noqa: E402
from .event import Event  # noqa: E402
from .venue import Venue  # noqa: E402

__all__ = [
    "Base",
    "User",
    "RevokedToken",
    "Event",
    "Venue",
]
