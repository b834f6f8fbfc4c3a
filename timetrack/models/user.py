"""SQLAlchemy model for registered users."""

from __future__ import annotations

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import relationship

from ..db.session import Base


class User(Base):
    """Account that owns sessions and timers. Rows are never updated."""

    __tablename__ = "users"
    __allow_unmapped__ = True

    id = Column(Integer, primary_key=True, index=True)
    username = Column(Text, nullable=False, unique=True)
    # bcrypt hash; the column keeps its historical name.
    password = Column(Text, nullable=False)

    sessions = relationship("LoginSession", back_populates="user")
    timers = relationship("Timer", back_populates="user")


__all__ = ["User"]
