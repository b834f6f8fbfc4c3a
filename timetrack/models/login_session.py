from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from ..db.session import Base


class LoginSession(Base):
    __tablename__ = "sessions"
    __allow_unmapped__ = True

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Text, nullable=False, unique=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    user = relationship("User", back_populates="sessions")


__all__ = ["LoginSession"]
