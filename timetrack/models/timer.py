"""SQLAlchemy model for user timers."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ..db.session import Base


class Timer(Base):
    __tablename__ = "timers"
    __allow_unmapped__ = True

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Epoch milliseconds as text, matching the legacy schema.
    start = Column(Text, nullable=True)
    timer_id = Column(Text, nullable=True, unique=True)
    is_active = Column(Boolean, nullable=False, default=True)
    description = Column(String(255), nullable=True)
    duration = Column(Text, nullable=True)
    # Written once by the first stop.
    end = Column("end", Text, nullable=True)

    user = relationship("User", back_populates="timers")

    @property
    def start_ms(self) -> int:
        try:
            return int(self.start or 0)
        except ValueError:
            return 0

    @property
    def end_ms(self) -> int | None:
        if not self.end:
            return None
        try:
            return int(self.end)
        except ValueError:
            return None


__all__ = ["Timer"]
