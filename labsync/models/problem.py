from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..database import Base

class Problem(Base):
    __tablename__ = "problems"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    external_url = Column(String(1000), nullable=False)
    slug = Column(String, nullable=False, index=True)
    difficulty = Column(String(50), nullable=False, default="easy")
    points = Column(Integer, nullable=False, default=0)
    lab_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    submissions = relationship("Submission", back_populates="problem")
