from sqlalchemy import Column, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..database import Base

class StudentProfile(Base):
    __tablename__ = "students"

    # 인증 서비스가 발급한 사용자 ID를 그대로 사용
    id = Column(String, primary_key=True)
    name = Column(String, nullable=True)
    email = Column(String, unique=True, nullable=True)
    hackerrank_username = Column(String, nullable=True)
    hackerrank_verified = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), onupdate=lambda: datetime.now(timezone.utc))

    submissions = relationship("Submission", back_populates="student")

    def set_hackerrank_username(self, username):
        """HackerRank 사용자명 변경"""
        self.hackerrank_username = username or None
        self.hackerrank_verified = bool(username)
