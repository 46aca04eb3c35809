from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from ..database import Base

class Submission(Base):
    __tablename__ = "submissions"
    __table_args__ = (
        UniqueConstraint("submission_url_hash", name="unique_submission_url_hash"),
        Index("ix_submissions_user_problem", "user_id", "problem_id"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String, ForeignKey("students.id"), nullable=False)
    problem_id = Column(Integer, ForeignKey("problems.id"), nullable=False)
    lab_id = Column(String, nullable=False)
    status = Column(String(50), nullable=False, default="not_started")
    submission_url = Column(String(1000), nullable=True)
    submission_url_hash = Column(String(64), nullable=True)
    language = Column(String(100), nullable=True)
    code = Column(Text, nullable=True)
    proof_file_id = Column(String, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    verified_at = Column(DateTime(timezone=True), nullable=True)
    verified_by = Column(String, nullable=True)

    # Relationships
    student = relationship("StudentProfile", back_populates="submissions")
    problem = relationship("Problem", back_populates="submissions")
