"""
ATSScan model for storing ATS scoring results.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, Index
from sqlalchemy.sql import func
from app.db.base import Base


class ATSScan(Base):
    """
    ATSScan model for storing one ATS analysis of a resume.

    Keeps the scored resume and the category breakdown as JSON so a scan
    can be re-displayed without re-running the engine.
    """
    __tablename__ = "ats_scans"

    id = Column(Integer, primary_key=True, index=True)

    # Overall score (0-100)
    overall_score = Column(Integer, nullable=False, index=True)
    rating = Column(String(32), nullable=False)

    job_description = Column(Text, nullable=True)

    # camelCase JSON, same shape as the API
    resume = Column(JSON, nullable=False)
    categories = Column(JSON, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    __table_args__ = (
        Index('idx_score_created', 'overall_score', 'created_at'),
    )

    @property
    def has_job_description(self) -> bool:
        return bool(self.job_description)

    def __repr__(self):
        return f"<ATSScan(id={self.id}, overall_score={self.overall_score}, rating={self.rating})>"
