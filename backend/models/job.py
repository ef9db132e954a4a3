"""Job posting and application model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from backend.database import Base
from backend.models.user import utc_now

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"
JOB_STATUSES = (PENDING, APPROVED, REJECTED)


class Job(Base):
    """A posting owned by the employer who created it."""
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    company = Column(String, nullable=False)
    employer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default=PENDING, index=True)
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    employer = relationship("User")
    applicants = relationship(
        "JobApplication",
        back_populates="job",
        cascade="all, delete-orphan",
        order_by=lambda: [JobApplication.applied_at, JobApplication.id],
    )


class JobApplication(Base):
    """A candidate's application to a job."""
    __tablename__ = "job_applications"
    __table_args__ = (UniqueConstraint("job_id", "candidate_id", name="uq_job_applications_job_candidate"),)

    id = Column(Integer, primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    candidate_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    applied_at = Column(DateTime, nullable=False, default=utc_now)

    job = relationship("Job", back_populates="applicants")
