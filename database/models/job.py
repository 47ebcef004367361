import uuid

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Boolean, Numeric, UniqueConstraint, Index, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType, utcnow


class Job(Base):
    """A job posting available to search."""
    __tablename__ = 'jobs'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Core Identity
    title = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    location = Column(Text)
    remote = Column(Boolean, nullable=False, default=False)

    # Content
    description = Column(Text, nullable=False, default='')
    requirements = Column(Text)
    responsibilities = Column(Text)
    skills = Column(JSONType, nullable=False, default=list)
    benefits = Column(JSONType, nullable=False, default=list)

    # Structural Fields
    job_type = Column(Text)  # full-time|part-time|contract|internship|temporary
    experience_level = Column(Text)
    education_level = Column(Text)
    industry = Column(Text)
    company_size = Column(Text)
    company_type = Column(Text)
    salary_min = Column(Numeric)
    salary_max = Column(Numeric)
    salary_currency = Column(Text)
    salary_period = Column(Text)

    # Source
    source = Column(Text, nullable=False, default='manual')
    source_id = Column(Text)
    application_url = Column(Text)
    date_posted = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    __table_args__ = (
        UniqueConstraint('source', 'source_id', name='uq_jobs_source'),
        Index('idx_jobs_date_posted', 'date_posted'),
        Index('idx_jobs_company', 'company'),
    )


class SavedJob(Base):
    __tablename__ = 'saved_jobs'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    job_id = Column(Uuid, ForeignKey('jobs.id', ondelete='CASCADE'), nullable=False)
    saved_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    job = relationship("Job")

    __table_args__ = (
        UniqueConstraint('user_id', 'job_id', name='uq_saved_jobs_user_job'),
    )


class JobSearchHistory(Base):
    __tablename__ = 'job_search_history'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    query = Column(Text, nullable=False, default='')
    location = Column(Text)
    filters = Column(JSONType, nullable=False, default=dict)
    result_count = Column(Integer, nullable=False, default=0)
    searched_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    __table_args__ = (
        Index('idx_job_search_history_user', 'user_id', 'searched_at'),
    )
