import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Index, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType, utcnow


class JobApplication(Base):
    """
    A tracked job application.

    Status moves through saved -> applied -> interview -> offer and ends
    in rejected, accepted or declined; each change is appended to
    ApplicationStatusHistory.
    """
    __tablename__ = 'job_applications'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    job_id = Column(Uuid, ForeignKey('jobs.id', ondelete='SET NULL'))
    resume_id = Column(Uuid, ForeignKey('resumes.id', ondelete='SET NULL'))
    cover_letter_id = Column(Uuid, ForeignKey('cover_letters.id', ondelete='SET NULL'))

    job_title = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    location = Column(Text)
    application_date = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    status = Column(Text, nullable=False, default='saved')
    notes = Column(Text)
    next_steps = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    last_updated = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    user = relationship("User", back_populates="applications")
    interviews = relationship("ApplicationInterview", back_populates="application",
                              cascade="all, delete-orphan", order_by="ApplicationInterview.date")
    contacts = relationship("ApplicationContact", back_populates="application", cascade="all, delete-orphan")
    status_history = relationship("ApplicationStatusHistory", back_populates="application",
                                  cascade="all, delete-orphan", order_by="ApplicationStatusHistory.changed_at")

    __table_args__ = (
        Index('idx_job_applications_user_status', 'user_id', 'status'),
    )


class ApplicationInterview(Base):
    __tablename__ = 'application_interviews'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    application_id = Column(Uuid, ForeignKey('job_applications.id', ondelete='CASCADE'), nullable=False)
    date = Column(TIMESTAMP(timezone=True), nullable=False)
    type = Column(Text, nullable=False)
    notes = Column(Text)
    contacts = Column(JSONType, nullable=False, default=list)

    application = relationship("JobApplication", back_populates="interviews")


class ApplicationContact(Base):
    __tablename__ = 'application_contacts'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    application_id = Column(Uuid, ForeignKey('job_applications.id', ondelete='CASCADE'), nullable=False)
    name = Column(Text, nullable=False)
    title = Column(Text)
    email = Column(Text)
    phone = Column(Text)
    notes = Column(Text)

    application = relationship("JobApplication", back_populates="contacts")


class ApplicationStatusHistory(Base):
    __tablename__ = 'application_status_history'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    application_id = Column(Uuid, ForeignKey('job_applications.id', ondelete='CASCADE'), nullable=False)
    from_status = Column(Text)
    to_status = Column(Text, nullable=False)
    changed_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    note = Column(Text)

    application = relationship("JobApplication", back_populates="status_history")
