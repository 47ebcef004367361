import uuid

from sqlalchemy import Column, Integer, Text, Boolean, TIMESTAMP, ForeignKey, Index, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType, utcnow


class CoverLetter(Base):
    __tablename__ = 'cover_letters'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    resume_id = Column(Uuid, ForeignKey('resumes.id', ondelete='SET NULL'))
    job_id = Column(Uuid, ForeignKey('jobs.id', ondelete='SET NULL'))

    title = Column(Text, nullable=False)
    style = Column(Text, nullable=False, default='standard')
    tone = Column(Text)
    length = Column(Text)
    version = Column(Integer, nullable=False, default=1)

    content = Column(Text, nullable=False)
    greeting = Column(Text)
    closing = Column(Text)
    signature = Column(Text)

    contact_info = Column(JSONType, nullable=False, default=dict)
    recipient_info = Column(JSONType, nullable=False, default=dict)

    job_title = Column(Text)
    company_name = Column(Text)
    # Posting text used by keyword analysis
    # Kept so later analysis can score keywords against the original posting
    job_description = Column(Text)
    keywords = Column(JSONType, nullable=False, default=list)
    file_url = Column(Text)
    is_public = Column(Boolean, nullable=False, default=False)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    user = relationship("User", back_populates="cover_letters")

    __table_args__ = (
        Index('idx_cover_letters_user_id', 'user_id'),
    )
