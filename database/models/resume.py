import uuid

from sqlalchemy import Column, Integer, Text, Boolean, TIMESTAMP, ForeignKey, Index, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType, utcnow

# Keys of the structured resume body stored in Resume.content
RESUME_SECTIONS = (
    'contactInfo', 'summary', 'skills', 'workExperience', 'education',
    'projects', 'certifications', 'languages', 'customSections',
)


class Resume(Base):
    """
    A user's resume.

    `content` holds the structured body (contact info, summary, skills,
    work experience, education, projects, certifications, languages,
    custom sections) in the camelCase shape the API exposes.
    """
    __tablename__ = 'resumes'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    title = Column(Text, nullable=False)
    format = Column(Text, nullable=False, default='standard')
    version = Column(Integer, nullable=False, default=1)

    content = Column(JSONType, nullable=False, default=dict)
    keywords = Column(JSONType, nullable=False, default=list)

    job_description = Column(Text)
    target_job_title = Column(Text)
    target_industry = Column(Text)

    # Original upload, when the resume came from a parsed file
    file_key = Column(Text)
    file_url = Column(Text)
    is_public = Column(Boolean, nullable=False, default=False)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    user = relationship("User", back_populates="resumes")

    __table_args__ = (
        Index('idx_resumes_user_id', 'user_id'),
    )

    @property
    def skills(self) -> list:
        return list((self.content or {}).get('skills') or [])
