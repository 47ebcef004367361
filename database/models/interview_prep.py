import uuid

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Index, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JSONType, utcnow


class InterviewPrep(Base):
    """Generated interview preparation material for one job."""
    __tablename__ = 'interview_preps'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    resume_id = Column(Uuid, ForeignKey('resumes.id', ondelete='SET NULL'))

    job_title = Column(Text)
    company = Column(Text)
    job_description = Column(Text, nullable=False)
    interview_type = Column(Text, nullable=False)
    difficulty_level = Column(Text, nullable=False)
    focus_areas = Column(JSONType, nullable=False, default=list)

    # Generated material
    questions = Column(JSONType, nullable=False, default=list)
    company_research = Column(JSONType)
    key_skills = Column(JSONType, nullable=False, default=list)
    preparation_tips = Column(JSONType, nullable=False, default=list)
    common_mistakes = Column(JSONType, nullable=False, default=list)
    suggested_topics = Column(JSONType, nullable=False, default=list)
    technical_concepts = Column(JSONType, nullable=False, default=list)
    behavioral_themes = Column(JSONType, nullable=False, default=list)
    interview_structure = Column(JSONType, nullable=False, default=list)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)

    sessions = relationship("InterviewSession", back_populates="prep", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_interview_preps_user_id', 'user_id'),
    )

    def find_question(self, question_id: str):
        for question in self.questions or []:
            if question.get('id') == question_id:
                return question
        return None


class InterviewSession(Base):
    """A practice run through a prep's questions."""
    __tablename__ = 'interview_sessions'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    prep_id = Column(Uuid, ForeignKey('interview_preps.id', ondelete='CASCADE'), nullable=False)

    start_time = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    end_time = Column(TIMESTAMP(timezone=True))
    # [{questionId, userAnswer, notes, answeredAt}]
    answers = Column(JSONType, nullable=False, default=list)
    notes = Column(Text)
    overall_feedback = Column(Text)
    recording_url = Column(Text)

    prep = relationship("InterviewPrep", back_populates="sessions")
    feedback = relationship("InterviewFeedback", back_populates="session",
                            cascade="all, delete-orphan", order_by="InterviewFeedback.created_at")


class InterviewFeedback(Base):
    __tablename__ = 'interview_feedback'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    prep_id = Column(Uuid, ForeignKey('interview_preps.id', ondelete='CASCADE'), nullable=False)
    session_id = Column(Uuid, ForeignKey('interview_sessions.id', ondelete='CASCADE'))

    strengths = Column(JSONType, nullable=False, default=list)
    weaknesses = Column(JSONType, nullable=False, default=list)
    improvement_suggestions = Column(JSONType, nullable=False, default=list)
    overall_rating = Column(Integer, nullable=False)
    specific_feedback = Column(JSONType, nullable=False, default=list)
    question_feedback = Column(JSONType, nullable=False, default=list)
    next_steps = Column(JSONType, nullable=False, default=list)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    session = relationship("InterviewSession", back_populates="feedback")
