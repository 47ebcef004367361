from .base import Base, JSONType, utcnow
from .user import User
from .resume import Resume, RESUME_SECTIONS
from .cover_letter import CoverLetter
from .job import Job, SavedJob, JobSearchHistory
from .application import JobApplication, ApplicationInterview, ApplicationContact, ApplicationStatusHistory
from .interview_prep import InterviewPrep, InterviewSession, InterviewFeedback
from .retirement import RetirementPlan, RetirementDocument, AdvisorAppointment

__all__ = [
    'Base',
    'JSONType',
    'utcnow',
    'User',
    'Resume',
    'RESUME_SECTIONS',
    'CoverLetter',
    'Job',
    'SavedJob',
    'JobSearchHistory',
    'JobApplication',
    'ApplicationInterview',
    'ApplicationContact',
    'ApplicationStatusHistory',
    'InterviewPrep',
    'InterviewSession',
    'InterviewFeedback',
    'RetirementPlan',
    'RetirementDocument',
    'AdvisorAppointment',
]
