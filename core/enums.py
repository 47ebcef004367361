"""Enumerations shared by the API models, services and prompt builders."""
from datetime import timedelta
from enum import Enum


class InterviewType(str, Enum):
    BEHAVIORAL = 'behavioral'
    TECHNICAL = 'technical'
    CASE_STUDY = 'case_study'
    SITUATIONAL = 'situational'
    PANEL = 'panel'
    PHONE_SCREEN = 'phone_screen'


class DifficultyLevel(str, Enum):
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'
    EXPERT = 'expert'


class CoverLetterStyle(str, Enum):
    STANDARD = 'standard'
    MODERN = 'modern'
    CREATIVE = 'creative'
    PROFESSIONAL = 'professional'
    EXECUTIVE = 'executive'
    TECHNICAL = 'technical'
    ACADEMIC = 'academic'
    FEDERAL = 'federal'


class CoverLetterTone(str, Enum):
    FORMAL = 'formal'
    CONVERSATIONAL = 'conversational'
    ENTHUSIASTIC = 'enthusiastic'
    CONFIDENT = 'confident'


class CoverLetterLength(str, Enum):
    SHORT = 'short'
    MEDIUM = 'medium'
    LONG = 'long'


class ResumeFormat(str, Enum):
    STANDARD = 'standard'
    ATS = 'ats'
    CREATIVE = 'creative'
    EXECUTIVE = 'executive'
    TECHNICAL = 'technical'
    ACADEMIC = 'academic'
    FEDERAL = 'federal'


class ExportFormat(str, Enum):
    PDF = 'pdf'
    DOCX = 'docx'
    TXT = 'txt'


class ApplicationStatus(str, Enum):
    SAVED = 'saved'
    APPLIED = 'applied'
    INTERVIEW = 'interview'
    OFFER = 'offer'
    REJECTED = 'rejected'
    ACCEPTED = 'accepted'
    DECLINED = 'declined'


# Statuses that mean the application reached at least the interview stage
INTERVIEWED_STATUSES = frozenset({
    ApplicationStatus.INTERVIEW, ApplicationStatus.OFFER,
    ApplicationStatus.ACCEPTED, ApplicationStatus.DECLINED,
})
OFFER_STATUSES = frozenset({
    ApplicationStatus.OFFER, ApplicationStatus.ACCEPTED, ApplicationStatus.DECLINED,
})


class RetirementPlanStatus(str, Enum):
    PENDING = 'pending'
    SCHEDULED = 'scheduled'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class DatePosted(str, Enum):
    LAST_DAY = '24h'
    LAST_3_DAYS = '3d'
    LAST_WEEK = '7d'
    LAST_2_WEEKS = '14d'
    LAST_MONTH = '30d'

    @property
    def window(self) -> timedelta:
        return {
            '24h': timedelta(days=1),
            '3d': timedelta(days=3),
            '7d': timedelta(days=7),
            '14d': timedelta(days=14),
            '30d': timedelta(days=30),
        }[self.value]


class JobSortBy(str, Enum):
    DATE = 'date'
    SALARY = 'salary'
    RELEVANCE = 'relevance'
