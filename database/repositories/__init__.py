from database.repositories.base import BaseRepository, as_uuid
from database.repositories.user import UserRepository
from database.repositories.resume import ResumeRepository
from database.repositories.cover_letter import CoverLetterRepository
from database.repositories.job import JobRepository, JobSearchFilters
from database.repositories.application import ApplicationRepository
from database.repositories.interview_prep import InterviewPrepRepository
from database.repositories.retirement import RetirementRepository

__all__ = [
    'BaseRepository',
    'as_uuid',
    'UserRepository',
    'ResumeRepository',
    'CoverLetterRepository',
    'JobRepository',
    'JobSearchFilters',
    'ApplicationRepository',
    'InterviewPrepRepository',
    'RetirementRepository',
]
