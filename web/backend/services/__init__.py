"""Business logic services."""

from .retirement_service import RetirementService
from .interview_prep_service import InterviewPrepService
from .cover_letter_service import CoverLetterService
from .resume_service import ResumeService
from .resume_parser_service import ResumeParserService
from .job_service import JobService
from .application_service import ApplicationService
