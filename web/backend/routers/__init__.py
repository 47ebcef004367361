"""API route handlers."""

from .retirement import router as retirement_router
from .interview_prep import router as interview_prep_router
from .cover_letters import router as cover_letters_router
from .resumes import router as resumes_router
from .resume_parser import router as resume_parser_router
from .jobs import router as jobs_router
from .applications import router as applications_router
