"""
Resume Extraction Module - read resumes from files and uploads.
"""
from etl.resume.parser import ResumeParser, ParsedResume

__all__ = [
    'ResumeParser',
    'ParsedResume',
]
