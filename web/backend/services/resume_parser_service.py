#!/usr/bin/env python3
"""
Resume parser service - upload parsing, text extraction, keyword and skill
extraction.
"""

import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from core.config_loader import StorageConfig
from core.keywords import extract_keywords
from core.llm import LLMProvider
from core.llm.schema_models import KEYWORDS_SCHEMA, PARSED_RESUME_SCHEMA, SKILLS_SCHEMA
from core.llm.system_prompts import KEYWORD_EXTRACTION_SYSTEM_PROMPT, RESUME_EXTRACTION_SYSTEM_PROMPT
from core.prompts.resume import build_keyword_prompt, build_resume_extraction_prompt, build_skills_prompt
from database.models import User
from database.repositories import ResumeRepository
from etl.resume import ResumeParser
from storage import S3Uploader, validate_upload
from storage.s3_uploader import S3Error
from ..dependencies import ensure_owner
from ..exceptions import StorageException, ValidationException
from ..models.responses import ParsedResumeResponse, ResumeAnalysisResponse
from .generation import generate_json
from .resume_service import ResumeService

logger = logging.getLogger(__name__)

RESUME_PREFIX = "resumes"


def _dedupe(items: List[str]) -> List[str]:
    seen = set()
    result = []
    for item in items:
        key = item.strip().lower()
        if key and key not in seen:
            seen.add(key)
            result.append(item.strip())
    return result


class ResumeParserService:
    """Turns uploaded files and pasted text into structured resumes."""

    def __init__(self, db: Session, ai: Optional[LLMProvider] = None,
                 parser: Optional[ResumeParser] = None):
        self.db = db
        self.ai = ai
        self.parser = parser or ResumeParser()

    def parse_upload(self, user: User, user_id: str, file_name: str, content: bytes,
                     content_type: Optional[str], uploader: S3Uploader,
                     storage_config: StorageConfig) -> ParsedResumeResponse:
        """
        Store an uploaded resume in S3, parse it and save it as a new resume.

        JSON/YAML uploads are used as-is; text formats (txt, docx, pdf) go
        through LLM extraction.
        """
        ensure_owner(user, user_id, "upload resumes for this user")
        try:
            ext = validate_upload(file_name, len(content), storage_config.max_upload_bytes,
                                  sorted(self.parser.SUPPORTED_FORMATS))
        except ValueError as e:
            raise ValidationException(str(e))

        key = f"{RESUME_PREFIX}/{user.id}/{uuid.uuid4()}{ext}"
        try:
            uploaded = uploader.upload_bytes(content, key, content_type)
        except S3Error as e:
            raise StorageException(f"Failed to store resume: {e}")

        try:
            parsed = self.parser.parse_bytes(content, file_name)
        except ValueError as e:
            raise ValidationException(str(e))

        data = parsed.data
        if parsed.needs_extraction:
            if not parsed.text.strip():
                raise ValidationException(f"No text could be extracted from {file_name}")
            data = self._extract(parsed.text)

        resume = ResumeRepository(self.db).create(
            user.id,
            title=Path(file_name).stem or "Uploaded Resume",
            content=data,
            keywords=extract_keywords(parsed.text),
            file_key=key,
            file_url=uploaded["url"],
        )
        self.db.commit()

        logger.info(f"Parsed {parsed.format} resume {file_name} into resume {resume.id}")
        return ParsedResumeResponse(
            format=parsed.format,
            data=data,
            resume_id=str(resume.id),
            file_url=uploaded["url"],
        )

    def parse_text(self, text: str) -> ParsedResumeResponse:
        return ParsedResumeResponse(format='text', data=self._extract(text))

    def extract_keywords(self, job_description: str) -> List[str]:
        """Screening keywords for a job description; local extraction backs up an empty answer."""
        data = generate_json(self.ai, build_keyword_prompt(job_description), KEYWORDS_SCHEMA,
                             system_prompt=KEYWORD_EXTRACTION_SYSTEM_PROMPT, what="keywords")
        keywords = _dedupe(data.get('keywords') or [])
        return keywords or extract_keywords(job_description)

    def extract_skills(self, content: str) -> List[str]:
        data = generate_json(self.ai, build_skills_prompt(content), SKILLS_SCHEMA,
                             system_prompt=RESUME_EXTRACTION_SYSTEM_PROMPT, what="skills")
        return _dedupe(data.get('skills') or [])

    def analyze_match(self, user: User, resume_id: str, job_description: str) -> ResumeAnalysisResponse:
        return ResumeService(self.db, self.ai).analyze(user, resume_id, job_description)

    def _extract(self, text: str) -> Dict[str, Any]:
        data = generate_json(self.ai, build_resume_extraction_prompt(text), PARSED_RESUME_SCHEMA,
                             system_prompt=RESUME_EXTRACTION_SYSTEM_PROMPT, what="structured resume")
        data.setdefault('customSections', [])
        return data
