#!/usr/bin/env python3
"""
Cover letter service - generation, editing, restyling, export and analysis.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from core.enums import CoverLetterStyle, ExportFormat
from core.exporter import (
    EXPORT_MEDIA_TYPES,
    cover_letter_document,
    export_document,
    resume_plain_text,
    safe_filename,
)
from core.keywords import extract_keywords, keyword_matches
from core.llm import LLMProvider
from core.llm.schema_models import COVER_LETTER_ANALYSIS_SCHEMA
from core.llm.system_prompts import ANALYSIS_SYSTEM_PROMPT, COVER_LETTER_SYSTEM_PROMPT
from core.prompts.cover_letter import (
    build_cover_letter_analysis_prompt,
    build_cover_letter_prompt,
    build_restyle_prompt,
)
from database.models import CoverLetter, User
from database.repositories import CoverLetterRepository, JobRepository, ResumeRepository
from ..dependencies import ensure_owner
from ..exceptions import CoverLetterNotFoundException, JobNotFoundException, ResumeNotFoundException
from ..models.requests import CoverLetterGenerateRequest, CoverLetterUpdate
from ..models.responses import CoverLetterAnalysisResponse, CoverLetterResponse, KeywordMatches
from ..utils import id_str, safe_datetime_iso
from .generation import generate_json, generate_text

logger = logging.getLogger(__name__)

KEYWORD_LIMIT = 20


class CoverLetterService:
    """Service for managing cover letters."""

    def __init__(self, db: Session, ai: Optional[LLMProvider] = None):
        self.db = db
        self.ai = ai
        self.repo = CoverLetterRepository(db)

    def generate(self, user: User, request: CoverLetterGenerateRequest) -> CoverLetterResponse:
        """
        Generate a cover letter for a job and store it as version 1.

        The referenced resume (if any) is sent to the model so the letter can
        cite the candidate's actual experience.
        """
        ensure_owner(user, request.user_id, "generate cover letters for this user")

        resume_id, resume_text = None, None
        if request.resume_id:
            resume = self._get_owned_resume(user, request.resume_id)
            resume_id = resume.id
            resume_text = resume_plain_text(resume.title, resume.content)

        job_id = None
        if request.job_id:
            job = self._get_job(request.job_id)
            job_id = job.id

        options = request.model_dump(mode='json')
        prompt = build_cover_letter_prompt(options, resume_text=resume_text)
        content = generate_text(self.ai, prompt, system_prompt=COVER_LETTER_SYSTEM_PROMPT, what="cover letter")

        title = f"Cover Letter - {request.company_name}"
        if request.job_title:
            title = f"Cover Letter - {request.job_title} at {request.company_name}"

        letter = self.repo.create(
            user.id,
            title=title,
            content=content,
            resume_id=resume_id,
            job_id=job_id,
            style=request.style.value,
            tone=request.tone.value,
            length=request.length.value,
            greeting=request.custom_greeting or f"Dear {request.recipient_name or 'Hiring Manager'},",
            closing=request.custom_closing or "Sincerely,",
            signature=request.custom_signature or user.display_name,
            contact_info={
                'name': user.display_name,
                'email': user.email,
                'phone': user.phone,
            },
            recipient_info={
                'name': request.recipient_name,
                'title': request.recipient_title,
                'company': request.company_name,
            },
            job_title=request.job_title,
            company_name=request.company_name,
            job_description=request.job_description,
            keywords=extract_keywords(request.job_description, limit=KEYWORD_LIMIT),
        )
        self.db.commit()

        logger.info(f"Generated cover letter {letter.id} ({letter.style}/{letter.tone}) for user {user.id}")
        return self._to_response(letter)

    def get(self, user: User, cover_letter_id: str) -> CoverLetterResponse:
        return self._to_response(self._get_owned_letter(user, cover_letter_id))

    def list_for_user(self, user: User, user_id: str) -> List[CoverLetterResponse]:
        ensure_owner(user, user_id, "view cover letters for this user")
        return [self._to_response(c) for c in self.repo.list_for_user(user.id)]

    def update(self, user: User, cover_letter_id: str, update: CoverLetterUpdate) -> CoverLetterResponse:
        letter = self._get_owned_letter(user, cover_letter_id)
        changes = update.model_dump(exclude_unset=True, mode='json')

        content_changed = 'content' in changes and changes['content'] != letter.content
        for field, value in changes.items():
            if value is None and field in ('title', 'content', 'style', 'contact_info',
                                           'recipient_info', 'keywords', 'is_public'):
                continue
            setattr(letter, field, value)
        if content_changed:
            letter.version += 1

        self.db.commit()
        return self._to_response(letter)

    def delete(self, user: User, cover_letter_id: str) -> None:
        letter = self._get_owned_letter(user, cover_letter_id)
        self.repo.delete(letter)
        self.db.commit()
        logger.info(f"Deleted cover letter {cover_letter_id}")

    def restyle(self, user: User, cover_letter_id: str, style: CoverLetterStyle) -> CoverLetterResponse:
        """Rephrase the letter in a new style; each restyle is a new version."""
        letter = self._get_owned_letter(user, cover_letter_id)

        prompt = build_restyle_prompt(letter.content, style.value, company_name=letter.company_name)
        letter.content = generate_text(self.ai, prompt, system_prompt=COVER_LETTER_SYSTEM_PROMPT,
                                       what="restyled cover letter")
        letter.style = style.value
        letter.version += 1
        self.db.commit()

        logger.info(f"Restyled cover letter {letter.id} as {style.value} (v{letter.version})")
        return self._to_response(letter)

    def export(self, user: User, cover_letter_id: str, export_format: ExportFormat) -> Tuple[bytes, str, str]:
        """Render the letter; returns (content, media type, file name)."""
        letter = self._get_owned_letter(user, cover_letter_id)

        parts = [letter.greeting, letter.content, letter.closing, letter.signature]
        body = "\n\n".join(p for p in parts if p)
        data = export_document(cover_letter_document(letter.title, body), export_format.value)
        return data, EXPORT_MEDIA_TYPES[export_format.value], safe_filename(letter.title, export_format.value)

    def analyze(self, user: User, cover_letter_id: str) -> CoverLetterAnalysisResponse:
        letter = self._get_owned_letter(user, cover_letter_id)

        prompt = build_cover_letter_analysis_prompt(letter.content, letter.job_description)
        data = generate_json(self.ai, prompt, COVER_LETTER_ANALYSIS_SCHEMA,
                             system_prompt=ANALYSIS_SYSTEM_PROMPT, what="cover letter analysis")

        matches = None
        if letter.job_description:
            keywords = extract_keywords(letter.job_description, limit=KEYWORD_LIMIT)
            matches = KeywordMatches(**keyword_matches(letter.content, keywords))

        return CoverLetterAnalysisResponse(
            cover_letter_id=str(letter.id),
            strengths=data.get('strengths') or [],
            weaknesses=data.get('weaknesses') or [],
            suggestions=data.get('suggestions') or [],
            tone=data.get('tone') or letter.tone or '',
            readability_score=min(100, max(0, int(data.get('readabilityScore') or 0))),
            keyword_matches=matches,
            formatting_issues=data.get('formattingIssues') or [],
            content_issues=data.get('contentIssues') or [],
            overall_recommendation=data.get('overallRecommendation') or '',
        )

    def _get_owned_letter(self, user: User, cover_letter_id: str) -> CoverLetter:
        try:
            letter = self.repo.get_by_id(cover_letter_id)
        except ValueError:
            letter = None
        if letter is None:
            raise CoverLetterNotFoundException(f"Cover letter not found: {cover_letter_id}")
        ensure_owner(user, letter.user_id, "access this cover letter")
        return letter

    def _get_owned_resume(self, user: User, resume_id: str):
        try:
            resume = ResumeRepository(self.db).get_by_id(resume_id)
        except ValueError:
            resume = None
        if resume is None:
            raise ResumeNotFoundException(f"Resume not found: {resume_id}")
        ensure_owner(user, resume.user_id, "use this resume")
        return resume

    def _get_job(self, job_id: str):
        try:
            job = JobRepository(self.db).get_by_id(job_id)
        except ValueError:
            job = None
        if job is None:
            raise JobNotFoundException(f"Job not found: {job_id}")
        return job

    @staticmethod
    def _to_response(letter: CoverLetter) -> CoverLetterResponse:
        return CoverLetterResponse(
            id=str(letter.id),
            user_id=str(letter.user_id),
            title=letter.title,
            style=letter.style,
            tone=letter.tone,
            length=letter.length,
            version=letter.version,
            created_at=safe_datetime_iso(letter.created_at),
            updated_at=safe_datetime_iso(letter.updated_at),
            content=letter.content,
            greeting=letter.greeting,
            closing=letter.closing,
            signature=letter.signature,
            contact_info=letter.contact_info or {},
            recipient_info=letter.recipient_info or {},
            job_title=letter.job_title,
            company_name=letter.company_name,
            job_id=id_str(letter.job_id),
            resume_id=id_str(letter.resume_id),
            keywords=letter.keywords or [],
            file_url=letter.file_url,
            is_public=letter.is_public,
        )
