#!/usr/bin/env python3
"""
Resume service - tailored generation, job match analysis, editing,
reformatting and export.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from core.enums import ExportFormat, ResumeFormat
from core.exporter import EXPORT_MEDIA_TYPES, export_document, resume_document, resume_plain_text, safe_filename
from core.keywords import extract_keywords, keyword_matches, match_score
from core.llm import LLMProvider
from core.llm.schema_models import GENERATED_RESUME_SCHEMA, RESUME_ANALYSIS_SCHEMA
from core.llm.system_prompts import ANALYSIS_SYSTEM_PROMPT, RESUME_WRITER_SYSTEM_PROMPT
from core.prompts.resume import (
    build_reformat_prompt,
    build_resume_analysis_prompt,
    build_resume_generation_prompt,
)
from database.models import Resume, User
from database.repositories import ResumeRepository
from ..dependencies import ensure_owner
from ..exceptions import ResumeNotFoundException
from ..models.requests import ResumeGenerateRequest, ResumeUpdate
from ..models.responses import KeywordMatches, ResumeAnalysisResponse, ResumeResponse
from ..utils import safe_datetime_iso
from .generation import generate_json

logger = logging.getLogger(__name__)

# Request/response field -> key in Resume.content
SECTION_FIELDS = {
    'contact_info': 'contactInfo',
    'summary': 'summary',
    'skills': 'skills',
    'work_experience': 'workExperience',
    'education': 'education',
    'projects': 'projects',
    'certifications': 'certifications',
    'languages': 'languages',
    'custom_sections': 'customSections',
}

GENERATED_SECTIONS = ('contactInfo', 'summary', 'skills', 'workExperience', 'education',
                      'projects', 'certifications', 'languages')

KEYWORD_LIMIT = 30


def _score(value: Any) -> int:
    try:
        return min(100, max(0, int(value)))
    except (TypeError, ValueError):
        return 0


class ResumeService:
    """Service for managing resumes."""

    def __init__(self, db: Session, ai: Optional[LLMProvider] = None):
        self.db = db
        self.ai = ai
        self.repo = ResumeRepository(db)

    def generate(self, user: User, request: ResumeGenerateRequest) -> ResumeResponse:
        """
        Generate a resume tailored to a job description.

        With useExistingResumeId the model rewrites that resume; otherwise it
        produces a template around the job's requirements.
        """
        ensure_owner(user, request.user_id, "generate resumes for this user")

        existing_text = None
        if request.use_existing_resume_id:
            existing = self._get_owned_resume(user, request.use_existing_resume_id)
            existing_text = resume_plain_text(existing.title, existing.content)

        options = request.model_dump(mode='json')
        options['custom_sections'] = [f"{s.title}: {s.content}" for s in request.custom_sections]
        prompt = build_resume_generation_prompt(options, existing_resume=existing_text)
        data = generate_json(self.ai, prompt, GENERATED_RESUME_SCHEMA,
                             system_prompt=RESUME_WRITER_SYSTEM_PROMPT, what="resume")

        content = {key: data.get(key) for key in GENERATED_SECTIONS}
        if not request.include_projects:
            content['projects'] = []
        content['customSections'] = [s.model_dump() for s in request.custom_sections]

        title = request.title or (
            f"Resume - {request.target_job_title}" if request.target_job_title else "Tailored Resume"
        )
        resume = self.repo.create(
            user.id,
            title=title,
            content=content,
            format=request.format.value,
            keywords=data.get('keywords') or extract_keywords(request.job_description, limit=KEYWORD_LIMIT),
            job_description=request.job_description,
            target_job_title=request.target_job_title,
            target_industry=request.target_industry,
        )
        self.db.commit()

        logger.info(f"Generated resume {resume.id} ({resume.format}) for user {user.id}")
        return self._to_response(resume)

    def analyze(self, user: User, resume_id: str, job_description: str) -> ResumeAnalysisResponse:
        """
        Score a resume against a job description.

        The match score and keyword split are computed locally from the job
        description's keywords; the qualitative review comes from the model.
        """
        resume = self._get_owned_resume(user, resume_id)
        text = resume_plain_text(resume.title, resume.content)

        keywords = extract_keywords(job_description, limit=KEYWORD_LIMIT)
        matches = keyword_matches(text, keywords)

        prompt = build_resume_analysis_prompt(text, job_description)
        data = generate_json(self.ai, prompt, RESUME_ANALYSIS_SCHEMA,
                             system_prompt=ANALYSIS_SYSTEM_PROMPT, what="resume analysis")

        return ResumeAnalysisResponse(
            resume_id=str(resume.id),
            job_description=job_description,
            match_score=match_score(text, keywords),
            keyword_matches=KeywordMatches(**matches),
            strengths=data.get('strengths') or [],
            weaknesses=data.get('weaknesses') or [],
            improvement_suggestions=data.get('improvementSuggestions') or [],
            skill_gaps=data.get('skillGaps') or [],
            recommended_skills=data.get('recommendedSkills') or [],
            recommended_experience=data.get('recommendedExperience') or [],
            ats_compatibility=_score(data.get('atsCompatibility')),
            readability_score=_score(data.get('readabilityScore')),
            formatting_issues=data.get('formattingIssues') or [],
            content_issues=data.get('contentIssues') or [],
            overall_recommendation=data.get('overallRecommendation') or '',
        )

    def get(self, user: User, resume_id: str) -> ResumeResponse:
        return self._to_response(self._get_owned_resume(user, resume_id))

    def list_for_user(self, user: User, user_id: str) -> List[ResumeResponse]:
        ensure_owner(user, user_id, "view resumes for this user")
        return [self._to_response(r) for r in self.repo.list_for_user(user.id)]

    def update(self, user: User, resume_id: str, update: ResumeUpdate) -> ResumeResponse:
        resume = self._get_owned_resume(user, resume_id)
        changes = update.model_dump(exclude_unset=True, mode='json')

        content = dict(resume.content or {})
        for field, key in SECTION_FIELDS.items():
            if field in changes:
                value = changes.pop(field)
                if value is not None:
                    content[key] = value

        if content != (resume.content or {}):
            # New dict so the JSON column change is detected
            resume.content = content
            resume.version += 1

        for field, value in changes.items():
            if value is None and field in ('title', 'format', 'keywords', 'is_public'):
                continue
            setattr(resume, field, value)

        self.db.commit()
        return self._to_response(resume)

    def delete(self, user: User, resume_id: str) -> None:
        resume = self._get_owned_resume(user, resume_id)
        self.repo.delete(resume)
        self.db.commit()
        logger.info(f"Deleted resume {resume_id}")

    def reformat(self, user: User, resume_id: str, resume_format: ResumeFormat) -> ResumeResponse:
        """Rewrite the resume for another format without changing its facts."""
        resume = self._get_owned_resume(user, resume_id)

        prompt = build_reformat_prompt(json.dumps(resume.content or {}, indent=2), resume_format.value)
        data = generate_json(self.ai, prompt, GENERATED_RESUME_SCHEMA,
                             system_prompt=RESUME_WRITER_SYSTEM_PROMPT, what="reformatted resume")

        content = {key: data.get(key) for key in GENERATED_SECTIONS}
        content['customSections'] = (resume.content or {}).get('customSections') or []
        resume.content = content
        resume.format = resume_format.value
        if data.get('keywords'):
            resume.keywords = data['keywords']
        resume.version += 1
        self.db.commit()

        logger.info(f"Reformatted resume {resume.id} as {resume_format.value} (v{resume.version})")
        return self._to_response(resume)

    def export(self, user: User, resume_id: str, export_format: ExportFormat) -> Tuple[bytes, str, str]:
        """Render the resume; returns (content, media type, file name)."""
        resume = self._get_owned_resume(user, resume_id)
        data = export_document(resume_document(resume.title, resume.content or {}), export_format.value)
        return data, EXPORT_MEDIA_TYPES[export_format.value], safe_filename(resume.title, export_format.value)

    def _get_owned_resume(self, user: User, resume_id: str) -> Resume:
        try:
            resume = self.repo.get_by_id(resume_id)
        except ValueError:
            resume = None
        if resume is None:
            raise ResumeNotFoundException(f"Resume not found: {resume_id}")
        ensure_owner(user, resume.user_id, "access this resume")
        return resume

    @staticmethod
    def _to_response(resume: Resume) -> ResumeResponse:
        content: Dict[str, Any] = resume.content or {}
        return ResumeResponse(
            id=str(resume.id),
            user_id=str(resume.user_id),
            title=resume.title,
            format=resume.format,
            version=resume.version,
            created_at=safe_datetime_iso(resume.created_at),
            updated_at=safe_datetime_iso(resume.updated_at),
            contact_info=content.get('contactInfo') or {},
            summary=content.get('summary') or '',
            skills=content.get('skills') or [],
            work_experience=content.get('workExperience') or [],
            education=content.get('education') or [],
            projects=content.get('projects') or [],
            certifications=content.get('certifications') or [],
            languages=content.get('languages') or [],
            custom_sections=content.get('customSections') or [],
            file_url=resume.file_url,
            keywords=resume.keywords or [],
            target_job_title=resume.target_job_title,
            target_industry=resume.target_industry,
            is_public=resume.is_public,
        )
