#!/usr/bin/env python3
"""
Resume endpoints - tailored generation, analysis, editing and export.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from core.enums import ExportFormat
from core.llm import LLMProvider
from database.models import User
from ..dependencies import get_ai_service, get_current_user, get_db
from ..models.requests import ResumeAnalyzeRequest, ResumeFormatRequest, ResumeGenerateRequest, ResumeUpdate
from ..models.responses import ResumeAnalysisResponse, ResumeResponse, SuccessResponse
from ..rate_limit import GENERATION_LIMIT, limiter
from ..services.resume_service import ResumeService
from ..utils import attachment, validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resumes", tags=["resumes"])


@router.post("/generate", response_model=ResumeResponse, status_code=201)
@limiter.limit(GENERATION_LIMIT)
def generate_resume(
    request: Request,
    body: ResumeGenerateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    return ResumeService(db, ai).generate(user, body)


@router.get("", response_model=List[ResumeResponse])
def list_resumes(
    user_id: str = Query(..., alias="userId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ResumeService(db).list_for_user(user, user_id)


@router.get("/{resume_id}", response_model=ResumeResponse)
def get_resume(
    resume_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(resume_id, "resume_id")
    return ResumeService(db).get(user, resume_id)


@router.put("/{resume_id}", response_model=ResumeResponse)
def update_resume(
    resume_id: str,
    body: ResumeUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(resume_id, "resume_id")
    return ResumeService(db).update(user, resume_id, body)


@router.delete("/{resume_id}", response_model=SuccessResponse)
def delete_resume(
    resume_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(resume_id, "resume_id")
    ResumeService(db).delete(user, resume_id)
    return SuccessResponse()


@router.post("/{resume_id}/analyze", response_model=ResumeAnalysisResponse)
@limiter.limit(GENERATION_LIMIT)
def analyze_resume(
    request: Request,
    resume_id: str,
    body: ResumeAnalyzeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    """Score the resume against a job description and review it."""
    validate_uuid(resume_id, "resume_id")
    return ResumeService(db, ai).analyze(user, resume_id, body.job_description)


@router.post("/{resume_id}/format", response_model=ResumeResponse)
@limiter.limit(GENERATION_LIMIT)
def reformat_resume(
    request: Request,
    resume_id: str,
    body: ResumeFormatRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    validate_uuid(resume_id, "resume_id")
    return ResumeService(db, ai).reformat(user, resume_id, body.format)


@router.get("/{resume_id}/export")
def export_resume(
    resume_id: str,
    export_format: ExportFormat = Query(default=ExportFormat.PDF, alias="format"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(resume_id, "resume_id")
    content, media_type, filename = ResumeService(db).export(user, resume_id, export_format)
    return attachment(content, media_type, filename)
