#!/usr/bin/env python3
"""
Cover letter endpoints - generate, edit, restyle, export and analyze.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from core.enums import ExportFormat
from core.llm import LLMProvider
from database.models import User
from ..dependencies import get_ai_service, get_current_user, get_db
from ..models.requests import CoverLetterGenerateRequest, CoverLetterStyleRequest, CoverLetterUpdate
from ..models.responses import CoverLetterAnalysisResponse, CoverLetterResponse, SuccessResponse
from ..rate_limit import GENERATION_LIMIT, limiter
from ..services.cover_letter_service import CoverLetterService
from ..utils import attachment, validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cover-letters", tags=["cover-letters"])


@router.post("/generate", response_model=CoverLetterResponse, status_code=201)
@limiter.limit(GENERATION_LIMIT)
def generate_cover_letter(
    request: Request,
    body: CoverLetterGenerateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    """Generate a cover letter for a job posting, optionally grounded in a stored resume."""
    return CoverLetterService(db, ai).generate(user, body)


@router.get("", response_model=List[CoverLetterResponse])
def list_cover_letters(
    user_id: str = Query(..., alias="userId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return CoverLetterService(db).list_for_user(user, user_id)


@router.get("/{cover_letter_id}", response_model=CoverLetterResponse)
def get_cover_letter(
    cover_letter_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(cover_letter_id, "cover_letter_id")
    return CoverLetterService(db).get(user, cover_letter_id)


@router.put("/{cover_letter_id}", response_model=CoverLetterResponse)
def update_cover_letter(
    cover_letter_id: str,
    body: CoverLetterUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Partial update; editing the content creates a new version."""
    validate_uuid(cover_letter_id, "cover_letter_id")
    return CoverLetterService(db).update(user, cover_letter_id, body)


@router.delete("/{cover_letter_id}", response_model=SuccessResponse)
def delete_cover_letter(
    cover_letter_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(cover_letter_id, "cover_letter_id")
    CoverLetterService(db).delete(user, cover_letter_id)
    return SuccessResponse()


@router.post("/{cover_letter_id}/style", response_model=CoverLetterResponse)
@limiter.limit(GENERATION_LIMIT)
def restyle_cover_letter(
    request: Request,
    cover_letter_id: str,
    body: CoverLetterStyleRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    validate_uuid(cover_letter_id, "cover_letter_id")
    return CoverLetterService(db, ai).restyle(user, cover_letter_id, body.style)


@router.get("/{cover_letter_id}/export")
def export_cover_letter(
    cover_letter_id: str,
    export_format: ExportFormat = Query(default=ExportFormat.PDF, alias="format"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(cover_letter_id, "cover_letter_id")
    content, media_type, filename = CoverLetterService(db).export(user, cover_letter_id, export_format)
    return attachment(content, media_type, filename)


@router.get("/{cover_letter_id}/analyze", response_model=CoverLetterAnalysisResponse)
@limiter.limit(GENERATION_LIMIT)
def analyze_cover_letter(
    request: Request,
    cover_letter_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    validate_uuid(cover_letter_id, "cover_letter_id")
    return CoverLetterService(db, ai).analyze(user, cover_letter_id)
