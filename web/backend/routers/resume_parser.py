#!/usr/bin/env python3
"""
Resume parsing endpoints - file and text parsing, keyword and skill extraction.
"""

import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from sqlalchemy.orm import Session

from core.config_loader import AppConfig
from core.llm import LLMProvider
from database.models import User
from etl.resume import ResumeParser
from storage import S3Uploader
from ..config import get_config
from ..dependencies import get_ai_service, get_current_user, get_db, get_resume_parser, get_uploader
from ..models.requests import AnalyzeMatchRequest, ExtractSkillsRequest, KeywordsRequest, ParseTextRequest
from ..models.responses import KeywordsResponse, ParsedResumeResponse, ResumeAnalysisResponse, SkillsResponse
from ..rate_limit import GENERATION_LIMIT, UPLOAD_LIMIT, limiter
from ..services.resume_parser_service import ResumeParserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resume", tags=["resume-parser"])


@router.post("/parse", response_model=ParsedResumeResponse, status_code=201)
@limiter.limit(UPLOAD_LIMIT)
async def parse_resume_file(
    request: Request,
    file: UploadFile = File(...),
    user_id: str = Form(..., alias="userId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service),
    parser: ResumeParser = Depends(get_resume_parser),
    uploader: S3Uploader = Depends(get_uploader),
    config: AppConfig = Depends(get_config)
):
    """
    Upload and parse a resume.
    Supports: .json, .yaml, .yml, .txt, .docx, .pdf

    The file is stored in S3, parsed, and saved as a new resume for the user.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    if not parser.is_supported(file.filename):
        supported = ', '.join(ResumeParser.get_supported_formats())
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file format. Supported formats: {supported}"
        )

    content = await file.read()
    service = ResumeParserService(db, ai, parser=parser)
    return service.parse_upload(
        user, user_id, file.filename, content, file.content_type,
        uploader=uploader, storage_config=config.storage,
    )


@router.post("/parse-text", response_model=ParsedResumeResponse)
@limiter.limit(GENERATION_LIMIT)
def parse_resume_text(
    request: Request,
    body: ParseTextRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    return ResumeParserService(db, ai).parse_text(body.text)


@router.post("/keywords", response_model=KeywordsResponse)
@limiter.limit(GENERATION_LIMIT)
def extract_keywords(
    request: Request,
    body: KeywordsRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    return KeywordsResponse(keywords=ResumeParserService(db, ai).extract_keywords(body.job_description))


@router.post("/analyze-match", response_model=ResumeAnalysisResponse)
@limiter.limit(GENERATION_LIMIT)
def analyze_match(
    request: Request,
    body: AnalyzeMatchRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    return ResumeParserService(db, ai).analyze_match(user, body.resume_id, body.job_description)


@router.post("/extract-skills", response_model=SkillsResponse)
@limiter.limit(GENERATION_LIMIT)
def extract_skills(
    request: Request,
    body: ExtractSkillsRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    return SkillsResponse(skills=ResumeParserService(db, ai).extract_skills(body.content))
