#!/usr/bin/env python3
"""
Interview prep endpoints - generated questions, practice sessions and feedback.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from core.enums import DifficultyLevel, InterviewType
from core.llm import LLMProvider
from database.models import User
from ..dependencies import get_ai_service, get_current_user, get_db
from ..models.requests import (
    EndSessionRequest,
    InterviewPrepRequest,
    InterviewPrepUpdate,
    QuestionAnswerRequest,
    StartSessionRequest,
)
from ..models.responses import (
    InterviewFeedbackResponse,
    InterviewPrepResponse,
    InterviewSessionResponse,
    SuccessResponse,
)
from ..rate_limit import GENERATION_LIMIT, limiter
from ..services.interview_prep_service import MAX_PRACTICE_QUESTIONS, InterviewPrepService
from ..utils import validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/interview-prep", tags=["interview-prep"])


@router.post("/generate", response_model=InterviewPrepResponse, status_code=201)
@limiter.limit(GENERATION_LIMIT)
def generate_interview_prep(
    request: Request,
    body: InterviewPrepRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    """
    Generate interview questions and preparation material for a job.

    With a resumeId the questions are built as a mock interview around the
    candidate's resume.
    """
    return InterviewPrepService(db, ai).generate(user, body)


@router.get("/practice-questions", response_model=List[Dict[str, Any]])
@limiter.limit(GENERATION_LIMIT)
def get_practice_questions(
    request: Request,
    interview_type: InterviewType = Query(..., alias="type"),
    difficulty: DifficultyLevel = Query(...),
    count: int = Query(default=5, ge=1, le=MAX_PRACTICE_QUESTIONS),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    """General practice questions, independent of any job."""
    return InterviewPrepService(db, ai).practice_questions(interview_type, difficulty, count)


@router.get("/company-research", response_model=Dict[str, Any])
@limiter.limit(GENERATION_LIMIT)
def get_company_research(
    request: Request,
    name: str = Query(..., min_length=1),
    industry: Optional[str] = Query(default=None),
    job_title: Optional[str] = Query(default=None, alias="jobTitle"),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    return InterviewPrepService(db, ai).company_research(name, industry=industry, job_title=job_title)


@router.post("/sessions", response_model=InterviewSessionResponse, status_code=201)
def start_session(
    body: StartSessionRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return InterviewPrepService(db).start_session(user, body)


@router.put("/sessions/{session_id}/end", response_model=InterviewSessionResponse)
def end_session(
    session_id: str,
    body: EndSessionRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(session_id, "session_id")
    return InterviewPrepService(db).end_session(user, session_id, body)


@router.put("/sessions/{session_id}/questions/{question_id}", response_model=InterviewSessionResponse)
def save_answer(
    session_id: str,
    question_id: str,
    body: QuestionAnswerRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record (or replace) the answer to one of the prep's questions."""
    validate_uuid(session_id, "session_id")
    return InterviewPrepService(db).save_answer(user, session_id, question_id, body)


@router.post("/sessions/{session_id}/feedback", response_model=InterviewFeedbackResponse, status_code=201)
@limiter.limit(GENERATION_LIMIT)
def generate_feedback(
    request: Request,
    session_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    ai: LLMProvider = Depends(get_ai_service)
):
    validate_uuid(session_id, "session_id")
    return InterviewPrepService(db, ai).generate_feedback(user, session_id)


@router.get("/sessions/{session_id}/feedback", response_model=InterviewFeedbackResponse)
def get_feedback(
    session_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(session_id, "session_id")
    return InterviewPrepService(db).get_feedback(user, session_id)


@router.get("", response_model=List[InterviewPrepResponse])
def list_interview_preps(
    user_id: str = Query(..., alias="userId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return InterviewPrepService(db).list_for_user(user, user_id)


@router.get("/{prep_id}", response_model=InterviewPrepResponse)
def get_interview_prep(
    prep_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(prep_id, "prep_id")
    return InterviewPrepService(db).get(user, prep_id)


@router.put("/{prep_id}", response_model=InterviewPrepResponse)
def update_interview_prep(
    prep_id: str,
    body: InterviewPrepUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(prep_id, "prep_id")
    return InterviewPrepService(db).update(user, prep_id, body)


@router.delete("/{prep_id}", response_model=SuccessResponse)
def delete_interview_prep(
    prep_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(prep_id, "prep_id")
    InterviewPrepService(db).delete(user, prep_id)
    return SuccessResponse()
