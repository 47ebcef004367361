#!/usr/bin/env python3
"""
Application tracking endpoints.
"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.enums import ApplicationStatus
from database.models import User
from ..dependencies import get_current_user, get_db
from ..models.requests import (
    ApplicationCreateRequest,
    ApplicationUpdateRequest,
    ContactInput,
    InterviewInput,
)
from ..models.responses import ApplicationResponse, ApplicationStatsResponse, SuccessResponse
from ..services.application_service import ApplicationService
from ..utils import validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.get("", response_model=List[ApplicationResponse])
def list_applications(
    user_id: str = Query(..., alias="userId"),
    status: Optional[ApplicationStatus] = Query(default=None),
    company: Optional[str] = Query(default=None),
    start: Optional[datetime] = Query(default=None, description="Applied on or after"),
    end: Optional[datetime] = Query(default=None, description="Applied on or before"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ApplicationService(db).list_for_user(user, user_id, status=status, company=company,
                                                start=start, end=end)


@router.get("/stats", response_model=ApplicationStatsResponse)
def get_application_stats(
    user_id: str = Query(..., alias="userId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Totals by status, company and month plus interview and offer rates."""
    return ApplicationService(db).stats(user, user_id)


@router.post("", response_model=ApplicationResponse, status_code=201)
def create_application(
    body: ApplicationCreateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return ApplicationService(db).create(user, body)


@router.get("/{application_id}", response_model=ApplicationResponse)
def get_application(
    application_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(application_id, "application_id")
    return ApplicationService(db).get(user, application_id)


@router.put("/{application_id}", response_model=ApplicationResponse)
def update_application(
    application_id: str,
    body: ApplicationUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(application_id, "application_id")
    return ApplicationService(db).update(user, application_id, body)


@router.delete("/{application_id}", response_model=SuccessResponse)
def delete_application(
    application_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(application_id, "application_id")
    ApplicationService(db).delete(user, application_id)
    return SuccessResponse()


@router.post("/{application_id}/interviews", response_model=ApplicationResponse, status_code=201)
def add_interview(
    application_id: str,
    body: InterviewInput,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(application_id, "application_id")
    return ApplicationService(db).add_interview(user, application_id, body)


@router.post("/{application_id}/contacts", response_model=ApplicationResponse, status_code=201)
def add_contact(
    application_id: str,
    body: ContactInput,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(application_id, "application_id")
    return ApplicationService(db).add_contact(user, application_id, body)
