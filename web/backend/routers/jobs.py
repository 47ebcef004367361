#!/usr/bin/env python3
"""
Job endpoints - search, details, similar and recommended jobs, saved jobs
and search history.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.enums import DatePosted, JobSortBy
from database.models import User
from ..dependencies import get_current_user, get_db, get_optional_user
from ..models.requests import SaveJobRequest
from ..models.responses import JobResponse, JobSearchResponse, SearchHistoryEntry, SuccessResponse
from ..services.job_service import MAX_PAGE_SIZE, JobService
from ..utils import validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("/search", response_model=JobSearchResponse)
def search_jobs(
    q: Optional[str] = Query(default=None, description="Keywords matched against title, company and description"),
    location: Optional[str] = Query(default=None),
    radius: Optional[int] = Query(default=None, ge=0, description="Miles; accepted but location matching is textual"),
    job_type: Optional[str] = Query(default=None, alias="jobType"),
    date_posted: Optional[DatePosted] = Query(default=None, alias="datePosted"),
    salary: Optional[float] = Query(default=None, ge=0, description="Minimum salary"),
    remote: Optional[bool] = Query(default=None),
    experience_level: Optional[str] = Query(default=None, alias="experienceLevel"),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
    sort_by: JobSortBy = Query(default=JobSortBy.DATE, alias="sortBy"),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """
    Search job postings.

    `filters` in the response lists the facet values present across all
    matching jobs. Searches made with an X-User-Id header are saved to
    that user's history.
    """
    return JobService(db).search(
        user=user,
        query=q,
        location=location,
        radius=radius,
        job_type=job_type,
        date_posted=date_posted,
        salary=salary,
        remote=remote,
        experience_level=experience_level,
        page=page,
        page_size=page_size,
        sort_by=sort_by,
    )


@router.get("/history", response_model=List[SearchHistoryEntry])
def get_search_history(
    limit: int = Query(default=20, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return JobService(db).history(user, limit=limit)


@router.get("/saved", response_model=List[JobResponse])
def get_saved_jobs(
    user_id: str = Query(..., alias="userId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return JobService(db).list_saved(user, user_id)


@router.post("/saved", response_model=JobResponse, status_code=201)
def save_job(
    body: SaveJobRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Save a job for later; saving twice is a no-op."""
    return JobService(db).save(user, body)


@router.delete("/saved/{job_id}", response_model=SuccessResponse)
def unsave_job(
    job_id: str,
    user_id: str = Query(..., alias="userId"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    validate_uuid(job_id, "job_id")
    JobService(db).unsave(user, job_id, user_id)
    return SuccessResponse()


@router.get("/recommended", response_model=List[JobResponse])
def get_recommended_jobs(
    user_id: str = Query(..., alias="userId"),
    limit: int = Query(default=10, ge=1, le=50),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return JobService(db).recommended(user, user_id, limit=limit)


@router.get("/{job_id}", response_model=JobResponse)
def get_job(
    job_id: str,
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    validate_uuid(job_id, "job_id")
    return JobService(db).get(job_id, user=user)


@router.get("/{job_id}/similar", response_model=List[JobResponse])
def get_similar_jobs(
    job_id: str,
    limit: int = Query(default=5, ge=1, le=50),
    user: Optional[User] = Depends(get_optional_user),
    db: Session = Depends(get_db)
):
    """Jobs with the most skill and title overlap."""
    validate_uuid(job_id, "job_id")
    return JobService(db).similar(job_id, limit=limit, user=user)
