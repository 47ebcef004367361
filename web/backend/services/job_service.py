#!/usr/bin/env python3
"""
Job service - search, similar/recommended ranking, saved jobs and search history.
"""

import logging
import math
from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from core.enums import DatePosted, JobSortBy
from core.keywords import overlap_score, term_set
from database.models import Job, User
from database.models.base import utcnow
from database.repositories import JobRepository, JobSearchFilters, ResumeRepository
from ..dependencies import ensure_owner
from ..exceptions import JobNotFoundException, NotFoundException, ValidationException
from ..models.requests import SaveJobRequest
from ..models.responses import (
    JobResponse,
    JobSearchFacets,
    JobSearchResponse,
    SalaryInfo,
    SearchHistoryEntry,
)
from ..utils import safe_datetime_iso, safe_float

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
# Candidate pool for similarity ranking
RANKING_POOL_SIZE = 500


def job_terms(job: Job) -> Set[str]:
    return term_set(job.skills or [], [job.title or ''])


class JobService:
    """Service for job search and saved jobs."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = JobRepository(db)

    def search(
        self,
        user: Optional[User] = None,
        query: Optional[str] = None,
        location: Optional[str] = None,
        radius: Optional[int] = None,
        job_type: Optional[str] = None,
        date_posted: Optional[DatePosted] = None,
        salary: Optional[float] = None,
        remote: Optional[bool] = None,
        experience_level: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
        sort_by: JobSortBy = JobSortBy.DATE
    ) -> JobSearchResponse:
        """
        Search postings with filters, sorting and pagination.

        Facets in the response describe the full result set, not just the
        returned page. Searches by a signed-in user are recorded in history.
        `radius` is accepted for compatibility; location matching is textual.
        """
        if page < 1:
            raise ValidationException("page must be at least 1")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValidationException(f"pageSize must be between 1 and {MAX_PAGE_SIZE}")

        filters = JobSearchFilters(
            query=query,
            location=location,
            job_type=job_type,
            posted_after=utcnow() - date_posted.window if date_posted else None,
            min_salary=salary,
            remote=remote,
            experience_level=experience_level,
        )
        stmt = self.repo.search_statement(filters)
        total = self.repo.count(stmt)
        jobs = self.repo.page(stmt, sort_by.value, query, offset=(page - 1) * page_size, limit=page_size)
        facets = self.repo.facets(stmt)

        saved = self.repo.saved_ids(user.id, [j.id for j in jobs]) if user else set()

        if user is not None:
            self.repo.record_search(
                user.id, query or '', location,
                filters={
                    'jobType': job_type,
                    'datePosted': date_posted.value if date_posted else None,
                    'salary': salary,
                    'remote': remote,
                    'experienceLevel': experience_level,
                    'radius': radius,
                    'sortBy': sort_by.value,
                },
                result_count=total,
            )
            self.db.commit()

        logger.debug(f"Job search q={query!r} location={location!r}: {total} results")
        return JobSearchResponse(
            jobs=[self._to_response(j, saved) for j in jobs],
            total_count=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size) if total else 0,
            filters=JobSearchFacets.model_validate(facets),
        )

    def get(self, job_id: str, user: Optional[User] = None) -> JobResponse:
        job = self._get_job(job_id)
        saved = self.repo.saved_ids(user.id, [job.id]) if user else set()
        return self._to_response(job, saved)

    def similar(self, job_id: str, limit: int = 5, user: Optional[User] = None) -> List[JobResponse]:
        """Jobs ranked by skill and title overlap with the given job."""
        job = self._get_job(job_id)
        ranked = self._rank(job_terms(job), self.repo.recent(RANKING_POOL_SIZE, exclude_ids=[job.id]), limit)
        saved = self.repo.saved_ids(user.id, [j.id for j in ranked]) if user else set()
        return [self._to_response(j, saved) for j in ranked]

    def save(self, user: User, request: SaveJobRequest) -> JobResponse:
        ensure_owner(user, request.user_id, "save jobs for this user")
        job = self._get_job(request.job_id)
        self.repo.save_for_user(user.id, job.id)
        self.db.commit()
        logger.info(f"User {user.id} saved job {job.id}")
        return self._to_response(job, {job.id})

    def unsave(self, user: User, job_id: str, user_id: str) -> None:
        ensure_owner(user, user_id, "remove saved jobs for this user")
        try:
            removed = self.repo.unsave_for_user(user.id, job_id)
        except ValueError:
            removed = False
        if not removed:
            raise NotFoundException(f"Saved job not found: {job_id}")
        self.db.commit()

    def list_saved(self, user: User, user_id: str) -> List[JobResponse]:
        ensure_owner(user, user_id, "view saved jobs for this user")
        jobs = self.repo.list_saved(user.id)
        saved = {j.id for j in jobs}
        return [self._to_response(j, saved) for j in jobs]

    def recommended(self, user: User, user_id: str, limit: int = 10) -> List[JobResponse]:
        """
        Rank unsaved jobs by overlap with the user's resume skills, target
        titles and saved jobs. Users without a profile get the newest jobs.
        """
        ensure_owner(user, user_id, "view recommendations for this user")

        resumes = ResumeRepository(self.db).list_for_user(user.id)
        saved_jobs = self.repo.list_saved(user.id)

        profile = term_set(
            [skill for r in resumes for skill in r.skills],
            [r.target_job_title for r in resumes if r.target_job_title],
        )
        for job in saved_jobs:
            profile |= job_terms(job)

        saved_ids = [j.id for j in saved_jobs]
        pool = self.repo.recent(RANKING_POOL_SIZE, exclude_ids=saved_ids)
        if not profile:
            return [self._to_response(j) for j in pool[:limit]]
        return [self._to_response(j) for j in self._rank(profile, pool, limit)]

    def history(self, user: User, limit: int = 20) -> List[SearchHistoryEntry]:
        return [
            SearchHistoryEntry(
                id=str(h.id),
                user_id=str(h.user_id),
                query=h.query,
                location=h.location,
                timestamp=safe_datetime_iso(h.searched_at),
                result_count=h.result_count,
            )
            for h in self.repo.search_history(user.id, limit=limit)
        ]

    @staticmethod
    def _rank(terms: Set[str], candidates: Iterable[Job], limit: int) -> List[Job]:
        scored = [(overlap_score(terms, job_terms(c)), c) for c in candidates]
        scored = [(s, c) for s, c in scored if s > 0]
        # Stable sort keeps the newest-first pool order among equal scores
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [c for _, c in scored[:limit]]

    def _get_job(self, job_id: str) -> Job:
        try:
            job = self.repo.get_by_id(job_id)
        except ValueError:
            job = None
        if job is None:
            raise JobNotFoundException(f"Job not found: {job_id}")
        return job

    @staticmethod
    def _to_response(job: Job, saved_ids: Optional[Set] = None) -> JobResponse:
        salary = None
        if job.salary_min is not None or job.salary_max is not None:
            salary = SalaryInfo(
                min=safe_float(job.salary_min, None),
                max=safe_float(job.salary_max, None),
                currency=job.salary_currency,
                period=job.salary_period,
            )

        return JobResponse(
            id=str(job.id),
            title=job.title,
            company=job.company,
            location=job.location,
            description=job.description or '',
            requirements=job.requirements,
            responsibilities=job.responsibilities,
            salary=salary,
            benefits=job.benefits or [],
            job_type=job.job_type,
            date_posted=safe_datetime_iso(job.date_posted),
            application_url=job.application_url,
            source=job.source,
            source_id=job.source_id,
            skills=job.skills or [],
            experience_level=job.experience_level,
            education_level=job.education_level,
            industry=job.industry,
            company_size=job.company_size,
            company_type=job.company_type,
            remote=bool(job.remote),
            is_saved=job.id in (saved_ids or set()),
        )
