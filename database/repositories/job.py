import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Set

from sqlalchemy import Select, case, delete, func, or_, select

from database.models import Job, SavedJob, JobSearchHistory
from database.repositories.base import BaseRepository, as_uuid

logger = logging.getLogger(__name__)

SALARY_BUCKETS = (
    (0, 50_000, "Under $50k"),
    (50_000, 100_000, "$50k - $100k"),
    (100_000, 150_000, "$100k - $150k"),
    (150_000, 200_000, "$150k - $200k"),
    (200_000, None, "$200k+"),
)


@dataclass
class JobSearchFilters:
    query: Optional[str] = None
    location: Optional[str] = None
    job_type: Optional[str] = None
    posted_after: Optional[datetime] = None
    min_salary: Optional[float] = None
    remote: Optional[bool] = None
    experience_level: Optional[str] = None
    education_level: Optional[str] = None
    industry: Optional[str] = None
    skills: List[str] = field(default_factory=list)


class JobRepository(BaseRepository):
    def get_by_id(self, job_id: Any) -> Optional[Job]:
        return self.db.get(Job, as_uuid(job_id))

    def get_by_source(self, source: str, source_id: str) -> Optional[Job]:
        stmt = select(Job).where(Job.source == source, Job.source_id == source_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def create(self, **fields) -> Job:
        return self.add(Job(**fields))

    # --- search ---------------------------------------------------------

    def search_statement(self, filters: JobSearchFilters) -> Select:
        stmt = select(Job)
        if filters.query:
            pattern = f"%{filters.query.strip()}%"
            stmt = stmt.where(or_(
                Job.title.ilike(pattern),
                Job.company.ilike(pattern),
                Job.description.ilike(pattern),
            ))
        if filters.location:
            stmt = stmt.where(Job.location.ilike(f"%{filters.location.strip()}%"))
        if filters.job_type:
            stmt = stmt.where(func.lower(Job.job_type) == filters.job_type.lower())
        if filters.posted_after is not None:
            stmt = stmt.where(Job.date_posted >= filters.posted_after)
        if filters.min_salary is not None:
            stmt = stmt.where(or_(
                Job.salary_max >= filters.min_salary,
                Job.salary_min >= filters.min_salary,
            ))
        if filters.remote is not None:
            stmt = stmt.where(Job.remote.is_(filters.remote))
        if filters.experience_level:
            stmt = stmt.where(func.lower(Job.experience_level) == filters.experience_level.lower())
        if filters.education_level:
            stmt = stmt.where(func.lower(Job.education_level) == filters.education_level.lower())
        if filters.industry:
            stmt = stmt.where(func.lower(Job.industry) == filters.industry.lower())
        return stmt

    def count(self, stmt: Select) -> int:
        return self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()

    def page(self, stmt: Select, sort_by: str, query: Optional[str], offset: int, limit: int) -> List[Job]:
        if sort_by == "salary":
            ordering = [Job.salary_max.desc().nulls_last(), Job.salary_min.desc().nulls_last(), Job.date_posted.desc()]
        elif sort_by == "relevance" and query:
            pattern = f"%{query.strip()}%"
            score = (
                case((Job.title.ilike(pattern), 3), else_=0)
                + case((Job.company.ilike(pattern), 2), else_=0)
                + case((Job.description.ilike(pattern), 1), else_=0)
            )
            ordering = [score.desc(), Job.date_posted.desc()]
        else:
            ordering = [Job.date_posted.desc()]

        stmt = stmt.order_by(*ordering, Job.id).offset(offset).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def facets(self, stmt: Select) -> Dict[str, Any]:
        """Distinct facet values present in the full (unpaginated) result set."""
        subq = stmt.subquery()

        def distinct_values(column) -> List[str]:
            rows = self.db.execute(
                select(column).where(column.is_not(None)).distinct().order_by(column)
            ).scalars().all()
            return [r for r in rows if r]

        salaries = self.db.execute(
            select(func.coalesce(subq.c.salary_max, subq.c.salary_min))
        ).scalars().all()
        salary_ranges = []
        for low, high, label in SALARY_BUCKETS:
            if any(s is not None and s >= low and (high is None or s < high) for s in salaries):
                salary_ranges.append({"min": low, "max": high, "label": label})

        return {
            "jobTypes": distinct_values(subq.c.job_type),
            "locations": distinct_values(subq.c.location),
            "companies": distinct_values(subq.c.company),
            "industries": distinct_values(subq.c.industry),
            "experienceLevels": distinct_values(subq.c.experience_level),
            "educationLevels": distinct_values(subq.c.education_level),
            "salaryRanges": salary_ranges,
        }

    def recent(self, limit: int = 500, exclude_ids: Iterable[Any] = ()) -> List[Job]:
        """Most recent postings, used as the candidate pool for similarity ranking."""
        stmt = select(Job).order_by(Job.date_posted.desc()).limit(limit)
        excluded = [as_uuid(i) for i in exclude_ids]
        if excluded:
            stmt = stmt.where(Job.id.not_in(excluded))
        return list(self.db.execute(stmt).scalars().all())

    # --- saved jobs -----------------------------------------------------

    def save_for_user(self, user_id: Any, job_id: Any) -> SavedJob:
        existing = self.db.execute(
            select(SavedJob).where(SavedJob.user_id == as_uuid(user_id), SavedJob.job_id == as_uuid(job_id))
        ).scalar_one_or_none()
        if existing:
            return existing
        return self.add(SavedJob(user_id=as_uuid(user_id), job_id=as_uuid(job_id)))

    def unsave_for_user(self, user_id: Any, job_id: Any) -> bool:
        result = self.db.execute(
            delete(SavedJob).where(SavedJob.user_id == as_uuid(user_id), SavedJob.job_id == as_uuid(job_id))
        )
        return result.rowcount > 0

    def list_saved(self, user_id: Any) -> List[Job]:
        stmt = (
            select(Job)
            .join(SavedJob, SavedJob.job_id == Job.id)
            .where(SavedJob.user_id == as_uuid(user_id))
            .order_by(SavedJob.saved_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def saved_ids(self, user_id: Any, job_ids: Optional[Iterable[Any]] = None) -> Set[Any]:
        stmt = select(SavedJob.job_id).where(SavedJob.user_id == as_uuid(user_id))
        if job_ids is not None:
            stmt = stmt.where(SavedJob.job_id.in_([as_uuid(j) for j in job_ids]))
        return set(self.db.execute(stmt).scalars().all())

    # --- history --------------------------------------------------------

    def record_search(self, user_id: Any, query: str, location: Optional[str],
                      filters: Dict[str, Any], result_count: int) -> JobSearchHistory:
        return self.add(JobSearchHistory(
            user_id=as_uuid(user_id),
            query=query or '',
            location=location,
            filters=filters,
            result_count=result_count,
        ))

    def search_history(self, user_id: Any, limit: int = 20) -> List[JobSearchHistory]:
        stmt = (
            select(JobSearchHistory)
            .where(JobSearchHistory.user_id == as_uuid(user_id))
            .order_by(JobSearchHistory.searched_at.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())
