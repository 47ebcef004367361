#!/usr/bin/env python3
"""
Application service - job application tracking, interviews, contacts and stats.
"""

import logging
from collections import Counter
from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from core.enums import INTERVIEWED_STATUSES, OFFER_STATUSES, ApplicationStatus
from core.retirement.scheduling import to_utc
from database.models import JobApplication, User
from database.repositories import (
    ApplicationRepository,
    CoverLetterRepository,
    JobRepository,
    ResumeRepository,
    as_uuid,
)
from ..dependencies import ensure_owner
from ..exceptions import ApplicationNotFoundException, ValidationException
from ..models.requests import (
    ApplicationCreateRequest,
    ApplicationUpdateRequest,
    ContactInput,
    InterviewInput,
)
from ..models.responses import (
    ApplicationResponse,
    ApplicationStatsResponse,
    ContactResponse,
    InterviewResponse,
    StatusChange,
)
from ..utils import id_str, safe_datetime_iso

logger = logging.getLogger(__name__)


def _rate(part: int, whole: int) -> float:
    return round(100.0 * part / whole, 1) if whole else 0.0


class ApplicationService:
    """Service for tracking job applications."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ApplicationRepository(db)

    def list_for_user(
        self,
        user: User,
        user_id: str,
        status: Optional[ApplicationStatus] = None,
        company: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> List[ApplicationResponse]:
        ensure_owner(user, user_id, "view applications for this user")
        if start and end and to_utc(start) > to_utc(end):
            raise ValidationException("start must not be after end")

        applications = self.repo.list_for_user(
            user.id,
            status=status.value if status else None,
            company=company,
            start=to_utc(start) if start else None,
            end=to_utc(end) if end else None,
        )
        return [self._to_response(a) for a in applications]

    def get(self, user: User, application_id: str) -> ApplicationResponse:
        return self._to_response(self._get_owned(user, application_id))

    def create(self, user: User, request: ApplicationCreateRequest) -> ApplicationResponse:
        ensure_owner(user, request.user_id, "track applications for this user")

        fields = request.model_dump(exclude={'user_id', 'job_id', 'resume_id', 'cover_letter_id'},
                                    exclude_none=True, mode='python')
        fields['status'] = request.status.value
        if 'application_date' in fields:
            fields['application_date'] = to_utc(fields['application_date'])
        application = self.repo.create(
            user.id,
            job_id=self._job_ref(request.job_id),
            resume_id=self._resume_ref(user, request.resume_id),
            cover_letter_id=self._cover_letter_ref(user, request.cover_letter_id),
            **fields,
        )
        self.db.commit()

        logger.info(f"Tracking application {application.id} ({application.company}) for user {user.id}")
        return self._to_response(application)

    def update(self, user: User, application_id: str, update: ApplicationUpdateRequest) -> ApplicationResponse:
        """Apply a partial update; a status change is appended to the history."""
        application = self._get_owned(user, application_id)
        changes = update.model_dump(exclude_unset=True)

        status = changes.pop('status', None)
        note = changes.pop('status_note', None)

        for field in ('job_title', 'company', 'application_date'):
            if field in changes and changes[field] is None:
                changes.pop(field)
        if 'application_date' in changes:
            changes['application_date'] = to_utc(changes['application_date'])
        if 'resume_id' in changes:
            changes['resume_id'] = self._resume_ref(user, changes['resume_id'])
        if 'cover_letter_id' in changes:
            changes['cover_letter_id'] = self._cover_letter_ref(user, changes['cover_letter_id'])

        for field, value in changes.items():
            setattr(application, field, value)

        if status is not None and status.value != application.status:
            previous = application.status
            application.status = status.value
            self.repo.record_status(application, previous, status.value, note=note)
            logger.info(f"Application {application.id}: {previous} -> {status.value}")

        self.db.commit()
        return self._to_response(application)

    def delete(self, user: User, application_id: str) -> None:
        application = self._get_owned(user, application_id)
        self.repo.delete(application)
        self.db.commit()

    def add_interview(self, user: User, application_id: str, request: InterviewInput) -> ApplicationResponse:
        application = self._get_owned(user, application_id)
        self.repo.add_interview(
            application,
            date=to_utc(request.date),
            type=request.type,
            notes=request.notes,
            contacts=[c.model_dump(mode='json') for c in request.contacts],
        )
        self.db.commit()
        return self._to_response(application)

    def add_contact(self, user: User, application_id: str, request: ContactInput) -> ApplicationResponse:
        application = self._get_owned(user, application_id)
        self.repo.add_contact(application, **request.model_dump())
        self.db.commit()
        return self._to_response(application)

    def stats(self, user: User, user_id: str) -> ApplicationStatsResponse:
        """
        Totals by status, company and month (YYYY-MM of the application date).

        Rates are percentages of submitted applications, i.e. everything
        past the 'saved' stage.
        """
        ensure_owner(user, user_id, "view application stats for this user")
        applications = self.repo.list_for_user(user.id)

        by_status = Counter(a.status for a in applications)
        by_company = Counter(a.company for a in applications)
        by_month = Counter(to_utc(a.application_date).strftime('%Y-%m')
                           for a in applications if a.application_date)

        submitted = [a for a in applications if a.status != ApplicationStatus.SAVED.value]
        interviewed = sum(1 for a in submitted if ApplicationStatus(a.status) in INTERVIEWED_STATUSES)
        offers = sum(1 for a in submitted if ApplicationStatus(a.status) in OFFER_STATUSES)

        return ApplicationStatsResponse(
            total_applications=len(applications),
            by_status=dict(by_status),
            by_company=dict(by_company),
            by_month=dict(sorted(by_month.items())),
            interview_rate=_rate(interviewed, len(submitted)),
            offer_rate=_rate(offers, len(submitted)),
        )

    # --- references -----------------------------------------------------

    def _job_ref(self, job_id: Optional[str]):
        if not job_id:
            return None
        job = self._lookup(JobRepository(self.db), job_id, "job")
        return job.id

    def _resume_ref(self, user: User, resume_id: Optional[str]):
        if not resume_id:
            return None
        resume = self._lookup(ResumeRepository(self.db), resume_id, "resume")
        ensure_owner(user, resume.user_id, "use this resume")
        return resume.id

    def _cover_letter_ref(self, user: User, cover_letter_id: Optional[str]):
        if not cover_letter_id:
            return None
        letter = self._lookup(CoverLetterRepository(self.db), cover_letter_id, "cover letter")
        ensure_owner(user, letter.user_id, "use this cover letter")
        return letter.id

    @staticmethod
    def _lookup(repo: Any, record_id: str, what: str):
        try:
            record = repo.get_by_id(as_uuid(record_id))
        except ValueError:
            record = None
        if record is None:
            raise ValidationException(f"Unknown {what}: {record_id}")
        return record

    def _get_owned(self, user: User, application_id: str) -> JobApplication:
        try:
            application = self.repo.get_by_id(application_id)
        except ValueError:
            application = None
        if application is None:
            raise ApplicationNotFoundException(f"Application not found: {application_id}")
        ensure_owner(user, application.user_id, "access this application")
        return application

    @staticmethod
    def _to_response(application: JobApplication) -> ApplicationResponse:
        return ApplicationResponse(
            id=str(application.id),
            user_id=str(application.user_id),
            job_id=id_str(application.job_id),
            job_title=application.job_title,
            company=application.company,
            location=application.location,
            application_date=safe_datetime_iso(application.application_date),
            status=application.status,
            notes=application.notes,
            next_steps=application.next_steps,
            resume_id=id_str(application.resume_id),
            cover_letter_id=id_str(application.cover_letter_id),
            interviews=[
                InterviewResponse(
                    id=str(i.id),
                    date=safe_datetime_iso(i.date),
                    type=i.type,
                    notes=i.notes,
                    contacts=[ContactResponse(**c) for c in i.contacts or []],
                )
                for i in application.interviews
            ],
            contacts=[
                ContactResponse(
                    id=str(c.id),
                    name=c.name,
                    title=c.title,
                    email=c.email,
                    phone=c.phone,
                    notes=c.notes,
                )
                for c in application.contacts
            ],
            status_history=[
                StatusChange(
                    from_status=h.from_status,
                    to_status=h.to_status,
                    changed_at=safe_datetime_iso(h.changed_at),
                    note=h.note,
                )
                for h in application.status_history
            ],
            last_updated=safe_datetime_iso(application.last_updated),
        )
