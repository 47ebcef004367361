from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import select

from database.models import JobApplication, ApplicationInterview, ApplicationContact, ApplicationStatusHistory
from database.repositories.base import BaseRepository, as_uuid


class ApplicationRepository(BaseRepository):
    def get_by_id(self, application_id: Any) -> Optional[JobApplication]:
        return self.db.get(JobApplication, as_uuid(application_id))

    def list_for_user(self, user_id: Any, status: Optional[str] = None, company: Optional[str] = None,
                      start: Optional[datetime] = None, end: Optional[datetime] = None) -> List[JobApplication]:
        stmt = select(JobApplication).where(JobApplication.user_id == as_uuid(user_id))
        if status:
            stmt = stmt.where(JobApplication.status == status)
        if company:
            stmt = stmt.where(JobApplication.company.ilike(f"%{company}%"))
        if start is not None:
            stmt = stmt.where(JobApplication.application_date >= start)
        if end is not None:
            stmt = stmt.where(JobApplication.application_date <= end)
        stmt = stmt.order_by(JobApplication.application_date.desc())
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: Any, **fields) -> JobApplication:
        application = self.add(JobApplication(user_id=as_uuid(user_id), **fields))
        self.record_status(application, None, application.status, note="created")
        return application

    def record_status(self, application: JobApplication, from_status: Optional[str], to_status: str,
                      note: Optional[str] = None) -> ApplicationStatusHistory:
        entry = ApplicationStatusHistory(from_status=from_status, to_status=to_status, note=note)
        application.status_history.append(entry)
        self.db.flush()
        return entry

    def add_interview(self, application: JobApplication, **fields) -> ApplicationInterview:
        interview = ApplicationInterview(**fields)
        application.interviews.append(interview)
        self.db.flush()
        return interview

    def add_contact(self, application: JobApplication, **fields) -> ApplicationContact:
        contact = ApplicationContact(**fields)
        application.contacts.append(contact)
        self.db.flush()
        return contact
