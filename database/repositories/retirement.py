from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional

from sqlalchemy import select

from database.models import RetirementPlan, RetirementDocument, AdvisorAppointment
from database.repositories.base import BaseRepository, as_uuid


class RetirementRepository(BaseRepository):
    # --- plans ----------------------------------------------------------

    def get_plan(self, plan_id: Any) -> Optional[RetirementPlan]:
        return self.db.get(RetirementPlan, as_uuid(plan_id))

    def list_plans(self, user_id: Any) -> List[RetirementPlan]:
        stmt = (
            select(RetirementPlan)
            .where(RetirementPlan.user_id == as_uuid(user_id))
            .order_by(RetirementPlan.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def create_plan(self, user_id: Any, **fields) -> RetirementPlan:
        return self.add(RetirementPlan(user_id=as_uuid(user_id), **fields))

    # --- documents ------------------------------------------------------

    def add_document(self, user_id: Any, **fields) -> RetirementDocument:
        return self.add(RetirementDocument(user_id=as_uuid(user_id), **fields))

    def get_documents(self, document_ids: Iterable[Any]) -> List[RetirementDocument]:
        ids = [as_uuid(d) for d in document_ids]
        if not ids:
            return []
        stmt = select(RetirementDocument).where(RetirementDocument.id.in_(ids))
        return list(self.db.execute(stmt).scalars().all())

    # --- appointments ---------------------------------------------------

    def booked_between(self, start: datetime, end: datetime) -> List[datetime]:
        stmt = select(AdvisorAppointment.date_time).where(
            AdvisorAppointment.status == 'booked',
            AdvisorAppointment.date_time >= start,
            AdvisorAppointment.date_time < end,
        )
        return list(self.db.execute(stmt).scalars().all())

    def find_booking(self, slot: datetime) -> Optional[AdvisorAppointment]:
        """Active appointment at `slot`, matched to the minute."""
        stmt = select(AdvisorAppointment).where(
            AdvisorAppointment.status == 'booked',
            AdvisorAppointment.date_time >= slot,
            AdvisorAppointment.date_time < slot + timedelta(minutes=1),
        ).limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    def book(self, user_id: Any, slot: datetime, plan_id: Any = None) -> AdvisorAppointment:
        return self.add(AdvisorAppointment(
            user_id=as_uuid(user_id),
            plan_id=as_uuid(plan_id),
            date_time=slot,
            confirmed=False,
            status='booked',
        ))

    def appointments_for_plan(self, plan_id: Any) -> List[AdvisorAppointment]:
        stmt = select(AdvisorAppointment).where(
            AdvisorAppointment.plan_id == as_uuid(plan_id),
            AdvisorAppointment.status == 'booked',
        )
        return list(self.db.execute(stmt).scalars().all())
