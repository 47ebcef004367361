#!/usr/bin/env python3
"""
Retirement service - plans, document uploads, advisor scheduling and
rollover incentives.
"""

import logging
import uuid
from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.config_loader import StorageConfig
from core.enums import RetirementPlanStatus
from core.retirement import AdvisorCalendar, IncentiveCalculator
from core.retirement.scheduling import to_utc
from database.models import RetirementPlan, User
from database.repositories import RetirementRepository
from storage import S3Uploader, validate_upload
from storage.s3_uploader import S3Error
from ..dependencies import ensure_owner
from ..exceptions import (
    RetirementPlanNotFoundException,
    SlotUnavailableException,
    StorageException,
    ValidationException,
)
from ..models.requests import AppointmentRequest, RetirementPlanRequest, RetirementPlanUpdate
from ..models.responses import (
    AppointmentResponse,
    DocumentResponse,
    IncentiveCalculationResponse,
    IncentiveTierResponse,
    RetirementPlanResponse,
    RolloverIncentiveResponse,
    TimeSlotResponse,
)
from ..utils import safe_datetime_iso, safe_float

logger = logging.getLogger(__name__)

DOCUMENT_PREFIX = "retirement-documents"


class RetirementService:
    """Service for the retirement planning lead funnel."""

    def __init__(self, db: Session, calculator: Optional[IncentiveCalculator] = None,
                 calendar: Optional[AdvisorCalendar] = None):
        self.db = db
        self.repo = RetirementRepository(db)
        self.calculator = calculator or IncentiveCalculator()
        self.calendar = calendar or AdvisorCalendar()

    # --- plans ----------------------------------------------------------

    def create_plan(self, user: User, request: RetirementPlanRequest) -> RetirementPlanResponse:
        """
        Create a plan in 'pending' status and book its consultation slot.

        Raises:
            AuthorizationException: userId is not the acting user.
            ValidationException: unknown or foreign document ids.
            SlotUnavailableException: slot taken or outside advisor hours.
        """
        ensure_owner(user, request.user_id, "create a plan for this user")
        self._check_documents(user, request.document_ids)
        slot = self._check_slot(request.appointment_date_time)

        fields = request.model_dump(exclude={'user_id', 'appointment_date_time'})
        plan = self.repo.create_plan(
            user.id,
            **fields,
            status=RetirementPlanStatus.PENDING.value,
            appointment_date_time=slot,
            appointment_confirmed=False,
        )
        self._book(user, slot, plan.id)
        self.db.commit()

        logger.info(f"Created retirement plan {plan.id} for user {user.id} at {slot.isoformat()}")
        return self._to_response(plan)

    def get_plan(self, user: User, plan_id: str) -> RetirementPlanResponse:
        return self._to_response(self._get_owned_plan(user, plan_id))

    def list_plans(self, user: User, user_id: str) -> List[RetirementPlanResponse]:
        ensure_owner(user, user_id, "view plans for this user")
        return [self._to_response(p) for p in self.repo.list_plans(user.id)]

    def update_plan(self, user: User, plan_id: str, update: RetirementPlanUpdate) -> RetirementPlanResponse:
        plan = self._get_owned_plan(user, plan_id)
        changes = update.model_dump(exclude_unset=True)

        if 'document_ids' in changes:
            if not changes['document_ids']:
                raise ValidationException("At least one document is required")
            self._check_documents(user, changes['document_ids'])

        age = changes.get('age', plan.age)
        retirement_age = changes.get('retirement_age', plan.retirement_age)
        if age is not None and retirement_age is not None and retirement_age <= age:
            raise ValidationException("retirementAge must be greater than age")

        status = changes.pop('status', None)
        requested_slot = changes.pop('appointment_date_time', None)
        if requested_slot is not None:
            self._ensure_schedulable(plan)
            self._reschedule(user, plan, self._check_slot(requested_slot, plan.id))

        for field, value in changes.items():
            if value is None and field in ('first_name', 'last_name', 'email', 'phone', 'age',
                                           'retirement_age', 'current_savings', 'has_advisor'):
                continue
            setattr(plan, field, value)

        if status is not None:
            self._transition(plan, RetirementPlanStatus(status))

        self.db.commit()
        return self._to_response(plan)

    def cancel_plan(self, user: User, plan_id: str) -> RetirementPlanResponse:
        plan = self._get_owned_plan(user, plan_id)
        self._transition(plan, RetirementPlanStatus.CANCELLED)
        self.db.commit()
        logger.info(f"Cancelled retirement plan {plan.id}")
        return self._to_response(plan)

    def _transition(self, plan: RetirementPlan, status: RetirementPlanStatus) -> None:
        current = RetirementPlanStatus(plan.status)
        if current == status:
            return
        if current == RetirementPlanStatus.COMPLETED:
            raise ValidationException("Completed plans cannot be changed")
        if current == RetirementPlanStatus.CANCELLED:
            raise ValidationException("Cancelled plans cannot be reopened")

        plan.status = status.value
        if status == RetirementPlanStatus.CANCELLED:
            # Release the advisor slot
            for appointment in self.repo.appointments_for_plan(plan.id):
                appointment.status = 'cancelled'
            plan.appointment_confirmed = False

    def _get_owned_plan(self, user: User, plan_id: str) -> RetirementPlan:
        plan = self.repo.get_plan(plan_id)
        if plan is None:
            raise RetirementPlanNotFoundException(f"Retirement plan not found: {plan_id}")
        ensure_owner(user, plan.user_id, "access this plan")
        return plan

    def _check_documents(self, user: User, document_ids: List[str]) -> None:
        try:
            documents = self.repo.get_documents(document_ids)
        except ValueError:
            raise ValidationException("Invalid document id")
        found = {str(d.id) for d in documents if d.user_id == user.id}
        missing = [d for d in document_ids if d.lower() not in found]
        if missing:
            raise ValidationException(f"Unknown documents: {', '.join(missing)}")

    # --- documents ------------------------------------------------------

    def upload_document(self, user: User, user_id: str, file_name: str, content: bytes,
                        content_type: Optional[str], uploader: S3Uploader,
                        storage_config: StorageConfig) -> DocumentResponse:
        """
        Validate and store an uploaded document under
        retirement-documents/{userId}/{uuid}{ext}.
        """
        ensure_owner(user, user_id, "upload for this user")
        try:
            ext = validate_upload(file_name, len(content), storage_config.max_upload_bytes,
                                  storage_config.allowed_extensions)
        except ValueError as e:
            raise ValidationException(str(e))

        key = f"{DOCUMENT_PREFIX}/{user.id}/{uuid.uuid4()}{ext}"
        try:
            uploaded = uploader.upload_bytes(content, key, content_type)
        except S3Error as e:
            raise StorageException(f"Failed to store document: {e}")

        document = self.repo.add_document(
            user.id,
            file_name=file_name,
            file_type=content_type or ext.lstrip('.'),
            file_size=len(content),
            storage_key=key,
            file_url=uploaded["url"],
        )
        self.db.commit()

        return DocumentResponse(
            id=str(document.id),
            user_id=str(document.user_id),
            file_name=document.file_name,
            file_type=document.file_type,
            file_size=document.file_size,
            upload_date=safe_datetime_iso(document.upload_date),
            file_url=document.file_url,
        )

    # --- scheduling -----------------------------------------------------

    def get_time_slots(self, day: date) -> List[TimeSlotResponse]:
        start = datetime.combine(day, time(0), tzinfo=timezone.utc)
        booked = self.repo.booked_between(start, start + timedelta(days=1))
        return [
            TimeSlotResponse(time=s.time, available=s.available, date_time=s.date_time.isoformat())
            for s in self.calendar.time_slots(day, booked)
        ]

    def book_appointment(self, user: User, request: AppointmentRequest) -> AppointmentResponse:
        """
        Book an advisor slot, optionally moving a plan's consultation to it.

        Raises:
            ValidationException: the plan is cancelled or completed.
            SlotUnavailableException: slot taken or outside advisor hours.
        """
        ensure_owner(user, request.user_id, "schedule for this user")

        plan = None
        if request.plan_id:
            plan = self._get_owned_plan(user, request.plan_id)
            self._ensure_schedulable(plan)

        slot = self._check_slot(request.date_time, plan.id if plan else None)
        if plan is not None:
            appointment = self._reschedule(user, plan, slot)
        else:
            appointment = self._book(user, slot)
        self.db.commit()

        logger.info(f"Booked advisor slot {slot.isoformat()} for user {user.id}")
        return AppointmentResponse(
            appointment_id=str(appointment.id),
            user_id=str(user.id),
            date_time=slot.isoformat(),
            confirmed=appointment.confirmed,
        )

    def _check_slot(self, requested: datetime, plan_id=None) -> datetime:
        """Normalise to UTC and check the slot is free; a plan's own booking does not count."""
        slot = to_utc(requested)
        if not self.calendar.is_valid_slot(slot):
            raise SlotUnavailableException(f"{slot.isoformat()} is not an advisor slot")
        booking = self.repo.find_booking(slot)
        if booking is not None and (plan_id is None or booking.plan_id != plan_id):
            raise SlotUnavailableException(f"Slot {slot.isoformat()} is already booked")
        return slot

    @staticmethod
    def _ensure_schedulable(plan: RetirementPlan) -> None:
        if plan.status in (RetirementPlanStatus.CANCELLED.value, RetirementPlanStatus.COMPLETED.value):
            raise ValidationException(f"Cannot schedule a consultation for a {plan.status} plan")

    def _reschedule(self, user: User, plan: RetirementPlan, slot: datetime):
        """Move the plan's consultation to `slot`, releasing any other booking it holds."""
        current = self.repo.find_booking(slot)
        if current is not None and current.plan_id == plan.id:
            return current

        appointment = self._book(user, slot, plan.id)
        for previous in self.repo.appointments_for_plan(plan.id):
            if previous.id != appointment.id:
                previous.status = 'cancelled'
        plan.appointment_date_time = slot
        plan.appointment_confirmed = False
        return appointment

    def _book(self, user: User, slot: datetime, plan_id=None):
        try:
            return self.repo.book(user.id, slot, plan_id)
        except IntegrityError:
            # Lost a race for the slot against a concurrent booking
            self.db.rollback()
            raise SlotUnavailableException(f"Slot {slot.isoformat()} is already booked")

    # --- incentives -----------------------------------------------------

    def get_incentives(self) -> RolloverIncentiveResponse:
        schedule = self.calculator.schedule()
        return RolloverIncentiveResponse(
            tier1_amount=schedule.tier1_amount,
            tier2_amount=schedule.tier2_amount,
            tier3_amount=schedule.tier3_amount,
            tier4_amount=schedule.tier4_amount,
            tier5_amount=schedule.tier5_amount,
            holding_period_months=schedule.holding_period_months,
            tiers=[IncentiveTierResponse(**row) for row in self.calculator.describe_tiers()],
        )

    def calculate_incentive(self, amount: float) -> IncentiveCalculationResponse:
        try:
            incentive = self.calculator.calculate(amount)
        except ValueError as e:
            raise ValidationException(str(e))
        return IncentiveCalculationResponse(
            amount=amount,
            incentive=incentive,
            holding_period_months=self.calculator.holding_period_months,
        )

    @staticmethod
    def _to_response(plan: RetirementPlan) -> RetirementPlanResponse:
        return RetirementPlanResponse(
            id=str(plan.id),
            user_id=str(plan.user_id),
            created_at=safe_datetime_iso(plan.created_at),
            updated_at=safe_datetime_iso(plan.updated_at),
            status=plan.status,
            first_name=plan.first_name,
            last_name=plan.last_name,
            email=plan.email,
            phone=plan.phone,
            address=plan.address,
            city=plan.city,
            state=plan.state,
            zip=plan.zip,
            age=plan.age,
            retirement_age=plan.retirement_age,
            current_savings=safe_float(plan.current_savings),
            monthly_contribution=safe_float(plan.monthly_contribution, None),
            employer_match=safe_float(plan.employer_match, None),
            has_advisor=plan.has_advisor,
            appointment_date_time=safe_datetime_iso(plan.appointment_date_time),
            appointment_confirmed=plan.appointment_confirmed,
            advisor_id=plan.advisor_id,
            advisor_name=plan.advisor_name,
            document_ids=[str(d) for d in plan.document_ids or []],
            recommendations=plan.recommendations,
        )
