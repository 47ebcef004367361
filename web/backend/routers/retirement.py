#!/usr/bin/env python3
"""
Retirement endpoints - plans, document uploads, advisor scheduling and
rollover incentives.
"""

import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from sqlalchemy.orm import Session

from core.config_loader import AppConfig
from core.retirement import AdvisorCalendar, IncentiveCalculator
from database.models import User
from storage import S3Uploader
from ..config import get_config
from ..dependencies import (
    get_advisor_calendar,
    get_current_user,
    get_db,
    get_incentive_calculator,
    get_uploader,
)
from ..models.requests import AppointmentRequest, RetirementPlanRequest, RetirementPlanUpdate
from ..models.responses import (
    AppointmentResponse,
    DocumentResponse,
    IncentiveCalculationResponse,
    RetirementPlanResponse,
    RolloverIncentiveResponse,
    TimeSlotResponse,
)
from ..rate_limit import UPLOAD_LIMIT, limiter
from ..services.retirement_service import RetirementService
from ..utils import validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/retirement", tags=["retirement"])


def get_retirement_service(
    db: Session = Depends(get_db),
    calculator: IncentiveCalculator = Depends(get_incentive_calculator),
    calendar: AdvisorCalendar = Depends(get_advisor_calendar)
) -> RetirementService:
    return RetirementService(db, calculator=calculator, calendar=calendar)


@router.post("/plan", response_model=RetirementPlanResponse, status_code=201)
def create_plan(
    body: RetirementPlanRequest,
    user: User = Depends(get_current_user),
    service: RetirementService = Depends(get_retirement_service)
):
    """
    Create a retirement plan and book its advisor consultation.

    The plan starts as 'pending' with an unconfirmed appointment.
    """
    return service.create_plan(user, body)


@router.get("/plan/{plan_id}", response_model=RetirementPlanResponse)
def get_plan(
    plan_id: str,
    user: User = Depends(get_current_user),
    service: RetirementService = Depends(get_retirement_service)
):
    validate_uuid(plan_id, "plan_id")
    return service.get_plan(user, plan_id)


@router.get("/plans/user/{user_id}", response_model=List[RetirementPlanResponse])
def list_plans(
    user_id: str,
    user: User = Depends(get_current_user),
    service: RetirementService = Depends(get_retirement_service)
):
    return service.list_plans(user, user_id)


@router.put("/plan/{plan_id}", response_model=RetirementPlanResponse)
def update_plan(
    plan_id: str,
    body: RetirementPlanUpdate,
    user: User = Depends(get_current_user),
    service: RetirementService = Depends(get_retirement_service)
):
    validate_uuid(plan_id, "plan_id")
    return service.update_plan(user, plan_id, body)


@router.post("/plan/{plan_id}/cancel", response_model=RetirementPlanResponse)
def cancel_plan(
    plan_id: str,
    user: User = Depends(get_current_user),
    service: RetirementService = Depends(get_retirement_service)
):
    """Cancel a plan and release its advisor slot."""
    validate_uuid(plan_id, "plan_id")
    return service.cancel_plan(user, plan_id)


@router.post("/document/upload", response_model=DocumentResponse, status_code=201)
@limiter.limit(UPLOAD_LIMIT)
async def upload_document(
    request: Request,
    file: UploadFile = File(...),
    user_id: str = Form(..., alias="userId"),
    user: User = Depends(get_current_user),
    uploader: S3Uploader = Depends(get_uploader),
    config: AppConfig = Depends(get_config),
    service: RetirementService = Depends(get_retirement_service)
):
    """
    Upload a statement or other supporting document.

    Stored in S3 under retirement-documents/{userId}/; the returned id is
    what a plan's documentIds refer to.
    """
    content = await file.read()
    return service.upload_document(
        user, user_id, file.filename or "", content, file.content_type,
        uploader=uploader, storage_config=config.storage,
    )


@router.get("/timeslots", response_model=List[TimeSlotResponse])
def get_time_slots(
    day: date = Query(..., alias="date", description="Day to list, YYYY-MM-DD"),
    service: RetirementService = Depends(get_retirement_service)
):
    """Advisor slots for a day; booked slots are marked unavailable."""
    return service.get_time_slots(day)


@router.post("/appointment", response_model=AppointmentResponse, status_code=201)
def book_appointment(
    body: AppointmentRequest,
    user: User = Depends(get_current_user),
    service: RetirementService = Depends(get_retirement_service)
):
    return service.book_appointment(user, body)


@router.get("/incentives", response_model=RolloverIncentiveResponse)
def get_incentives(service: RetirementService = Depends(get_retirement_service)):
    return service.get_incentives()


@router.get("/incentives/calculate", response_model=IncentiveCalculationResponse)
def calculate_incentive(
    amount: float = Query(..., allow_inf_nan=False, description="Rollover amount in dollars"),
    service: RetirementService = Depends(get_retirement_service)
):
    return service.calculate_incentive(amount)
