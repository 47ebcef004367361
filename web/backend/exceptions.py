#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    status_code = 500


class NotFoundException(ServiceException):
    """Raised when a requested record does not exist."""
    status_code = 404


class ResumeNotFoundException(NotFoundException):
    pass


class CoverLetterNotFoundException(NotFoundException):
    pass


class InterviewPrepNotFoundException(NotFoundException):
    pass


class InterviewSessionNotFoundException(NotFoundException):
    pass


class FeedbackNotFoundException(NotFoundException):
    pass


class JobNotFoundException(NotFoundException):
    """Raised when a job is not found."""
    pass


class ApplicationNotFoundException(NotFoundException):
    pass


class RetirementPlanNotFoundException(NotFoundException):
    pass


class ValidationException(ServiceException):
    """Raised when input is well-formed but violates a business rule."""
    status_code = 400


class AuthenticationException(ServiceException):
    """Raised when the caller cannot be identified."""
    status_code = 401


class AuthorizationException(ServiceException):
    """Raised when the caller acts on another user's records."""
    status_code = 403


class SlotUnavailableException(ServiceException):
    """Raised when an advisor slot is already booked or outside advisor hours."""
    status_code = 409


class GenerationException(ServiceException):
    """Raised when the AI backend fails or returns unusable output."""
    status_code = 502


class StorageException(ServiceException):
    """Raised when an S3 operation fails."""
    status_code = 502


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    if exc.status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"{exc.__class__.__name__} in {request.url.path}: {exc}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
