#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

import uuid
from decimal import Decimal
from typing import Optional, Any
from datetime import datetime, timezone

from fastapi import HTTPException, Response


def safe_float(value: Optional[Any], default: Optional[float] = 0.0) -> Optional[float]:
    """
    Safely convert value to float.

    Args:
        value: Value to convert (can be Decimal, int, float, or None).
        default: Default value if conversion fails or value is None.

    Returns:
        Float value.
    """
    if value is None:
        return default

    if isinstance(value, Decimal):
        return float(value)

    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def safe_int(value: Optional[Any], default: int = 0) -> int:
    """
    Safely convert value to int.
    """
    if value is None:
        return default

    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def safe_datetime_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime to an ISO 8601 string in UTC.

    Naive datetimes (SQLite drops tzinfo) are treated as UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


def id_str(value: Optional[Any]) -> Optional[str]:
    return str(value) if value is not None else None


def validate_uuid(value: str, name: str = "id") -> str:
    """Validate that a path parameter is a UUID; 400 otherwise."""
    try:
        uuid.UUID(value)
        return value
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {name} format: {value}. Must be a valid UUID."
        )


def attachment(content: bytes, media_type: str, filename: str) -> Response:
    """File download response with a Content-Disposition header."""
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
