#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import uuid
from functools import lru_cache
from typing import Generator, Optional

import openai
from fastapi import Depends, Header
from sqlalchemy.orm import Session, sessionmaker

from core.app_context import AppContext
from core.llm import LLMProvider
from core.retirement import AdvisorCalendar, IncentiveCalculator
from database.database import build_engine
from database.models import User
from database.repositories import UserRepository
from etl.resume import ResumeParser
from storage import S3Uploader
from .config import get_config
from .exceptions import AuthenticationException, AuthorizationException, GenerationException


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self):
        config = get_config()
        self.engine = build_engine(
            config.database.url,
            pool_size=config.database.pool_size,
            max_overflow=config.database.max_overflow
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session.

        Yields:
            Session: SQLAlchemy database session.
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()


# Global database manager instance
_db_manager = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from _db_manager.get_session()


def get_db_engine():
    """Get the database engine (for advanced use cases)."""
    return _db_manager.engine


@lru_cache()
def get_app_context() -> AppContext:
    return AppContext.build(get_config())


def get_ai_service() -> LLMProvider:
    """LLM provider; a missing API key surfaces as a 502 on generation endpoints only."""
    try:
        return get_app_context().ai_service
    except openai.OpenAIError as e:
        raise GenerationException(f"AI backend is not configured: {e}")


def get_uploader() -> S3Uploader:
    return get_app_context().uploader


def get_incentive_calculator() -> IncentiveCalculator:
    return get_app_context().incentive_calculator


def get_advisor_calendar() -> AdvisorCalendar:
    return get_app_context().advisor_calendar


def get_resume_parser() -> ResumeParser:
    return get_app_context().resume_parser


def get_current_user(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the acting user from the X-User-Id header.

    Raises:
        AuthenticationException: header missing, malformed, or not an active user.
    """
    if not x_user_id:
        raise AuthenticationException("Not authorized")
    try:
        user_id = uuid.UUID(x_user_id)
    except ValueError:
        raise AuthenticationException("Not authorized")

    user = UserRepository(db).get_active(user_id)
    if user is None:
        raise AuthenticationException("Not authorized")
    return user


def get_optional_user(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Like get_current_user, but anonymous requests resolve to None."""
    if not x_user_id:
        return None
    return get_current_user(x_user_id, db)


def ensure_owner(user: User, owner_id, action: str = "access this resource") -> None:
    """Raise AuthorizationException unless `owner_id` is the acting user."""
    if str(owner_id).lower() != str(user.id):
        raise AuthorizationException(f"Not authorized to {action}")
