"""
Repository behaviour that depends on PostgreSQL: JSONB columns, the partial
unique index on booked advisor slots and timezone-aware timestamps.

Run with: pytest -m db
"""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from database.repositories import (
    JobRepository,
    JobSearchFilters,
    ResumeRepository,
    RetirementRepository,
    UserRepository,
)

pytestmark = pytest.mark.db

SLOT = datetime(2026, 11, 2, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def pg_user(pg_session):
    user = UserRepository(pg_session).create("pg.user@example.com", first_name="Pat")
    pg_session.commit()
    return user


def test_slot_can_only_be_booked_once(pg_session, pg_user):
    repo = RetirementRepository(pg_session)
    repo.book(pg_user.id, SLOT)
    pg_session.commit()

    with pytest.raises(IntegrityError):
        repo.book(pg_user.id, SLOT)
    pg_session.rollback()


def test_cancelled_slot_can_be_rebooked(pg_session, pg_user):
    repo = RetirementRepository(pg_session)
    first = repo.book(pg_user.id, SLOT)
    first.status = 'cancelled'
    pg_session.commit()

    repo.book(pg_user.id, SLOT)
    pg_session.commit()
    assert repo.find_booking(SLOT).id != first.id


def test_booked_between_respects_offsets(pg_session, pg_user):
    repo = RetirementRepository(pg_session)
    repo.book(pg_user.id, SLOT)
    pg_session.commit()

    eastern = timezone(timedelta(hours=-5))
    start = datetime(2026, 11, 2, 10, 0, tzinfo=eastern)
    booked = repo.booked_between(start, start + timedelta(hours=1))

    assert booked == [SLOT]


def test_resume_content_round_trips_as_jsonb(pg_session, pg_user):
    content = {"skills": ["Python", "SQL"], "workExperience": [{"company": "Acme", "current": True}]}
    resume = ResumeRepository(pg_session).create(pg_user.id, "PG Resume", content)
    pg_session.commit()
    pg_session.expire_all()

    stored = ResumeRepository(pg_session).get_by_id(resume.id)
    assert stored.content == content
    assert stored.skills == ["Python", "SQL"]


def test_search_is_case_insensitive(pg_session):
    repo = JobRepository(pg_session)
    repo.create(title="Staff PYTHON Engineer", company="Acme", description="Platform",
                date_posted=SLOT, source="manual")
    pg_session.commit()

    stmt = repo.search_statement(JobSearchFilters(query="python"))
    assert repo.count(stmt) == 1
