"""Tests for the database init and verification scripts against SQLite files."""
from sqlalchemy import create_engine, text

from database.models import Base
from scripts.init_db import init_db, run_sql_file
from scripts.verify_db import EXPECTED_TABLES, verify_schema


def test_expected_tables_cover_core_records():
    for table in ("users", "resumes", "cover_letters", "jobs", "job_applications", "retirement_plans"):
        assert table in EXPECTED_TABLES


def test_init_then_verify(tmp_path):
    url = f"sqlite:///{tmp_path / 'maxjoboffers.db'}"
    init_db(url)

    engine = create_engine(url)
    try:
        present, missing, counts = verify_schema(engine)
    finally:
        engine.dispose()

    assert missing == []
    assert set(EXPECTED_TABLES) <= set(present)
    assert all(count == 0 for count in counts.values())


def test_verify_reports_missing_tables(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'partial.db'}")
    Base.metadata.tables["users"].create(engine)
    with engine.begin() as connection:
        connection.execute(text("INSERT INTO users (id, email, is_active, created_at, updated_at) "
                                "VALUES ('0b7c6f2e5d4a4c3b9a8f7e6d5c4b3a21', 'a@example.com', 1, "
                                "'2026-10-19 00:00:00', '2026-10-19 00:00:00')"))
    try:
        present, missing, counts = verify_schema(engine)
    finally:
        engine.dispose()

    assert present == ["users"]
    assert "resumes" in missing
    assert counts == {"users": 1}


def test_run_sql_file_missing_file(tmp_path):
    assert run_sql_file("postgresql://localhost/db", tmp_path / "nope.sql") == 1
