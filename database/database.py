import contextlib
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.config_loader import load_config
from database.models import Base

logger = logging.getLogger(__name__)

_db_config = load_config().database
DATABASE_URL = _db_config.url


def build_engine(url: str, pool_size: int = 10, max_overflow: int = 20):
    """Create an engine; SQLite URLs skip the pool sizing options they don't support."""
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_size=pool_size, max_overflow=max_overflow, pool_pre_ping=True)


engine = build_engine(DATABASE_URL, _db_config.pool_size, _db_config.max_overflow)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_schema(bind=None) -> None:
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextlib.contextmanager
def db_session_scope():
    """Provide a transactional scope around a series of operations."""
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
