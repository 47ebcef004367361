from typing import Any, List, Optional

from sqlalchemy import select

from database.models import Resume
from database.repositories.base import BaseRepository, as_uuid


class ResumeRepository(BaseRepository):
    def get_by_id(self, resume_id: Any) -> Optional[Resume]:
        return self.db.get(Resume, as_uuid(resume_id))

    def list_for_user(self, user_id: Any) -> List[Resume]:
        stmt = (
            select(Resume)
            .where(Resume.user_id == as_uuid(user_id))
            .order_by(Resume.updated_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_latest_for_user(self, user_id: Any) -> Optional[Resume]:
        stmt = (
            select(Resume)
            .where(Resume.user_id == as_uuid(user_id))
            .order_by(Resume.updated_at.desc())
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def create(self, user_id: Any, title: str, content: dict, **fields) -> Resume:
        return self.add(Resume(
            user_id=as_uuid(user_id),
            title=title,
            content=content,
            version=1,
            **fields,
        ))
