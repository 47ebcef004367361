from typing import Any, List, Optional

from sqlalchemy import select

from database.models import CoverLetter
from database.repositories.base import BaseRepository, as_uuid


class CoverLetterRepository(BaseRepository):
    def get_by_id(self, cover_letter_id: Any) -> Optional[CoverLetter]:
        return self.db.get(CoverLetter, as_uuid(cover_letter_id))

    def list_for_user(self, user_id: Any) -> List[CoverLetter]:
        stmt = (
            select(CoverLetter)
            .where(CoverLetter.user_id == as_uuid(user_id))
            .order_by(CoverLetter.updated_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: Any, title: str, content: str, **fields) -> CoverLetter:
        return self.add(CoverLetter(
            user_id=as_uuid(user_id),
            title=title,
            content=content,
            version=1,
            **fields,
        ))
