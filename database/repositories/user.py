from typing import Any, Optional

from sqlalchemy import select

from database.models import User
from database.repositories.base import BaseRepository, as_uuid


class UserRepository(BaseRepository):
    def get_by_id(self, user_id: Any) -> Optional[User]:
        return self.db.get(User, as_uuid(user_id))

    def get_active(self, user_id: Any) -> Optional[User]:
        stmt = select(User).where(
            User.id == as_uuid(user_id),
            User.is_active.is_(True),
            User.deleted_at.is_(None),
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip().lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def create(self, email: str, first_name: Optional[str] = None,
               last_name: Optional[str] = None, phone: Optional[str] = None) -> User:
        return self.add(User(
            email=email.strip().lower(),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
        ))
