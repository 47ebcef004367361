from typing import Any, List, Optional

from sqlalchemy import select

from database.models import InterviewPrep, InterviewSession, InterviewFeedback
from database.repositories.base import BaseRepository, as_uuid


class InterviewPrepRepository(BaseRepository):
    def get_by_id(self, prep_id: Any) -> Optional[InterviewPrep]:
        return self.db.get(InterviewPrep, as_uuid(prep_id))

    def list_for_user(self, user_id: Any) -> List[InterviewPrep]:
        stmt = (
            select(InterviewPrep)
            .where(InterviewPrep.user_id == as_uuid(user_id))
            .order_by(InterviewPrep.created_at.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: Any, **fields) -> InterviewPrep:
        return self.add(InterviewPrep(user_id=as_uuid(user_id), **fields))

    def get_session(self, session_id: Any) -> Optional[InterviewSession]:
        return self.db.get(InterviewSession, as_uuid(session_id))

    def start_session(self, user_id: Any, prep_id: Any) -> InterviewSession:
        return self.add(InterviewSession(user_id=as_uuid(user_id), prep_id=as_uuid(prep_id), answers=[]))

    def add_feedback(self, session: InterviewSession, **fields) -> InterviewFeedback:
        feedback = InterviewFeedback(user_id=session.user_id, prep_id=session.prep_id, **fields)
        session.feedback.append(feedback)
        self.db.flush()
        return feedback

    def latest_feedback(self, session_id: Any) -> Optional[InterviewFeedback]:
        stmt = (
            select(InterviewFeedback)
            .where(InterviewFeedback.session_id == as_uuid(session_id))
            .order_by(InterviewFeedback.created_at.desc())
            .limit(1)
        )
        return self.db.execute(stmt).scalar_one_or_none()
