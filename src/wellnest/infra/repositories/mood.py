"""SQLModel implementation of the mood repository."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import col, select

from ...models.mood import MoodCheckin
from ..database import SessionFactory, store_errors


class SQLModelMoodRepository:
    """SQLModel-based mood check-in repository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def create(self, checkin: MoodCheckin, *, user_id: int) -> MoodCheckin:
        with store_errors("save check-in"), self.session_factory() as session:
            checkin.user_id = user_id
            session.add(checkin)
            session.commit()
            session.refresh(checkin)
            session.expunge(checkin)
            return checkin

    def list_recent(self, *, user_id: int, limit: int) -> list[MoodCheckin]:
        with store_errors("load check-ins"), self.session_factory() as session:
            statement = (
                select(MoodCheckin)
                .where(MoodCheckin.user_id == user_id)
                .order_by(col(MoodCheckin.created_at).desc(), col(MoodCheckin.id).desc())
                .limit(limit)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_since(self, since: datetime, *, user_id: int) -> list[MoodCheckin]:
        with store_errors("load check-ins"), self.session_factory() as session:
            statement = (
                select(MoodCheckin)
                .where(MoodCheckin.user_id == user_id)
                .where(MoodCheckin.created_at >= since)
                .order_by(col(MoodCheckin.created_at))
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows
