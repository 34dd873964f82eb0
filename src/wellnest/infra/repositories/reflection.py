"""SQLModel implementation of the reflection repository."""

from __future__ import annotations

from sqlmodel import col, select

from ...models.reflection import Reflection
from ..database import SessionFactory, store_errors


class SQLModelReflectionRepository:
    """SQLModel-based reflection repository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def create(self, reflection: Reflection, *, user_id: int) -> Reflection:
        with store_errors("save reflection"), self.session_factory() as session:
            reflection.user_id = user_id
            session.add(reflection)
            session.commit()
            session.refresh(reflection)
            session.expunge(reflection)
            return reflection

    def list_all(self, *, user_id: int) -> list[Reflection]:
        with store_errors("load reflections"), self.session_factory() as session:
            statement = (
                select(Reflection)
                .where(Reflection.user_id == user_id)
                .order_by(col(Reflection.created_at).desc(), col(Reflection.id).desc())
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_recent(self, *, user_id: int, limit: int) -> list[Reflection]:
        with store_errors("load reflections"), self.session_factory() as session:
            statement = (
                select(Reflection)
                .where(Reflection.user_id == user_id)
                .order_by(col(Reflection.created_at).desc(), col(Reflection.id).desc())
                .limit(limit)
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows
