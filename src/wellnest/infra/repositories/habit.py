"""SQLModel implementation of the habit row store."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping, Optional

import sqlalchemy as sa
from sqlmodel import Session, col, select

from ...domain.records import CompletionRecord, HabitRecord
from ...logging_config import get_logger
from ...models.habit import HABITS_TABLE, HabitCompletion
from ..database import SessionFactory, store_errors

logger = get_logger(__name__)


def _to_completion(row: HabitCompletion) -> CompletionRecord:
    return CompletionRecord(
        id=row.id,
        habit_id=row.habit_id,
        user_id=row.user_id,
        completed_date=row.completed_date,
    )


class SQLModelHabitStore:
    """Habit store backed by SQLModel sessions.

    The ``habits`` table is reflected on every call instead of mapped through
    the ``Habit`` model, so databases whose table predates the ``icon``,
    ``frequency`` or ``streak`` columns are read and written without errors.
    """

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    @staticmethod
    def _habits_table(session: Session) -> sa.Table:
        return sa.Table(HABITS_TABLE, sa.MetaData(), autoload_with=session.connection())

    def _select_habits(self, session: Session, *criteria: Any) -> list[HabitRecord]:
        table = self._habits_table(session)
        statement = (
            sa.select(table)
            .where(*(criterion(table) for criterion in criteria))
            .order_by(table.c.created_at.asc(), table.c.id.asc())
        )
        rows = session.exec(statement).mappings().all()
        has_streak = "streak" in table.c
        return [HabitRecord.from_row(row, has_streak=has_streak) for row in rows]

    def list_habits(self, *, user_id: int) -> list[HabitRecord]:
        with store_errors("load habits"), self.session_factory() as session:
            return self._select_habits(session, lambda t: t.c.user_id == user_id)

    def list_habit_names(self, *, user_id: int) -> list[str]:
        with store_errors("load habit names"), self.session_factory() as session:
            table = self._habits_table(session)
            statement = sa.select(table.c.name).where(table.c.user_id == user_id)
            return list(session.exec(statement).scalars().all())

    def get_habit(self, habit_id: int, *, user_id: int) -> Optional[HabitRecord]:
        with store_errors("load habit"), self.session_factory() as session:
            rows = self._select_habits(
                session,
                lambda t: t.c.id == habit_id,
                lambda t: t.c.user_id == user_id,
            )
            return rows[0] if rows else None

    def find_habit_by_name(self, name: str, *, user_id: int) -> Optional[HabitRecord]:
        with store_errors("look up habit"), self.session_factory() as session:
            rows = self._select_habits(
                session,
                lambda t: t.c.name == name,
                lambda t: t.c.user_id == user_id,
            )
            return rows[0] if rows else None

    def insert_habits(self, rows: Iterable[Mapping[str, Any]]) -> int:
        with store_errors("save habits"), self.session_factory() as session:
            table = self._habits_table(session)
            inserted = 0
            for row in rows:
                values = {key: value for key, value in row.items() if key in table.c}
                dropped = sorted(set(row) - set(values))
                if dropped:
                    logger.debug("Skipping columns missing from habits table: %s", dropped)
                session.exec(sa.insert(table).values(**values))
                inserted += 1
            session.commit()
            return inserted

    def update_streak(self, habit_id: int, streak: int) -> None:
        with store_errors("update streak"), self.session_factory() as session:
            table = self._habits_table(session)
            if "streak" not in table.c:
                logger.warning("Streak write skipped; habits table has no streak column")
                return
            session.exec(
                sa.update(table).where(table.c.id == habit_id).values(streak=streak)
            )
            session.commit()

    def delete_habit(self, habit_id: int, *, user_id: int) -> bool:
        with store_errors("delete habit"), self.session_factory() as session:
            table = self._habits_table(session)
            result = session.exec(
                sa.delete(table).where(table.c.id == habit_id, table.c.user_id == user_id)
            )
            if not result.rowcount:
                session.rollback()
                return False
            session.exec(
                sa.delete(HabitCompletion).where(col(HabitCompletion.habit_id) == habit_id)
            )
            session.commit()
            return True

    # Completion records
    def completions_on(self, day: date, *, user_id: int) -> list[CompletionRecord]:
        return self.completions_between(day, day, user_id=user_id)

    def completions_between(
        self, start: date, end: date, *, user_id: int
    ) -> list[CompletionRecord]:
        with store_errors("load completions"), self.session_factory() as session:
            statement = (
                select(HabitCompletion)
                .where(HabitCompletion.user_id == user_id)
                .where(HabitCompletion.completed_date >= start)
                .where(HabitCompletion.completed_date <= end)
                .order_by(col(HabitCompletion.completed_date))
            )
            return [_to_completion(row) for row in session.exec(statement).all()]

    def recent_completion_dates(self, habit_id: int, *, limit: int) -> list[date]:
        with store_errors("load recent completions"), self.session_factory() as session:
            statement = (
                select(HabitCompletion.completed_date)
                .where(HabitCompletion.habit_id == habit_id)
                .order_by(col(HabitCompletion.completed_date).desc())
                .limit(limit)
            )
            return list(session.exec(statement).all())

    def has_completion(self, habit_id: int, day: date) -> bool:
        with store_errors("check completion"), self.session_factory() as session:
            statement = (
                select(HabitCompletion.id)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.completed_date == day)
            )
            return session.exec(statement).first() is not None

    def insert_completion(self, *, habit_id: int, user_id: int, day: date) -> CompletionRecord:
        with store_errors("save completion"), self.session_factory() as session:
            existing = session.exec(
                select(HabitCompletion)
                .where(HabitCompletion.habit_id == habit_id)
                .where(HabitCompletion.completed_date == day)
            ).first()
            if existing:
                return _to_completion(existing)  # at most one per (habit, day)

            row = HabitCompletion(habit_id=habit_id, user_id=user_id, completed_date=day)
            session.add(row)
            session.commit()
            session.refresh(row)
            return _to_completion(row)

    def delete_completion(self, habit_id: int, day: date) -> bool:
        with store_errors("delete completion"), self.session_factory() as session:
            result = session.exec(
                sa.delete(HabitCompletion)
                .where(col(HabitCompletion.habit_id) == habit_id)
                .where(col(HabitCompletion.completed_date) == day)
            )
            session.commit()
            return bool(result.rowcount)
