"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, create_db_engine, create_session_factory, init_database
from .infra.repositories import (
    SQLModelHabitStore,
    SQLModelMoodRepository,
    SQLModelReflectionRepository,
)
from .services.dates import local_now, local_today, resolve_timezone
from .services.habits import HabitTracker
from .services.insights import InsightsClient


@dataclass
class AppContext:
    """Centralized application context with stores and services."""

    # Configuration
    config: BaseConfig

    # Database
    engine: Engine
    session_factory: SessionFactory

    # Stores
    habit_store: SQLModelHabitStore
    mood_repo: SQLModelMoodRepository
    reflection_repo: SQLModelReflectionRepository

    # Services
    tracker: HabitTracker
    insights: InsightsClient

    tz: Optional[tzinfo] = None

    def today(self) -> date:
        return local_today(self.tz)

    def now(self) -> datetime:
        return local_now(self.tz)


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    tz = resolve_timezone(config.TIMEZONE)
    habit_store = SQLModelHabitStore(session_factory)

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        habit_store=habit_store,
        mood_repo=SQLModelMoodRepository(session_factory),
        reflection_repo=SQLModelReflectionRepository(session_factory),
        tracker=HabitTracker(
            habit_store,
            today_provider=lambda: local_today(tz),
            lookback=config.STREAK_LOOKBACK,
        ),
        insights=InsightsClient(
            config.INSIGHTS_URL,
            api_key=config.INSIGHTS_API_KEY,
            timeout=config.INSIGHTS_TIMEOUT,
        ),
        tz=tz,
    )
