"""Time-decayed trending score expressions.

Every timeframe shares one formula shape, evaluated in SQL per query::

    score = views * base_weight
          + views / max(age_units, 1) * velocity_weight
          + views * recency_multiplier(age)
          + views / age_units * tail_weight      (when age_units >= tail_min_units)

Ages are measured from ``COALESCE(publish_date, created_at)`` and truncated
to whole units: hours for ``day``, days for ``week``, weeks for ``month``.
Every term is linear in ``views_count`` with a non-negative weight, so the
score never decreases as views grow.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from sqlalchemy import ColumnElement, DateTime, Float, Integer, case, cast, extract, func, literal

from newsdesk.domain.entities import ArticleStatus, Timeframe
from newsdesk.infrastructure.database.models import ArticleModel


@dataclass(frozen=True)
class TrendingProfile:
    """Weights and windows for one trending timeframe."""

    window: timedelta
    unit: timedelta
    base_weight: float
    velocity_weight: float
    # (max age, multiplier) pairs, innermost bucket first
    recency_multipliers: tuple[tuple[timedelta, float], ...]
    tail_weight: float
    tail_min_units: int


PROFILES: dict[Timeframe, TrendingProfile] = {
    Timeframe.DAY: TrendingProfile(
        window=timedelta(days=1),
        unit=timedelta(hours=1),
        base_weight=0.9,
        velocity_weight=50.0,
        recency_multipliers=(
            (timedelta(hours=1), 0.6),
            (timedelta(hours=3), 0.5),
            (timedelta(hours=6), 0.4),
            (timedelta(hours=12), 0.3),
        ),
        tail_weight=10.0,
        tail_min_units=1,
    ),
    Timeframe.WEEK: TrendingProfile(
        window=timedelta(weeks=1),
        unit=timedelta(days=1),
        base_weight=0.8,
        velocity_weight=20.0,
        recency_multipliers=(
            (timedelta(days=1), 0.4),
            (timedelta(days=2), 0.3),
            (timedelta(days=3), 0.2),
            (timedelta(days=5), 0.1),
        ),
        tail_weight=5.0,
        tail_min_units=2,
    ),
    Timeframe.MONTH: TrendingProfile(
        window=timedelta(days=30),
        unit=timedelta(weeks=1),
        base_weight=0.6,
        velocity_weight=10.0,
        recency_multipliers=(
            (timedelta(days=3), 0.2),
            (timedelta(weeks=1), 0.15),
            (timedelta(weeks=2), 0.1),
        ),
        tail_weight=3.0,
        tail_min_units=1,
    ),
}


@dataclass
class TrendingPlan:
    """Eligibility clauses plus the score and diagnostic expressions for one query."""

    timeframe: Timeframe
    window_start: datetime
    eligibility: list[ColumnElement[bool]] = field(default_factory=list)
    score: ColumnElement[float] | None = None
    views_per_hour: ColumnElement[float] | None = None
    hours_since_publish: ColumnElement[int] | None = None


class TrendingScoreCalculator:
    """Builds trending SQL for one dialect, anchored at a fixed ``now``."""

    def __init__(self, dialect: str, now: datetime | None = None):
        self._dialect = dialect
        self._now = now or datetime.now(timezone.utc)

    def score_expression(self, timeframe: Timeframe | str) -> TrendingPlan:
        timeframe = Timeframe(timeframe)
        profile = PROFILES[timeframe]
        published_at = self._published_at()
        views = cast(ArticleModel.views_count, Float)

        age_hours = self._age_hours(published_at)
        units = self._whole(age_hours / (profile.unit / timedelta(hours=1)))
        safe_units = self._at_least_one(units)

        recency = case(
            *(
                (published_at >= self._moment(self._now - max_age), views * multiplier)
                for max_age, multiplier in profile.recency_multipliers
            ),
            else_=0.0,
        )
        tail = case(
            (units >= profile.tail_min_units, views / safe_units * profile.tail_weight),
            else_=0.0,
        )
        score = (
            views * profile.base_weight
            + views / safe_units * profile.velocity_weight
            + recency
            + tail
        )

        hours = self._whole(age_hours)
        window_start = self._now - profile.window
        return TrendingPlan(
            timeframe=timeframe,
            window_start=window_start,
            eligibility=[
                ArticleModel.status == ArticleStatus.APPROVED.value,
                ArticleModel.views_count > 0,
                published_at >= self._moment(window_start),
            ],
            score=score,
            views_per_hour=views / self._at_least_one(hours),
            hours_since_publish=hours,
        )

    # ── Expression helpers ───────────────────────────────────────────

    @staticmethod
    def _published_at() -> ColumnElement[datetime]:
        return func.coalesce(ArticleModel.publish_date, ArticleModel.created_at)

    @staticmethod
    def _moment(value: datetime) -> ColumnElement[datetime]:
        return literal(value, DateTime(timezone=True))

    def _age_hours(self, published_at: ColumnElement[datetime]) -> ColumnElement[float]:
        now = self._moment(self._now)
        if self._dialect == "postgresql":
            return extract("epoch", now - published_at) / 3600.0
        # whole epoch seconds keep exact-hour ages from drifting below the boundary
        return (self._epoch(now) - self._epoch(published_at)) / 3600.0

    @staticmethod
    def _epoch(value: ColumnElement[datetime]) -> ColumnElement[int]:
        return cast(func.strftime("%s", value), Integer)

    def _whole(self, value: ColumnElement[float]) -> ColumnElement[int]:
        """Truncate a non-negative age to whole units, like TIMESTAMPDIFF."""
        if self._dialect == "postgresql":
            return func.floor(value)
        return cast(value, Integer)

    @staticmethod
    def _at_least_one(value: ColumnElement[int]) -> ColumnElement[int]:
        return case((value < 1, 1), else_=value)
