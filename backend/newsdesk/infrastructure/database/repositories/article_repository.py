"""Concrete repository implementation backed by SQLAlchemy.

Listing, search and trending share one shape: compile the WHERE clause,
count the matching rows, derive page metadata from that total, then fetch
one page joined with the author's name and email. The count and the page
fetch are separate round-trips and are not wrapped in a transaction.
"""

import json
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import ColumnElement, DateTime, and_, delete, func, literal, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from newsdesk.application.interfaces import ArticleRepository
from newsdesk.domain.entities import (
    Article,
    ArticleFilters,
    ArticlePage,
    ArticleStatus,
    TrendingParams,
    calculate_pagination,
)
from newsdesk.domain.exceptions import EntityNotFoundError, QueryFailedError
from newsdesk.infrastructure.database.models import ArticleModel, AuthorModel
from newsdesk.infrastructure.database.querying import (
    PUBLIC_DEFAULT_SORT,
    FilterCompiler,
    SortResolver,
    TrendingScoreCalculator,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _page_bounds(page: int | None, limit: int | None) -> tuple[int, int]:
    """Clamp page to >= 1 and limit to [1, MAX_PAGE_SIZE]."""
    return max(1, page or 1), max(1, min(MAX_PAGE_SIZE, limit or DEFAULT_PAGE_SIZE))


def _parse_tags(raw: Any) -> list[str]:
    """Materialize the stored tag column into a list."""
    if raw is None:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return []
    if not isinstance(raw, list):
        return []
    return [str(tag) for tag in raw]


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions."""

    def __init__(
        self,
        session: AsyncSession,
        dialect: str | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._session = session
        self._dialect = dialect
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def dialect(self) -> str:
        if self._dialect is None:
            self._dialect = self._session.get_bind().dialect.name
        return self._dialect

    @contextmanager
    def _store_errors(self, operation: str) -> Iterator[None]:
        """Log driver faults in full and re-raise them as QueryFailedError."""
        try:
            yield
        except SQLAlchemyError as exc:
            logger.exception("Article %s failed against the store", operation)
            raise QueryFailedError(operation) from exc

    # ── Mapping ──────────────────────────────────────────────────────

    def _to_entity(
        self,
        model: ArticleModel,
        author_name: str | None = None,
        author_email: str | None = None,
    ) -> Article:
        """Map ORM model → domain entity."""
        return Article(
            id=model.id,
            author_id=model.author_id,
            title=model.title,
            description=model.description,
            content=model.content or "",
            category=model.category,
            region=model.region,
            tags=_parse_tags(model.tags),
            image=model.image,
            status=ArticleStatus(model.status),
            rejection_reason=model.rejection_reason,
            is_top_news=bool(model.is_top_news),
            views_count=model.views_count,
            publish_date=model.publish_date,
            author_name=author_name,
            author_email=author_email,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Article) -> ArticleModel:
        """Map domain entity → ORM model (for creation)."""
        return ArticleModel(
            author_id=entity.author_id,
            title=entity.title,
            description=entity.description,
            content=entity.content,
            category=entity.category,
            region=entity.region,
            tags=list(entity.tags) or None,
            image=entity.image,
            status=entity.status.value,
            is_top_news=entity.is_top_news,
            views_count=entity.views_count,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    @staticmethod
    def _article_select(*extra: ColumnElement[Any]) -> Select:
        return (
            select(
                ArticleModel,
                func.coalesce(AuthorModel.name, "Unknown").label("author_name"),
                func.coalesce(AuthorModel.email, "").label("author_email"),
                *extra,
            )
            .outerjoin(AuthorModel, ArticleModel.author_id == AuthorModel.id)
            .execution_options(populate_existing=True)
        )

    async def _count(self, where: ColumnElement[bool]) -> int:
        stmt = (
            select(func.count())
            .select_from(ArticleModel)
            .outerjoin(AuthorModel, ArticleModel.author_id == AuthorModel.id)
            .where(where)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    # ── CRUD ─────────────────────────────────────────────────────────

    async def get_by_id(self, article_id: int) -> Article | None:
        stmt = self._article_select().where(ArticleModel.id == article_id)
        with self._store_errors("lookup"):
            result = await self._session.execute(stmt)
            row = result.first()
        if row is None:
            return None
        model, author_name, author_email = row
        return self._to_entity(model, author_name, author_email)

    async def create(self, article: Article) -> Article:
        model = self._to_model(article)
        with self._store_errors("create"):
            self._session.add(model)
            await self._session.flush()
        created = await self.get_by_id(model.id)
        if created is None:
            raise QueryFailedError("create")
        return created

    async def update(self, article: Article) -> Article:
        with self._store_errors("update"):
            model = await self._session.get(ArticleModel, article.id)
            if model is None:
                raise EntityNotFoundError("Article", article.id)
            model.title = article.title
            model.description = article.description
            model.content = article.content
            model.category = article.category
            model.region = article.region
            model.tags = list(article.tags) or None
            model.image = article.image
            model.status = article.status.value
            model.rejection_reason = article.rejection_reason
            model.is_top_news = article.is_top_news
            model.publish_date = article.publish_date
            model.updated_at = article.updated_at
            await self._session.flush()
        updated = await self.get_by_id(article.id)
        if updated is None:
            raise QueryFailedError("update")
        return updated

    async def delete(self, article_id: int) -> bool:
        with self._store_errors("delete"):
            model = await self._session.get(ArticleModel, article_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.flush()
        return True

    # ── Query engine ─────────────────────────────────────────────────

    async def find_with_filters(
        self, filters: ArticleFilters, default_sort: str = "created_at"
    ) -> ArticlePage:
        compiled = FilterCompiler(self.dialect).compile(filters)
        page, limit = _page_bounds(filters.page, filters.limit)
        if filters.search and not filters.sort_by:
            default_sort = PUBLIC_DEFAULT_SORT
        order_by = SortResolver(default_sort).order_by(filters.sort_by, filters.sort_order)

        logger.debug(
            "Article query: clauses=%d params=%s order_by=%s page=%d limit=%d",
            len(compiled.clauses), compiled.params, order_by, page, limit,
        )

        with self._store_errors("query"):
            total = await self._count(compiled.where)
            stmt = (
                self._article_select()
                .where(compiled.where)
                .order_by(*order_by)
                .offset((page - 1) * limit)
                .limit(limit)
            )
            result = await self._session.execute(stmt)
            rows = result.all()

        return ArticlePage(
            articles=[self._to_entity(*row) for row in rows],
            pagination=calculate_pagination(page, limit, total),
        )

    async def find_trending(
        self, params: TrendingParams, author_id: int | None = None
    ) -> ArticlePage:
        plan = TrendingScoreCalculator(self.dialect, now=self._clock()).score_expression(
            params.timeframe
        )
        eligibility = list(plan.eligibility)
        if author_id is not None:
            eligibility.append(ArticleModel.author_id == author_id)
        where = and_(*eligibility)
        page, limit = _page_bounds(params.page, params.limit)

        score = plan.score.label("trending_score")
        stmt = (
            self._article_select(
                score,
                plan.views_per_hour.label("views_per_hour"),
                plan.hours_since_publish.label("hours_since_publish"),
            )
            .where(where)
            .order_by(score.desc(), ArticleModel.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )

        with self._store_errors("trending query"):
            total = await self._count(where)
            result = await self._session.execute(stmt)
            rows = result.all()

        articles: list[Article] = []
        for model, author_name, author_email, trending_score, views_per_hour, hours in rows:
            logger.debug(
                "Trending[%s] article=%s score=%.2f views_per_hour=%.2f hours_since_publish=%s",
                plan.timeframe.value, model.id, trending_score, views_per_hour, hours,
            )
            # diagnostics are dropped here; only the persisted fields leave the repository
            articles.append(self._to_entity(model, author_name, author_email))

        return ArticlePage(articles=articles, pagination=calculate_pagination(page, limit, total))

    # ── Workflow & metrics ───────────────────────────────────────────

    async def increment_view_count(self, article_id: int) -> None:
        stmt = (
            update(ArticleModel)
            .where(
                ArticleModel.id == article_id,
                ArticleModel.status == ArticleStatus.APPROVED.value,
            )
            .values(views_count=ArticleModel.views_count + 1)
            .execution_options(synchronize_session=False)
        )
        with self._store_errors("view increment"):
            await self._session.execute(stmt)

    async def bulk_delete(self, article_ids: list[int]) -> int:
        if not article_ids:
            return 0
        stmt = (
            delete(ArticleModel)
            .where(ArticleModel.id.in_(article_ids))
            .execution_options(synchronize_session=False)
        )
        with self._store_errors("bulk delete"):
            result = await self._session.execute(stmt)
        return result.rowcount

    async def bulk_transition(
        self,
        article_ids: list[int],
        from_status: ArticleStatus,
        to_status: ArticleStatus,
        rejection_reason: str | None = None,
    ) -> int:
        if not article_ids:
            return 0
        values: dict[str, Any] = {
            "status": to_status.value,
            "rejection_reason": rejection_reason if to_status is ArticleStatus.REJECTED else None,
            "updated_at": self._clock(),
        }
        if to_status is ArticleStatus.APPROVED:
            # publish_date is stamped on first approval only
            values["publish_date"] = func.coalesce(
                ArticleModel.publish_date, literal(self._clock(), DateTime(timezone=True))
            )
        stmt = (
            update(ArticleModel)
            .where(
                ArticleModel.id.in_(article_ids),
                ArticleModel.status == from_status.value,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        with self._store_errors("bulk status update"):
            result = await self._session.execute(stmt)
        return result.rowcount

    async def bulk_set_top_news(self, article_ids: list[int], is_top_news: bool) -> int:
        if not article_ids:
            return 0
        conditions = [ArticleModel.id.in_(article_ids)]
        if is_top_news:
            conditions.append(ArticleModel.status == ArticleStatus.APPROVED.value)
        stmt = (
            update(ArticleModel)
            .where(*conditions)
            .values(is_top_news=is_top_news, updated_at=self._clock())
            .execution_options(synchronize_session=False)
        )
        with self._store_errors("bulk top-news update"):
            result = await self._session.execute(stmt)
        return result.rowcount

    async def count_existing(self, article_ids: list[int]) -> int:
        if not article_ids:
            return 0
        stmt = select(func.count()).select_from(ArticleModel).where(ArticleModel.id.in_(article_ids))
        with self._store_errors("existence check"):
            result = await self._session.execute(stmt)
        return result.scalar_one()
