"""Application service (use case) for Article operations.

Input is validated here, before the repository is touched. Store faults
arrive from the repository already translated to ``QueryFailedError`` and
are passed through unchanged.
"""

import logging

from newsdesk.application.interfaces import ArticleRepository
from newsdesk.application.schemas import ArticleCreate, ArticleUpdate
from newsdesk.domain.entities import (
    AUTHOR_EDITABLE_STATUSES,
    Actor,
    Article,
    ArticleFilters,
    ArticlePage,
    ArticleStatus,
    Timeframe,
    TrendingParams,
    can_transition,
    is_valid_category,
    is_valid_region,
)
from newsdesk.domain.exceptions import (
    EntityNotFoundError,
    InvalidStatusTransitionError,
    PermissionDeniedError,
    QueryFailedError,
    ValidationFailedError,
)
from newsdesk.domain.tags import MAX_TAGS, parse_tag_filter, sanitize_tags, validate_tags

logger = logging.getLogger(__name__)

INVALID_TAGS_MESSAGE = f"Invalid tags. Tags must be 2-30 characters long, maximum {MAX_TAGS} tags allowed"


class ArticleService:
    """Orchestrates article business logic. Depends on the repository port (DI)."""

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    # ── Queries ──────────────────────────────────────────────────────

    async def query_articles(
        self, filters: ArticleFilters, default_sort: str = "created_at"
    ) -> ArticlePage:
        """Filter, search, sort and paginate articles."""
        self._validate_filters(filters)
        return await self._repository.find_with_filters(filters, default_sort=default_sort)

    async def search_articles(
        self, filters: ArticleFilters, default_sort: str = "publish_date"
    ) -> ArticlePage:
        """Full-text search; an empty query is rejected instead of listing everything."""
        if not filters.search or not filters.search.strip():
            raise ValidationFailedError("Search query is required")
        return await self.query_articles(filters, default_sort=default_sort)

    async def query_trending(
        self, params: TrendingParams, author_id: int | None = None
    ) -> ArticlePage:
        """Rank approved, viewed articles inside the timeframe's window."""
        try:
            params.timeframe = Timeframe(params.timeframe)
        except ValueError:
            raise ValidationFailedError("Invalid timeframe. Must be one of: day, week, month")
        return await self._repository.find_trending(params, author_id=author_id)

    def _validate_filters(self, filters: ArticleFilters) -> None:
        if filters.status is not None:
            try:
                filters.status = ArticleStatus(filters.status)
            except ValueError:
                raise ValidationFailedError(f"Invalid status '{filters.status}'")
        if filters.category and not is_valid_category(filters.category):
            raise ValidationFailedError(f"Invalid category '{filters.category}'")
        if filters.region and not is_valid_region(filters.region):
            raise ValidationFailedError(f"Invalid region '{filters.region}'")
        if filters.tags:
            filters.tags = parse_tag_filter(filters.tags)
            if not validate_tags(filters.tags):
                raise ValidationFailedError(INVALID_TAGS_MESSAGE)

    # ── CRUD ─────────────────────────────────────────────────────────

    async def get_article(self, article_id: int) -> Article:
        article = await self._repository.get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def create_article(self, author_id: int, data: ArticleCreate) -> Article:
        self._validate_catalog(data.category, data.region)
        article = Article(
            author_id=author_id,
            title=data.title,
            description=data.description,
            content=data.content,
            category=data.category,
            region=data.region,
            tags=self._clean_tags(data.tags),
            image=data.image,
        )
        created = await self._repository.create(article)
        logger.info("Article %s created by author %s", created.id, author_id)
        return created

    async def update_article(self, article_id: int, actor: Actor, data: ArticleUpdate) -> Article:
        """Owners may edit while draft or rejected; admins may edit at any status."""
        article = await self.get_article(article_id)
        if not actor.is_admin:
            if article.author_id != actor.id:
                raise PermissionDeniedError()
            if article.status not in AUTHOR_EDITABLE_STATUSES:
                raise PermissionDeniedError(
                    f"Articles in status '{article.status.value}' can only be edited by an admin"
                )
        if not data.has_updates():
            return article

        self._validate_catalog(data.category, data.region)
        article.update(
            title=data.title,
            description=data.description,
            content=data.content,
            category=data.category,
            region=data.region,
            tags=self._clean_tags(data.tags) if data.tags is not None else None,
            image=data.image,
        )
        return await self._repository.update(article)

    async def delete_article(self, article_id: int, actor: Actor) -> bool:
        article = await self.get_article(article_id)
        if not actor.is_admin and article.author_id != actor.id:
            raise PermissionDeniedError()
        return await self._repository.delete(article_id)

    # ── Workflow ─────────────────────────────────────────────────────

    async def submit_article(self, article_id: int, author_id: int) -> Article:
        article = await self.get_article(article_id)
        if article.author_id != author_id:
            raise PermissionDeniedError()
        article.transition_to(ArticleStatus.PENDING)
        return await self._repository.update(article)

    async def approve_article(self, article_id: int) -> Article:
        article = await self.get_article(article_id)
        article.transition_to(ArticleStatus.APPROVED)
        approved = await self._repository.update(article)
        logger.info("Article %s approved", article_id)
        return approved

    async def reject_article(self, article_id: int, rejection_reason: str | None = None) -> Article:
        article = await self.get_article(article_id)
        article.transition_to(ArticleStatus.REJECTED, rejection_reason=rejection_reason or "")
        return await self._repository.update(article)

    async def mark_top_news(self, article_id: int) -> Article:
        article = await self.get_article(article_id)
        if article.status is not ArticleStatus.APPROVED:
            raise ValidationFailedError("Only approved articles can be marked as top news")
        article.is_top_news = True
        return await self._repository.update(article)

    async def unmark_top_news(self, article_id: int) -> Article:
        article = await self.get_article(article_id)
        article.is_top_news = False
        return await self._repository.update(article)

    async def increment_views(self, article_id: int) -> None:
        """Best effort; a failed increment never fails the read that triggered it."""
        try:
            await self._repository.increment_view_count(article_id)
        except QueryFailedError:
            logger.warning("Could not increment view count for article %s", article_id)

    # ── Bulk (admin) ─────────────────────────────────────────────────

    async def bulk_delete(self, article_ids: list[int]) -> int:
        self._require_ids(article_ids)
        return await self._repository.bulk_delete(article_ids)

    async def bulk_approve(self, article_ids: list[int]) -> int:
        return await self._bulk_transition(article_ids, ArticleStatus.APPROVED)

    async def bulk_reject(self, article_ids: list[int], rejection_reason: str | None = None) -> int:
        return await self._bulk_transition(
            article_ids, ArticleStatus.REJECTED, rejection_reason=rejection_reason or ""
        )

    async def bulk_mark_top_news(self, article_ids: list[int]) -> int:
        self._require_ids(article_ids)
        return await self._repository.bulk_set_top_news(article_ids, True)

    async def bulk_unmark_top_news(self, article_ids: list[int]) -> int:
        self._require_ids(article_ids)
        return await self._repository.bulk_set_top_news(article_ids, False)

    async def _bulk_transition(
        self,
        article_ids: list[int],
        to_status: ArticleStatus,
        rejection_reason: str | None = None,
    ) -> int:
        """Only pending articles move; others in the batch are skipped silently."""
        self._require_ids(article_ids)
        if not can_transition(ArticleStatus.PENDING, to_status):
            raise InvalidStatusTransitionError(ArticleStatus.PENDING.value, to_status.value)
        if await self._repository.count_existing(article_ids) == 0:
            raise EntityNotFoundError("Article", ",".join(str(i) for i in article_ids))
        affected = await self._repository.bulk_transition(
            article_ids, ArticleStatus.PENDING, to_status, rejection_reason=rejection_reason
        )
        logger.info("Bulk %s: %d of %d article(s) updated", to_status.value, affected, len(article_ids))
        return affected

    # ── Helpers ──────────────────────────────────────────────────────

    @staticmethod
    def _require_ids(article_ids: list[int]) -> None:
        if not article_ids:
            raise ValidationFailedError("At least one article id is required")

    @staticmethod
    def _validate_catalog(category: str | None, region: str | None) -> None:
        if category is not None and not is_valid_category(category):
            raise ValidationFailedError("Invalid category")
        if region is not None and not is_valid_region(region):
            raise ValidationFailedError("Invalid region")

    @staticmethod
    def _clean_tags(tags: list[str] | None) -> list[str]:
        if not tags:
            return []
        if not validate_tags(tags):
            raise ValidationFailedError(INVALID_TAGS_MESSAGE)
        return sanitize_tags(tags)
