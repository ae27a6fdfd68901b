"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from newsdesk.domain.entities import Article, ArticleFilters, ArticlePage, ArticleStatus, TrendingParams


class ArticleRepository(ABC):
    """Port for article persistence and querying — implemented in the infrastructure layer.

    Implementations raise ``QueryFailedError`` for any store-level fault.
    """

    @abstractmethod
    async def get_by_id(self, article_id: int) -> Article | None:
        """Retrieve a single article, with author fields, by its ID."""
        ...

    @abstractmethod
    async def create(self, article: Article) -> Article:
        """Persist a new article and return it with the generated ID."""
        ...

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """Write back the editable and workflow fields of an existing article."""
        ...

    @abstractmethod
    async def delete(self, article_id: int) -> bool:
        """Delete an article. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def find_with_filters(
        self, filters: ArticleFilters, default_sort: str = "created_at"
    ) -> ArticlePage:
        """Filter, search, sort and paginate articles."""
        ...

    @abstractmethod
    async def find_trending(
        self, params: TrendingParams, author_id: int | None = None
    ) -> ArticlePage:
        """Rank eligible approved articles by trending score."""
        ...

    @abstractmethod
    async def increment_view_count(self, article_id: int) -> None:
        """Add one view to an approved article; other statuses are left untouched."""
        ...

    @abstractmethod
    async def bulk_delete(self, article_ids: list[int]) -> int:
        """Delete every listed article. Returns the number of rows removed."""
        ...

    @abstractmethod
    async def bulk_transition(
        self,
        article_ids: list[int],
        from_status: ArticleStatus,
        to_status: ArticleStatus,
        rejection_reason: str | None = None,
    ) -> int:
        """Move listed articles currently in ``from_status`` to ``to_status``."""
        ...

    @abstractmethod
    async def bulk_set_top_news(self, article_ids: list[int], is_top_news: bool) -> int:
        """Flag or unflag listed articles; flagging only touches approved ones."""
        ...

    @abstractmethod
    async def count_existing(self, article_ids: list[int]) -> int:
        """Count how many of the given IDs exist."""
        ...
