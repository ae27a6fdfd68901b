"""Domain entities for article listing, search and trending queries."""

from dataclasses import dataclass, field
from enum import Enum

from .article import Article, ArticleStatus
from .pagination import PaginationInfo


class Timeframe(str, Enum):
    """Trending windows. Each maps to its own eligibility window and score weights."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass
class ArticleFilters:
    """Structured filter request for listing and searching articles.

    Every field left as ``None`` is an open filter. ``is_top_news`` is
    tri-state: ``None`` means "either".
    """

    status: ArticleStatus | None = None
    category: str | None = None
    region: str | None = None
    author_id: int | None = None
    is_top_news: bool | None = None
    tags: list[str] = field(default_factory=list)
    search: str | None = None
    page: int = 1
    limit: int = 10
    sort_by: str | None = None
    sort_order: str | None = None


@dataclass
class TrendingParams:
    timeframe: Timeframe = Timeframe.WEEK
    page: int = 1
    limit: int = 10


@dataclass
class ArticlePage:
    """One page of articles plus the pagination metadata computed for it."""

    articles: list[Article]
    pagination: PaginationInfo
