from .actor import Actor
from .article import (
    ARTICLE_CATEGORIES,
    AUTHOR_EDITABLE_STATUSES,
    REGIONS,
    STATUS_TRANSITIONS,
    Article,
    ArticleStatus,
    can_transition,
    is_valid_category,
    is_valid_region,
)
from .pagination import PaginationInfo, calculate_pagination
from .query import ArticleFilters, ArticlePage, SortDirection, Timeframe, TrendingParams

__all__ = [
    "Actor",
    "ARTICLE_CATEGORIES",
    "AUTHOR_EDITABLE_STATUSES",
    "REGIONS",
    "STATUS_TRANSITIONS",
    "Article",
    "ArticleStatus",
    "can_transition",
    "is_valid_category",
    "is_valid_region",
    "PaginationInfo",
    "calculate_pagination",
    "ArticleFilters",
    "ArticlePage",
    "SortDirection",
    "Timeframe",
    "TrendingParams",
]
