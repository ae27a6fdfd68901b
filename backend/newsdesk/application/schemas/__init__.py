from .article import (
    ArticleCreate,
    ArticlePageResponse,
    ArticleResponse,
    ArticleUpdate,
    BulkArticleIds,
    BulkOperationResponse,
    BulkRejectRequest,
    PaginationResponse,
    RejectArticleRequest,
)

__all__ = [
    "ArticleCreate",
    "ArticlePageResponse",
    "ArticleResponse",
    "ArticleUpdate",
    "BulkArticleIds",
    "BulkOperationResponse",
    "BulkRejectRequest",
    "PaginationResponse",
    "RejectArticleRequest",
]
