"""Pydantic DTOs (Data Transfer Objects) for the Article feature."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from newsdesk.domain.entities import ArticlePage, ArticleStatus


class ArticleCreate(BaseModel):
    """Schema for creating a new article."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Monsoon opens the Valley of Flowers"])
    description: str | None = Field(None, examples=["The UNESCO site welcomes its first trekkers."])
    content: str = Field(..., min_length=1)
    category: str = Field(..., examples=["Trekking & Hiking"])
    region: str | None = Field(None, examples=["Chamoli"])
    tags: list[str] | None = Field(None, examples=[["trek", "himalaya"]])
    image: str = Field(..., min_length=1, max_length=1024)


class ArticleUpdate(BaseModel):
    """Schema for updating an existing article — all fields optional.

    Sending ``tags: []`` clears the tag list.
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    content: str | None = Field(None, min_length=1)
    category: str | None = None
    region: str | None = None
    tags: list[str] | None = None
    image: str | None = Field(None, min_length=1, max_length=1024)

    def has_updates(self) -> bool:
        return bool(self.model_dump(exclude_none=True))


class RejectArticleRequest(BaseModel):
    rejection_reason: str | None = Field(None, max_length=2000)


class BulkArticleIds(BaseModel):
    """Schema for admin bulk operations."""

    ids: list[int] = Field(..., examples=[[12, 15, 18]])


class BulkRejectRequest(BulkArticleIds):
    rejection_reason: str | None = Field(None, max_length=2000)


class BulkOperationResponse(BaseModel):
    affected: int


class ArticleResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    author_id: int
    title: str
    description: str | None
    content: str
    category: str
    region: str | None
    tags: list[str]
    image: str | None
    status: ArticleStatus
    rejection_reason: str | None
    is_top_news: bool
    views_count: int
    publish_date: datetime | None
    author_name: str | None
    author_email: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PaginationResponse(BaseModel):
    """Page metadata, serialized with camelCase keys."""

    page: int
    limit: int
    total: int
    total_pages: int = Field(..., serialization_alias="totalPages")
    has_next: bool = Field(..., serialization_alias="hasNext")
    has_prev: bool = Field(..., serialization_alias="hasPrev")

    model_config = ConfigDict(from_attributes=True)


class ArticlePageResponse(BaseModel):
    articles: list[ArticleResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: ArticlePage) -> "ArticlePageResponse":
        return cls(
            articles=[ArticleResponse.model_validate(a, from_attributes=True) for a in page.articles],
            pagination=PaginationResponse.model_validate(page.pagination, from_attributes=True),
        )
