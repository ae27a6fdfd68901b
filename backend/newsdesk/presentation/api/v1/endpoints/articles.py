"""Author/admin article management endpoints (dashboard)."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from newsdesk.application.schemas import (
    ArticleCreate,
    ArticlePageResponse,
    ArticleResponse,
    ArticleUpdate,
    BulkArticleIds,
    BulkOperationResponse,
    BulkRejectRequest,
    RejectArticleRequest,
)
from newsdesk.application.services import ArticleService
from newsdesk.config import get_settings
from newsdesk.domain.entities import Actor, ArticleFilters, Timeframe, TrendingParams
from newsdesk.infrastructure.dependencies import get_article_service, get_current_actor, require_admin
from newsdesk.presentation.api.v1.errors import DOMAIN_ERRORS, to_http_exception

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Create a new draft article owned by the caller."""
    try:
        article = await service.create_article(actor.id, data)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.get("", response_model=ArticlePageResponse)
async def list_articles(
    status_: str | None = Query(None, alias="status"),
    category: str | None = None,
    region: str | None = None,
    author_id: int | None = None,
    is_top_news: bool | None = None,
    tags: list[str] | None = Query(None, description="Comma-separated or repeated"),
    page: int = 1,
    limit: int | None = None,
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """Filtered dashboard listing. Authors only ever see their own articles."""
    filters = ArticleFilters(
        status=status_,
        category=category,
        region=region,
        author_id=author_id if actor.is_admin else actor.id,
        is_top_news=is_top_news,
        tags=tags or [],
        page=page,
        limit=limit or get_settings().default_page_size,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    try:
        result = await service.query_articles(filters)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticlePageResponse.from_page(result)


@router.get("/search", response_model=ArticlePageResponse)
async def search_articles(
    query: str = "",
    category: str | None = None,
    region: str | None = None,
    tags: list[str] | None = Query(None),
    page: int = 1,
    limit: int | None = None,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """Full-text search over approved articles."""
    filters = ArticleFilters(
        status="approved",
        category=category,
        region=region,
        tags=tags or [],
        search=query,
        page=page,
        limit=limit or get_settings().default_page_size,
    )
    try:
        result = await service.search_articles(filters)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticlePageResponse.from_page(result)


@router.get("/trending", response_model=ArticlePageResponse)
async def trending_articles(
    timeframe: Timeframe | None = None,
    page: int = 1,
    limit: int | None = None,
    author_id: int | None = None,
    author_only: bool = False,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """Trending ranking, optionally narrowed to one author (``author_only`` = the caller)."""
    if author_id is None and author_only:
        author_id = actor.id
    params = TrendingParams(
        timeframe=timeframe or get_settings().default_trending_timeframe,
        page=page,
        limit=limit or get_settings().default_page_size,
    )
    try:
        result = await service.query_trending(params, author_id=author_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticlePageResponse.from_page(result)


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: int,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Retrieve a single article; authors may only read their own."""
    try:
        article = await service.get_article(article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    if not actor.is_admin and article.author_id != actor.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access forbidden")
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.put("/{article_id}", response_model=ArticleResponse)
async def update_article(
    article_id: int,
    data: ArticleUpdate,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Update an existing article."""
    try:
        article = await service.update_article(article_id, actor, data)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: int,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> None:
    """Delete an article by ID."""
    try:
        await service.delete_article(article_id, actor)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)


@router.post("/{article_id}/submit", response_model=ArticleResponse)
async def submit_article(
    article_id: int,
    actor: Actor = Depends(get_current_actor),
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Send a draft or rejected article for review."""
    try:
        article = await service.submit_article(article_id, actor.id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


# ── Admin ────────────────────────────────────────────────────────────

admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])


@admin_router.post("/bulk/delete", response_model=BulkOperationResponse)
async def bulk_delete_articles(
    data: BulkArticleIds,
    service: ArticleService = Depends(get_article_service),
) -> BulkOperationResponse:
    try:
        affected = await service.bulk_delete(data.ids)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return BulkOperationResponse(affected=affected)


@admin_router.post("/bulk/approve", response_model=BulkOperationResponse)
async def bulk_approve_articles(
    data: BulkArticleIds,
    service: ArticleService = Depends(get_article_service),
) -> BulkOperationResponse:
    try:
        affected = await service.bulk_approve(data.ids)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return BulkOperationResponse(affected=affected)


@admin_router.post("/bulk/reject", response_model=BulkOperationResponse)
async def bulk_reject_articles(
    data: BulkRejectRequest,
    service: ArticleService = Depends(get_article_service),
) -> BulkOperationResponse:
    try:
        affected = await service.bulk_reject(data.ids, data.rejection_reason)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return BulkOperationResponse(affected=affected)


@admin_router.post("/bulk/top", response_model=BulkOperationResponse)
async def bulk_mark_top_news(
    data: BulkArticleIds,
    service: ArticleService = Depends(get_article_service),
) -> BulkOperationResponse:
    try:
        affected = await service.bulk_mark_top_news(data.ids)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return BulkOperationResponse(affected=affected)


@admin_router.delete("/bulk/top", response_model=BulkOperationResponse)
async def bulk_unmark_top_news(
    data: BulkArticleIds,
    service: ArticleService = Depends(get_article_service),
) -> BulkOperationResponse:
    try:
        affected = await service.bulk_unmark_top_news(data.ids)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return BulkOperationResponse(affected=affected)


@admin_router.post("/{article_id}/approve", response_model=ArticleResponse)
async def approve_article(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    try:
        article = await service.approve_article(article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@admin_router.post("/{article_id}/reject", response_model=ArticleResponse)
async def reject_article(
    article_id: int,
    data: RejectArticleRequest | None = None,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    try:
        article = await service.reject_article(
            article_id, data.rejection_reason if data else None
        )
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@admin_router.post("/{article_id}/top", response_model=ArticleResponse)
async def mark_top_news(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    try:
        article = await service.mark_top_news(article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@admin_router.delete("/{article_id}/top", response_model=ArticleResponse)
async def unmark_top_news(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    try:
        article = await service.unmark_top_news(article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


router.include_router(admin_router)
