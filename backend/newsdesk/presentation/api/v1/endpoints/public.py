"""Public read-only endpoints for the website frontend — approved articles only."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from newsdesk.application.schemas import ArticlePageResponse, ArticleResponse
from newsdesk.application.services import ArticleService
from newsdesk.config import get_settings
from newsdesk.domain.entities import ArticleFilters, ArticleStatus, Timeframe, TrendingParams
from newsdesk.infrastructure.dependencies import get_article_service
from newsdesk.infrastructure.database.querying import PUBLIC_DEFAULT_SORT
from newsdesk.presentation.api.v1.errors import DOMAIN_ERRORS, to_http_exception

router = APIRouter(prefix="/public/articles", tags=["Public"])


async def _approved_page(service: ArticleService, **filters) -> ArticlePageResponse:
    query = ArticleFilters(status=ArticleStatus.APPROVED, **filters)
    try:
        result = await service.query_articles(query, default_sort=PUBLIC_DEFAULT_SORT)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticlePageResponse.from_page(result)


@router.get("", response_model=ArticlePageResponse)
async def list_public_articles(
    category: str | None = None,
    region: str | None = None,
    is_top_news: bool | None = None,
    tags: list[str] | None = Query(None),
    page: int = 1,
    limit: int | None = None,
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """All approved articles, newest first unless another sort is requested."""
    return await _approved_page(
        service,
        category=category,
        region=region,
        is_top_news=is_top_news,
        tags=tags or [],
        page=page,
        limit=limit or get_settings().default_page_size,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("/recent", response_model=list[ArticleResponse])
async def recent_articles(
    limit: int | None = None,
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleResponse]:
    """Homepage feed: the latest approved articles, unpaginated."""
    result = await _approved_page(service, page=1, limit=limit or get_settings().recent_articles_limit)
    return result.articles


@router.get("/search", response_model=ArticlePageResponse)
async def search_public_articles(
    query: str = "",
    category: str | None = None,
    region: str | None = None,
    tags: list[str] | None = Query(None),
    page: int = 1,
    limit: int | None = None,
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    filters = ArticleFilters(
        status=ArticleStatus.APPROVED,
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
async def public_trending_articles(
    timeframe: Timeframe | None = None,
    page: int = 1,
    limit: int | None = None,
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    params = TrendingParams(
        timeframe=timeframe or get_settings().default_trending_timeframe,
        page=page,
        limit=limit or get_settings().default_page_size,
    )
    try:
        result = await service.query_trending(params)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    return ArticlePageResponse.from_page(result)


@router.get("/top", response_model=ArticlePageResponse)
async def top_news(
    page: int = 1,
    limit: int | None = None,
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    return await _approved_page(service, is_top_news=True, page=page, limit=limit or get_settings().default_page_size)


@router.get("/more-stories", response_model=ArticlePageResponse)
async def more_stories(
    page: int = 1,
    limit: int | None = None,
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """Infinite-scroll feed."""
    return await _approved_page(service, page=page, limit=limit or get_settings().more_stories_limit)


@router.get("/by-tags", response_model=ArticlePageResponse)
async def articles_by_tags(
    tags: list[str] = Query(..., description="Comma-separated or repeated"),
    page: int = 1,
    limit: int | None = None,
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """Approved articles carrying any of the given tags."""
    return await _approved_page(service, tags=tags, page=page, limit=limit or get_settings().default_page_size)


@router.get("/culture-heritage", response_model=ArticlePageResponse)
async def culture_heritage(
    page: int = 1,
    limit: int | None = None,
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    return await _approved_page(
        service, category="Culture & Heritage", page=page, limit=limit or get_settings().default_page_size
    )


@router.get("/category/{category}", response_model=ArticlePageResponse)
async def articles_by_category(
    category: str,
    page: int = 1,
    limit: int | None = None,
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    return await _approved_page(service, category=category, page=page, limit=limit or get_settings().default_page_size)


@router.get("/region/{region}", response_model=ArticlePageResponse)
async def articles_by_region(
    region: str,
    page: int = 1,
    limit: int | None = None,
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    return await _approved_page(service, region=region, page=page, limit=limit or get_settings().default_page_size)


@router.get("/from-districts", response_model=ArticlePageResponse)
@router.get("/from-districts/{district}", response_model=ArticlePageResponse)
async def from_districts(
    district: str | None = None,
    page: int = 1,
    limit: int | None = None,
    service: ArticleService = Depends(get_article_service),
) -> ArticlePageResponse:
    """'From Districts' desk, optionally narrowed to one district."""
    return await _approved_page(
        service,
        category="From Districts",
        region=district,
        page=page,
        limit=limit or get_settings().default_page_size,
    )


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_public_article(
    article_id: int,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Single approved article; each read counts as a view."""
    try:
        article = await service.get_article(article_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e)
    if article.status is not ArticleStatus.APPROVED:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Article not found")
    await service.increment_views(article_id)
    return ArticleResponse.model_validate(article, from_attributes=True)
