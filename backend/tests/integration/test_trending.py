"""Integration tests for trending eligibility, scoring and ranking."""

from datetime import timedelta

import pytest
from sqlalchemy import select

from newsdesk.domain.entities import Timeframe, TrendingParams
from newsdesk.infrastructure.database import ArticleModel
from newsdesk.infrastructure.database.querying import TrendingScoreCalculator
from newsdesk.infrastructure.database.repositories import SQLAlchemyArticleRepository


async def _score(session, now, article_id: int, timeframe: Timeframe) -> float:
    plan = TrendingScoreCalculator("sqlite", now=now).score_expression(timeframe)
    return await session.scalar(select(plan.score).where(ArticleModel.id == article_id))


@pytest.mark.asyncio
@pytest.mark.parametrize("timeframe", list(Timeframe))
async def test_zero_view_articles_never_trend(
    repository: SQLAlchemyArticleRepository, seed, timeframe: Timeframe
):
    author = await seed.author()
    await seed.article(author, views=0, age=timedelta(minutes=30))
    viewed = await seed.article(author, views=1, age=timedelta(minutes=30))

    result = await repository.find_trending(TrendingParams(timeframe=timeframe))

    assert [a.id for a in result.articles] == [viewed.id]
    assert result.pagination.total == 1


@pytest.mark.asyncio
async def test_only_approved_articles_trend(repository: SQLAlchemyArticleRepository, seed):
    author = await seed.author()
    await seed.article(author, views=500, status="pending")
    await seed.article(author, views=500, status="rejected")
    approved = await seed.article(author, views=5)

    result = await repository.find_trending(TrendingParams(timeframe=Timeframe.WEEK))

    assert [a.id for a in result.articles] == [approved.id]


@pytest.mark.asyncio
async def test_day_score_combines_all_terms(session, seed, now):
    author = await seed.author()
    article = await seed.article(author, views=10, age=timedelta(hours=2))

    # 10*0.9 + 10/2*50 + 10*0.5 + 10/2*10
    assert await _score(session, now, article.id, Timeframe.DAY) == pytest.approx(314.0)


@pytest.mark.asyncio
@pytest.mark.parametrize("timeframe", list(Timeframe))
async def test_score_never_decreases_with_views(session, seed, now, timeframe: Timeframe):
    author = await seed.author()
    scores = []
    for views in (1, 2, 10, 100, 5000):
        article = await seed.article(author, views=views, age=timedelta(hours=20))
        scores.append(await _score(session, now, article.id, timeframe))

    assert scores == sorted(scores)
    assert scores[0] < scores[-1]


@pytest.mark.asyncio
async def test_fresh_velocity_beats_stale_volume_for_day(repository: SQLAlchemyArticleRepository, seed):
    author = await seed.author()
    stale = await seed.article(author, views=40, age=timedelta(hours=20))
    fresh = await seed.article(author, views=30, age=timedelta(minutes=40))

    result = await repository.find_trending(TrendingParams(timeframe=Timeframe.DAY))

    assert [a.id for a in result.articles] == [fresh.id, stale.id]


@pytest.mark.asyncio
async def test_window_excludes_older_articles(repository: SQLAlchemyArticleRepository, seed):
    author = await seed.author()
    yesterday = await seed.article(author, views=10, age=timedelta(hours=30))
    last_month = await seed.article(author, views=10, age=timedelta(days=20))
    await seed.article(author, views=10, age=timedelta(days=45))

    day = await repository.find_trending(TrendingParams(timeframe=Timeframe.DAY))
    week = await repository.find_trending(TrendingParams(timeframe=Timeframe.WEEK))
    month = await repository.find_trending(TrendingParams(timeframe=Timeframe.MONTH))

    assert day.articles == []
    assert [a.id for a in week.articles] == [yesterday.id]
    assert {a.id for a in month.articles} == {yesterday.id, last_month.id}


@pytest.mark.asyncio
async def test_unpublished_articles_age_from_creation(repository: SQLAlchemyArticleRepository, seed):
    author = await seed.author()
    article = await seed.article(author, views=3, age=timedelta(hours=4), published=False)

    result = await repository.find_trending(TrendingParams(timeframe=Timeframe.DAY))

    assert [a.id for a in result.articles] == [article.id]


@pytest.mark.asyncio
async def test_author_filter_narrows_without_rescoring(repository: SQLAlchemyArticleRepository, seed):
    mine = await seed.author()
    theirs = await seed.author("Kavita Joshi")
    low = await seed.article(mine, views=5)
    high = await seed.article(mine, views=50)
    await seed.article(theirs, views=1000)

    result = await repository.find_trending(TrendingParams(timeframe=Timeframe.WEEK), author_id=mine.id)

    assert [a.id for a in result.articles] == [high.id, low.id]
    assert result.pagination.total == 2


@pytest.mark.asyncio
async def test_ties_break_on_newest_id(repository: SQLAlchemyArticleRepository, seed):
    author = await seed.author()
    first = await seed.article(author, views=7, age=timedelta(hours=3))
    second = await seed.article(author, views=7, age=timedelta(hours=3))

    result = await repository.find_trending(TrendingParams(timeframe=Timeframe.DAY))

    assert [a.id for a in result.articles] == [second.id, first.id]


@pytest.mark.asyncio
async def test_trending_pages(repository: SQLAlchemyArticleRepository, seed):
    author = await seed.author()
    for views in range(1, 6):
        await seed.article(author, views=views)

    result = await repository.find_trending(TrendingParams(timeframe=Timeframe.WEEK, page=2, limit=2))

    assert [a.views_count for a in result.articles] == [3, 2]
    assert result.pagination.total == 5
    assert result.pagination.total_pages == 3
    assert result.pagination.has_next is True
    assert result.pagination.has_prev is True
