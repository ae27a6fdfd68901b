"""Shared fixtures for integration tests against a throwaway SQLite database."""

from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from newsdesk.infrastructure.database import ArticleModel, AuthorModel, Base
from newsdesk.infrastructure.database.session import build_engine
from newsdesk.infrastructure.database.repositories import SQLAlchemyArticleRepository

# Every repository in these tests ranks and stamps against this instant.
NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def session(tmp_path) -> AsyncIterator[AsyncSession]:
    engine = build_engine(f"sqlite:///{tmp_path / 'newsdesk.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def repository(session: AsyncSession) -> SQLAlchemyArticleRepository:
    return SQLAlchemyArticleRepository(session, clock=lambda: NOW)


class Seeder:
    """Inserts authors and articles with explicit timestamps."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self._authors = 0

    async def author(self, name: str = "Asha Rawat") -> AuthorModel:
        self._authors += 1
        author = AuthorModel(name=name, email=f"author{self._authors}@newsdesk.test")
        self._session.add(author)
        await self._session.flush()
        return author

    async def article(
        self,
        author: AuthorModel,
        *,
        title: str = "Untitled",
        content: str = "Body text.",
        category: str = "Breaking News",
        region: str | None = None,
        tags: list[str] | None = None,
        status: str = "approved",
        is_top_news: bool = False,
        views: int = 0,
        age: timedelta = timedelta(hours=2),
        published: bool = True,
    ) -> ArticleModel:
        created_at = NOW - age
        article = ArticleModel(
            author_id=author.id,
            title=title,
            content=content,
            category=category,
            region=region,
            tags=tags,
            status=status,
            is_top_news=is_top_news,
            views_count=views,
            publish_date=created_at if published else None,
            created_at=created_at,
            updated_at=created_at,
        )
        self._session.add(article)
        await self._session.flush()
        return article


@pytest.fixture
def seed(session: AsyncSession) -> Seeder:
    return Seeder(session)


@pytest.fixture
def now() -> datetime:
    return NOW
