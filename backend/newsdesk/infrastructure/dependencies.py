"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from newsdesk.application.services import ArticleService
from newsdesk.domain.entities import Actor
from newsdesk.infrastructure.database.session import get_db_session
from newsdesk.infrastructure.database.repositories import SQLAlchemyArticleRepository


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService instance with its repository wired up."""
    repository = SQLAlchemyArticleRepository(session)
    yield ArticleService(repository)


async def get_current_actor(
    x_user_id: int | None = Header(None),
    x_user_role: str = Header("author"),
) -> Actor:
    """Caller identity forwarded by the auth gateway in front of this service."""
    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No authentication token provided",
        )
    return Actor(id=x_user_id, is_admin=x_user_role.strip().lower() == "admin")


async def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    if not actor.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return actor
