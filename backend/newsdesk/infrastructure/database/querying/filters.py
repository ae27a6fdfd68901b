"""Compiles an ArticleFilters request into SQLAlchemy WHERE clauses.

Each active filter becomes one typed clause whose values are bound
parameters; the clauses are combined with AND by the caller.
"""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import ColumnElement, and_, cast, func, literal, or_, select, true
from sqlalchemy.dialects.postgresql import JSONB

from newsdesk.domain.entities import ArticleFilters
from newsdesk.infrastructure.database.models import ArticleModel

# Text search configuration for PostgreSQL full-text matching.
TEXT_SEARCH_CONFIG = "english"


@dataclass
class CompiledFilter:
    """Conjunctive clause list plus the ordered values bound into it."""

    clauses: list[ColumnElement[bool]] = field(default_factory=list)
    params: list[Any] = field(default_factory=list)

    def add(self, clause: ColumnElement[bool], *values: Any) -> None:
        self.clauses.append(clause)
        self.params.extend(values)

    @property
    def where(self) -> ColumnElement[bool]:
        """All clauses AND-ed together; a tautology when there are none."""
        if not self.clauses:
            return true()
        return and_(*self.clauses)


class FilterCompiler:
    """Pure translation of filters into clauses for one SQL dialect.

    Tag containment and full-text search are dialect specific: PostgreSQL
    uses ``jsonb @>`` and ``to_tsvector @@ plainto_tsquery``; other dialects
    fall back to ``json_each`` membership and case-insensitive substring
    matching.
    """

    def __init__(self, dialect: str):
        self._dialect = dialect

    def compile(self, filters: ArticleFilters) -> CompiledFilter:
        compiled = CompiledFilter()

        if filters.status is not None:
            status = getattr(filters.status, "value", filters.status)
            compiled.add(ArticleModel.status == status, status)
        if filters.category:
            compiled.add(ArticleModel.category == filters.category, filters.category)
        if filters.region:
            compiled.add(ArticleModel.region == filters.region, filters.region)
        if filters.author_id is not None:
            compiled.add(ArticleModel.author_id == filters.author_id, filters.author_id)
        if filters.is_top_news is not None:
            compiled.add(ArticleModel.is_top_news == filters.is_top_news, filters.is_top_news)
        if filters.tags:
            compiled.add(self.tag_clause(filters.tags), *filters.tags)
        if filters.search and filters.search.strip():
            query = filters.search.strip()
            compiled.add(self.search_clause(query), query)

        return compiled

    def tag_clause(self, tags: list[str]) -> ColumnElement[bool]:
        """Match articles carrying any of ``tags``."""
        if self._dialect == "postgresql":
            stored = cast(ArticleModel.tags, JSONB)
            return or_(*(stored.contains([tag]) for tag in tags))

        elements = func.json_each(ArticleModel.tags).table_valued("value")
        return (
            select(literal(1))
            .select_from(elements)
            .where(elements.c.value.in_(tags))
            .exists()
        )

    def search_clause(self, query: str) -> ColumnElement[bool]:
        """Natural-language match over title and content."""
        if self._dialect == "postgresql":
            document = func.to_tsvector(
                TEXT_SEARCH_CONFIG,
                ArticleModel.title + " " + func.coalesce(ArticleModel.content, ""),
            )
            return document.op("@@")(func.plainto_tsquery(TEXT_SEARCH_CONFIG, query))

        return or_(
            ArticleModel.title.icontains(query, autoescape=True),
            ArticleModel.content.icontains(query, autoescape=True),
        )
