"""Allow-listed ORDER BY resolution for article listings."""

from sqlalchemy.sql.expression import UnaryExpression

from newsdesk.domain.entities import SortDirection
from newsdesk.infrastructure.database.models import ArticleModel

SORTABLE_COLUMNS: frozenset[str] = frozenset({
    "created_at",
    "updated_at",
    "publish_date",
    "views_count",
    "title",
    # dashboard-only columns
    "status",
    "category",
    "region",
    "is_top_news",
})

DASHBOARD_DEFAULT_SORT = "created_at"
PUBLIC_DEFAULT_SORT = "publish_date"


class SortResolver:
    """Normalizes caller-supplied sort input against the allow-list."""

    def __init__(self, default_column: str = DASHBOARD_DEFAULT_SORT):
        if default_column not in SORTABLE_COLUMNS:
            raise ValueError(f"Default sort column '{default_column}' is not sortable")
        self._default_column = default_column

    def resolve(self, column: str | None, direction: str | None) -> tuple[str, SortDirection]:
        """Return a safe ``(column, direction)``; unknown input falls back silently."""
        resolved_column = column if column in SORTABLE_COLUMNS else self._default_column
        normalized = (direction or "").strip().upper()
        resolved_direction = SortDirection.ASC if normalized == "ASC" else SortDirection.DESC
        return resolved_column, resolved_direction

    def order_by(self, column: str | None, direction: str | None) -> list[UnaryExpression]:
        """ORDER BY clauses for the resolved sort, with ``id DESC`` as tie-break."""
        resolved_column, resolved_direction = self.resolve(column, direction)
        sort_column = getattr(ArticleModel, resolved_column)
        primary = sort_column.asc() if resolved_direction is SortDirection.ASC else sort_column.desc()
        return [primary.nulls_last(), ArticleModel.id.desc()]
