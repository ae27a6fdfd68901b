"""Page metadata for paginated article listings."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PaginationInfo:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


def calculate_pagination(page: int, limit: int, total: int) -> PaginationInfo:
    """Build page metadata from the pre-pagination total.

    ``has_next`` / ``has_prev`` depend only on ``page`` versus ``total_pages``,
    so a page past the end still reports the real total.
    """
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return PaginationInfo(
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )
