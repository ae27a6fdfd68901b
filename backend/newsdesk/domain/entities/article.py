"""Article entity, its editorial workflow and the category and region catalogs."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from newsdesk.domain.exceptions import InvalidStatusTransitionError


class ArticleStatus(str, Enum):
    """Editorial workflow states of an article."""

    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# approved is terminal; rejected articles may be resubmitted
STATUS_TRANSITIONS: dict[ArticleStatus, frozenset[ArticleStatus]] = {
    ArticleStatus.DRAFT: frozenset({ArticleStatus.PENDING}),
    ArticleStatus.PENDING: frozenset({ArticleStatus.APPROVED, ArticleStatus.REJECTED}),
    ArticleStatus.APPROVED: frozenset(),
    ArticleStatus.REJECTED: frozenset({ArticleStatus.PENDING}),
}

# Statuses in which the owning author may still edit an article.
AUTHOR_EDITABLE_STATUSES = frozenset({ArticleStatus.DRAFT, ArticleStatus.REJECTED})


def can_transition(current: ArticleStatus | str, requested: ArticleStatus | str) -> bool:
    """Return True when the workflow allows moving from ``current`` to ``requested``."""
    try:
        current = ArticleStatus(current)
        requested = ArticleStatus(requested)
    except ValueError:
        return False
    return requested in STATUS_TRANSITIONS[current]


ARTICLE_CATEGORIES: tuple[str, ...] = (
    "Culture & Heritage",
    "Adventure Tourism",
    "Religious Tourism",
    "Hill Stations",
    "Wildlife & Nature",
    "Trekking & Hiking",
    "Pilgrimage",
    "Local Festivals",
    "Travel Guide",
    "Food & Cuisine",
    "Accommodation",
    "Transportation",
    "From Districts",
    "Breaking News",
    "Government Initiatives",
    "Seasonal Tourism",
)

REGIONS: tuple[str, ...] = (
    "Dehradun",
    "Haridwar",
    "Rishikesh",
    "Mussoorie",
    "Nainital",
    "Almora",
    "Pithoragarh",
    "Chamoli",
    "Rudraprayag",
    "Tehri Garhwal",
    "Pauri Garhwal",
    "Uttarkashi",
    "Bageshwar",
    "Champawat",
    "Kumaon",
    "Garhwal",
    "Char Dham",
    "Valley of Flowers",
    "Jim Corbett",
    "Kedarnath",
    "Badrinath",
    "Gangotri",
    "Yamunotri",
)


def is_valid_category(category: str) -> bool:
    return category in ARTICLE_CATEGORIES


def is_valid_region(region: str) -> bool:
    return region in REGIONS


@dataclass
class Article:
    """Core domain entity representing a news article.

    ``author_name`` / ``author_email`` are denormalized from the authors
    table on read and are never written back.
    """

    author_id: int
    title: str
    content: str
    category: str
    description: str | None = None
    region: str | None = None
    tags: list[str] = field(default_factory=list)
    image: str | None = None
    status: ArticleStatus = ArticleStatus.DRAFT
    rejection_reason: str | None = None
    is_top_news: bool = False
    views_count: int = 0
    publish_date: datetime | None = None
    id: int | None = None
    author_name: str | None = None
    author_email: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update(
        self,
        title: str | None = None,
        description: str | None = None,
        content: str | None = None,
        category: str | None = None,
        region: str | None = None,
        tags: list[str] | None = None,
        image: str | None = None,
    ) -> None:
        """Update editable fields and refresh the updated_at timestamp."""
        if title is not None:
            self.title = title
        if description is not None:
            self.description = description
        if content is not None:
            self.content = content
        if category is not None:
            self.category = category
        if region is not None:
            self.region = region
        if tags is not None:
            self.tags = list(tags)
        if image is not None:
            self.image = image
        self.updated_at = datetime.now(timezone.utc)

    def transition_to(self, requested: ArticleStatus, rejection_reason: str | None = None) -> None:
        """Move the article along the workflow, enforcing the status DAG.

        Entering ``approved`` stamps ``publish_date`` the first time only;
        ``rejection_reason`` survives only while the article is rejected.
        """
        if not can_transition(self.status, requested):
            raise InvalidStatusTransitionError(self.status.value, ArticleStatus(requested).value)
        now = datetime.now(timezone.utc)
        self.status = ArticleStatus(requested)
        if self.status is ArticleStatus.APPROVED and self.publish_date is None:
            self.publish_date = now
        self.rejection_reason = rejection_reason if self.status is ArticleStatus.REJECTED else None
        self.updated_at = now
