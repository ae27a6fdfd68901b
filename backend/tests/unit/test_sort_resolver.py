"""Unit tests for the ORDER BY allow-list."""

import pytest

from newsdesk.domain.entities import SortDirection
from newsdesk.infrastructure.database.querying import SortResolver


@pytest.mark.parametrize(
    "column", ["created_at", "updated_at", "publish_date", "views_count", "title", "status", "is_top_news"]
)
def test_allow_listed_columns_pass_through(column: str):
    assert SortResolver().resolve(column, "ASC") == (column, SortDirection.ASC)


def test_unknown_column_falls_back_to_default():
    assert SortResolver().resolve("password; DROP TABLE articles", "ASC")[0] == "created_at"
    assert SortResolver("publish_date").resolve(None, None)[0] == "publish_date"


@pytest.mark.parametrize("direction", ["asc", "Asc", " ASC "])
def test_direction_is_case_insensitive(direction: str):
    assert SortResolver().resolve("title", direction)[1] is SortDirection.ASC


@pytest.mark.parametrize("direction", [None, "", "up", "ascending", "desc"])
def test_other_directions_fall_back_to_desc(direction):
    assert SortResolver().resolve("title", direction)[1] is SortDirection.DESC


def test_default_column_must_be_sortable():
    with pytest.raises(ValueError):
        SortResolver("author_email")


def test_order_by_adds_id_tie_break():
    clauses = SortResolver().order_by("views_count", "DESC")
    assert len(clauses) == 2
    assert "articles.id DESC" in str(clauses[1])
