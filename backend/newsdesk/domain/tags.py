"""Tag validation and normalization, shared by write paths and read-path filters."""

import re
from collections.abc import Iterable

MAX_TAGS = 10
MIN_TAG_LENGTH = 2
MAX_TAG_LENGTH = 30

_TAG_PATTERN = re.compile(r"^[a-zA-Z0-9 _-]+$")


def validate_tags(tags: list[str]) -> bool:
    """Return False if the list as a whole must be rejected.

    Rejects more than ``MAX_TAGS`` entries, any tag whose trimmed length is
    outside 2–30, and any tag with characters other than letters, digits,
    space, hyphen and underscore.
    """
    if len(tags) > MAX_TAGS:
        return False
    for tag in tags:
        if not isinstance(tag, str):
            return False
        trimmed = tag.strip()
        if not MIN_TAG_LENGTH <= len(trimmed) <= MAX_TAG_LENGTH:
            return False
        if not _TAG_PATTERN.match(trimmed):
            return False
    return True


def sanitize_tags(tags: Iterable[str]) -> list[str]:
    """Trim, lowercase and dedupe tags, keeping first occurrences in order.

    Out-of-bounds tags are dropped and the result is capped at ``MAX_TAGS``.
    Idempotent: ``sanitize_tags(sanitize_tags(x)) == sanitize_tags(x)``.
    """
    seen: set[str] = set()
    result: list[str] = []
    for tag in tags:
        normalized = tag.strip().lower()
        if not MIN_TAG_LENGTH <= len(normalized) <= MAX_TAG_LENGTH:
            continue
        if normalized in seen:
            continue
        seen.add(normalized)
        result.append(normalized)
    return result[:MAX_TAGS]


def parse_tag_filter(raw: str | Iterable[str] | None) -> list[str]:
    """Turn a comma-delimited string or repeated query values into filter tags.

    Lowercased so that filters line up with the sanitized tags in storage.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        parts: Iterable[str] = raw.split(",")
    else:
        parts = (piece for value in raw for piece in str(value).split(","))
    tags: list[str] = []
    for part in parts:
        tag = part.strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags
