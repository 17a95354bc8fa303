#!/usr/bin/env python3
"""
Page metadata model.

Frontmatter mappings decode into exactly one of five page variants. Decoding
is strict: an unknown ``type`` or ``category`` fails instead of falling back
to a default, so a typo never reaches the published site.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional, Union, assert_never


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class MetadataDecodeError(ValueError):
    """Raised when a frontmatter mapping does not describe a valid page."""


class IndexCategory(Enum):
    POSTS = "posts"
    TALKS = "talks"


CATEGORY_TITLES = {
    IndexCategory.POSTS: "Posts",
    IndexCategory.TALKS: "Talks",
}


@dataclass(frozen=True)
class Page:
    title: str
    published_at: datetime
    summary: Optional[str] = None


@dataclass(frozen=True)
class HomePage:
    title: str


@dataclass(frozen=True)
class Post:
    title: str
    published_at: datetime
    summary: Optional[str] = None


@dataclass(frozen=True)
class Talk:
    title: str
    event: str
    published_at: datetime


@dataclass(frozen=True)
class Index:
    category: IndexCategory


Metadata = Union[Page, HomePage, Post, Talk, Index]


def parse_timestamp(value: Any, field_name: str) -> datetime:
    """
    Convert an ISO-8601 string or a YAML-parsed date into an aware UTC datetime.

    Naive values are taken to be UTC. Bare dates map to midnight.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise MetadataDecodeError(
                f"field {field_name!r} is not an ISO-8601 timestamp: {value!r}"
            ) from None
    else:
        raise MetadataDecodeError(
            f"field {field_name!r} must be a timestamp, got {value!r}"
        )

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _require(raw: Mapping[str, Any], field_name: str) -> Any:
    if field_name not in raw or raw[field_name] is None:
        raise MetadataDecodeError(f"missing required field {field_name!r}")
    return raw[field_name]


def _require_str(raw: Mapping[str, Any], field_name: str) -> str:
    value = _require(raw, field_name)
    if not isinstance(value, str):
        raise MetadataDecodeError(
            f"field {field_name!r} must be a string, got {value!r}"
        )
    return value


def _optional_str(raw: Mapping[str, Any], field_name: str) -> Optional[str]:
    value = raw.get(field_name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MetadataDecodeError(
            f"field {field_name!r} must be a string, got {value!r}"
        )
    return value


def _decode_category(raw: Mapping[str, Any]) -> IndexCategory:
    value = _require(raw, "category")
    for category in IndexCategory:
        if value == category.value:
            return category
    raise MetadataDecodeError(f"unknown index category {value!r}")


def decode(raw: Mapping[str, Any]) -> Metadata:
    """
    Decode a frontmatter mapping into a metadata variant.

    Raises:
        MetadataDecodeError: naming the missing field or the unexpected value.
    """
    if not isinstance(raw, Mapping):
        raise MetadataDecodeError(f"frontmatter must be a mapping, got {raw!r}")

    page_type = _require(raw, "type")

    if page_type == "page":
        return Page(
            title=_require_str(raw, "title"),
            published_at=parse_timestamp(_require(raw, "updated"), "updated"),
            summary=_optional_str(raw, "summary"),
        )
    if page_type == "homepage":
        return HomePage(title=_require_str(raw, "title"))
    if page_type == "post":
        return Post(
            title=_require_str(raw, "title"),
            published_at=parse_timestamp(_require(raw, "published"), "published"),
            summary=_optional_str(raw, "summary"),
        )
    if page_type == "talk":
        return Talk(
            title=_require_str(raw, "title"),
            event=_require_str(raw, "event"),
            published_at=parse_timestamp(_require(raw, "published"), "published"),
        )
    if page_type == "index":
        return Index(category=_decode_category(raw))

    raise MetadataDecodeError(f"unknown page type {page_type!r}")


def category_title(category: IndexCategory) -> str:
    return CATEGORY_TITLES[category]


def title(metadata: Metadata) -> str:
    if isinstance(metadata, (Page, HomePage, Post, Talk)):
        return metadata.title
    if isinstance(metadata, Index):
        return category_title(metadata.category)
    assert_never(metadata)


def published_at(metadata: Metadata) -> datetime:
    """Publication time, or the epoch for variants that have none."""
    if isinstance(metadata, (Page, Post, Talk)):
        return metadata.published_at
    if isinstance(metadata, (HomePage, Index)):
        return EPOCH
    assert_never(metadata)


def summary(metadata: Metadata) -> Optional[str]:
    if isinstance(metadata, (Page, Post)):
        return metadata.summary
    if isinstance(metadata, (HomePage, Talk, Index)):
        return None
    assert_never(metadata)
