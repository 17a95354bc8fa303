#!/usr/bin/env python3
"""Tests for frontmatter metadata decoding and accessors."""

from datetime import date, datetime, timedelta, timezone

import pytest

from metadata import (
    EPOCH,
    HomePage,
    Index,
    IndexCategory,
    MetadataDecodeError,
    Page,
    Post,
    Talk,
    decode,
    published_at,
    summary,
    title,
)


class TestDecode:
    """Tests for decoding each page variant."""

    def test_decode_page(self):
        """Generic pages use the `updated` timestamp."""
        result = decode({
            "type": "page",
            "title": "About",
            "summary": "Who I am",
            "updated": "2023-01-02T10:00:00Z",
        })

        assert result == Page(
            title="About",
            published_at=datetime(2023, 1, 2, 10, tzinfo=timezone.utc),
            summary="Who I am",
        )

    def test_decode_post_without_summary(self):
        result = decode({
            "type": "post",
            "title": "Hello",
            "published": "2024-03-05T09:30:00+00:00",
        })

        assert isinstance(result, Post)
        assert result.summary is None
        assert result.published_at == datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc)

    def test_decode_homepage_only_needs_title(self):
        assert decode({"type": "homepage", "title": "Home"}) == HomePage(title="Home")

    def test_decode_talk(self):
        result = decode({
            "type": "talk",
            "title": "Writing Parsers",
            "event": "PyCon Nordic",
            "published": "2024-04-20",
        })

        assert result == Talk(
            title="Writing Parsers",
            event="PyCon Nordic",
            published_at=datetime(2024, 4, 20, tzinfo=timezone.utc),
        )

    @pytest.mark.parametrize("value,category", [
        ("posts", IndexCategory.POSTS),
        ("talks", IndexCategory.TALKS),
    ])
    def test_decode_index(self, value, category):
        assert decode({"type": "index", "category": value}) == Index(category=category)

    def test_offset_timestamps_are_normalized_to_utc(self):
        result = decode({
            "type": "post",
            "title": "Late night",
            "published": "2024-03-05T23:30:00-02:00",
        })

        assert result.published_at == datetime(2024, 3, 6, 1, 30, tzinfo=timezone.utc)
        assert result.published_at.utcoffset() == timedelta(0)

    def test_yaml_parsed_dates_are_accepted(self):
        """YAML loaders hand us date/datetime objects instead of strings."""
        from_date = decode({"type": "post", "title": "A", "published": date(2024, 1, 1)})
        from_datetime = decode({
            "type": "post",
            "title": "B",
            "published": datetime(2024, 1, 1, 12, 0),
        })

        assert from_date.published_at == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert from_datetime.published_at == datetime(2024, 1, 1, 12, tzinfo=timezone.utc)


class TestDecodeErrors:
    """Decoding must fail loudly, naming the bad value."""

    @pytest.mark.parametrize("bad_type", ["post ", "Post", "article", ""])
    def test_unknown_type_names_value(self, bad_type):
        with pytest.raises(MetadataDecodeError) as excinfo:
            decode({"type": bad_type, "title": "x", "published": "2024-01-01"})

        assert repr(bad_type) in str(excinfo.value)

    @pytest.mark.parametrize("bad_category", ["events", "Posts", "posts "])
    def test_unknown_category_names_value(self, bad_category):
        with pytest.raises(MetadataDecodeError) as excinfo:
            decode({"type": "index", "category": bad_category})

        assert repr(bad_category) in str(excinfo.value)

    def test_missing_type(self):
        with pytest.raises(MetadataDecodeError, match="'type'"):
            decode({"title": "No type"})

    def test_missing_title(self):
        with pytest.raises(MetadataDecodeError, match="'title'"):
            decode({"type": "post", "published": "2024-01-01"})

    def test_page_requires_updated_not_published(self):
        with pytest.raises(MetadataDecodeError, match="'updated'"):
            decode({"type": "page", "title": "About", "published": "2024-01-01"})

    def test_talk_requires_event(self):
        with pytest.raises(MetadataDecodeError, match="'event'"):
            decode({"type": "talk", "title": "T", "published": "2024-01-01"})

    def test_malformed_timestamp(self):
        with pytest.raises(MetadataDecodeError) as excinfo:
            decode({"type": "post", "title": "x", "published": "yesterday"})

        assert "'yesterday'" in str(excinfo.value)

    def test_non_string_title(self):
        with pytest.raises(MetadataDecodeError, match="must be a string"):
            decode({"type": "homepage", "title": 42})

    def test_non_mapping_input(self):
        with pytest.raises(MetadataDecodeError):
            decode(["type", "post"])


class TestAccessors:
    """Tests for title/published_at/summary accessors."""

    def test_index_titles(self):
        assert title(Index(IndexCategory.POSTS)) == "Posts"
        assert title(Index(IndexCategory.TALKS)) == "Talks"

    def test_variant_titles(self):
        when = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert title(HomePage("Home")) == "Home"
        assert title(Page("About", when)) == "About"
        assert title(Post("Hello", when)) == "Hello"
        assert title(Talk("Parsers", "PyCon", when)) == "Parsers"

    def test_published_at_defaults_to_epoch(self):
        assert published_at(HomePage("Home")) == EPOCH
        assert published_at(Index(IndexCategory.POSTS)) == EPOCH
        assert EPOCH == datetime.fromtimestamp(0, tz=timezone.utc)

    def test_published_at_for_dated_variants(self):
        when = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert published_at(Page("About", when)) == when
        assert published_at(Post("Hello", when)) == when
        assert published_at(Talk("Parsers", "PyCon", when)) == when

    def test_summary_only_for_pages_and_posts(self):
        when = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert summary(Page("About", when, "s1")) == "s1"
        assert summary(Post("Hello", when, "s2")) == "s2"
        assert summary(HomePage("Home")) is None
        assert summary(Index(IndexCategory.TALKS)) is None

    def test_talk_summary_is_absent_even_if_frontmatter_has_one(self):
        talk = decode({
            "type": "talk",
            "title": "Parsers",
            "event": "PyCon",
            "published": "2024-01-01",
            "summary": "ignored",
        })

        assert summary(talk) is None
