#!/usr/bin/env python3
"""Shared fixtures for the site builder tests."""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest


ROOT = Path(__file__).parent.parent
SCRIPTS_DIR = ROOT / "scripts"
sys.path.insert(0, str(SCRIPTS_DIR))


@pytest.fixture
def temp_dir(tmp_path):
    """Scratch directory for files written by a test."""
    return tmp_path


@pytest.fixture
def site_entries():
    """A small site: home page, about page, two posts, one talk, two indexes."""
    from metadata import HomePage, Index, IndexCategory, Page, Post, Talk
    from render_page import SiteEntry

    return [
        SiteEntry("/", HomePage(title="Home"), "<p>Welcome!</p>"),
        SiteEntry(
            "/about/",
            Page(
                title="About",
                published_at=datetime(2023, 1, 2, tzinfo=timezone.utc),
                summary="Who I am",
            ),
            "<p>About me.</p>",
        ),
        SiteEntry(
            "/posts/first/",
            Post(
                title="First Post",
                published_at=datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc),
                summary="The very first one",
            ),
            "<p>Hello <em>world</em>.</p>",
        ),
        SiteEntry(
            "/posts/second/",
            Post(
                title="Second Post",
                published_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
            ),
            "<h2>Intro</h2><p>Second post body text.</p>",
        ),
        SiteEntry(
            "/talks/parsers/",
            Talk(
                title="Writing Parsers",
                event="PyCon Nordic",
                published_at=datetime(2024, 4, 20, tzinfo=timezone.utc),
            ),
            "<p>Slides and notes.</p>",
        ),
        SiteEntry("/posts/", Index(category=IndexCategory.POSTS), ""),
        SiteEntry("/talks/", Index(category=IndexCategory.TALKS), ""),
    ]
