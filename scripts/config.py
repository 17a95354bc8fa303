#!/usr/bin/env python3
"""
Site configuration and logging setup.

The site has exactly one configuration. Build flags may override the base URL
and output paths, everything else lives here.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, replace
from typing import Tuple


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(name: str, level: int = logging.INFO) -> logging.Logger:
    """Return a named logger writing to stderr, configured once per name."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(level)
    return logger


@dataclass(frozen=True)
class NavLink:
    """A header navigation link."""

    label: str
    href: str


@dataclass(frozen=True)
class LayoutConstants:
    """Pixel constants shared by the stylesheet and the animation predicate."""

    content_margin: int = 680
    gutter: int = 240
    animation_buffer: int = 100

    @property
    def animation_threshold(self) -> int:
        """Viewport width the page must exceed before fireworks are shown."""
        return self.content_margin + self.gutter + self.animation_buffer


@dataclass(frozen=True)
class SiteConfig:
    """Everything the renderers need to know about the site."""

    name: str = "Ada Lindqvist"
    base_url: str = "https://adalindqvist.dev"
    tagline: str = "Notes on programming languages, tooling and the occasional talk."
    author: str = "Ada Lindqvist"
    fallback_image: str = "/images/card.png"
    license_text: str = (
        "Content licensed under CC BY-SA 4.0 unless stated otherwise."
    )
    license_url: str = "https://creativecommons.org/licenses/by-sa/4.0/"
    home_route: str = "/"
    nav_links: Tuple[NavLink, ...] = (
        NavLink("Posts", "/posts/"),
        NavLink("Talks", "/talks/"),
        NavLink("About", "/about/"),
    )
    font_primary: str = "Newsreader"
    font_secondary: str = "Inter"
    color_bg: str = "#0b1220"
    color_text: str = "#e6edf7"
    color_accent: str = "#3b82f6"
    color_muted: str = "#94a3b8"
    layout: LayoutConstants = field(default_factory=LayoutConstants)
    feed_limit: int = 20
    feed_path: str = "/feed.xml"

    def with_base_url(self, base_url: str) -> "SiteConfig":
        return replace(self, base_url=base_url.rstrip("/"))

    def absolute_url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"


SITE = SiteConfig()
