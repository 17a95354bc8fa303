#!/usr/bin/env python3
"""
SEO head tags.

Every page gets an Open Graph / Twitter "large image" card. The description is
the page summary when it has one, otherwise the site tagline.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import List, Tuple, assert_never

import metadata as meta
from config import SITE, SiteConfig
from metadata import HomePage, Index, Metadata, Page, Post, Talk


@dataclass(frozen=True)
class MetaTag:
    """A single ``<meta>`` element: ``attribute`` is ``name`` or ``property``."""

    attribute: str
    key: str
    content: str


TagSet = Tuple[MetaTag, ...]


def page_type(metadata: Metadata) -> str:
    """Open Graph type for a page variant."""
    if isinstance(metadata, (Post, Talk)):
        return "article"
    if isinstance(metadata, (HomePage, Page, Index)):
        return "website"
    assert_never(metadata)


def description(metadata: Metadata, site: SiteConfig = SITE) -> str:
    return meta.summary(metadata) or site.tagline


def head_tags(metadata: Metadata, site: SiteConfig = SITE) -> TagSet:
    """Build the head tags for a page. Pure function of the decoded metadata."""
    title = meta.title(metadata)
    desc = description(metadata, site)
    image = site.absolute_url(site.fallback_image)

    tags: List[MetaTag] = [
        MetaTag("name", "description", desc),
        MetaTag("property", "og:site_name", site.name),
        MetaTag("property", "og:type", page_type(metadata)),
        MetaTag("property", "og:title", title),
        MetaTag("property", "og:description", desc),
        MetaTag("property", "og:image", image),
        MetaTag("name", "twitter:card", "summary_large_image"),
        MetaTag("name", "twitter:title", title),
        MetaTag("name", "twitter:description", desc),
        MetaTag("name", "twitter:image", image),
    ]

    if isinstance(metadata, (Post, Talk)):
        tags.append(
            MetaTag(
                "property",
                "article:published_time",
                metadata.published_at.isoformat(),
            )
        )

    return tuple(tags)


def render_head_tags(tags: TagSet, indent: str = "    ") -> str:
    return "\n".join(
        f'{indent}<meta {tag.attribute}="{html.escape(tag.key)}" '
        f'content="{html.escape(tag.content)}">'
        for tag in tags
    )
