#!/usr/bin/env python3
"""
Feed Generator - Builds the Atom feed of posts and talks.

Only dated content goes into the feed. Entries without a summary get a plain
text excerpt of their rendered body instead.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Sequence
import xml.etree.ElementTree as ET

from bs4 import BeautifulSoup

import metadata as meta
from config import SITE, SiteConfig, setup_logging
from metadata import EPOCH, Post, Talk
from render_page import SiteEntry

logger = setup_logging("feed_generator")

EXCERPT_LENGTH = 280


def excerpt(body: str, length: int = EXCERPT_LENGTH) -> str:
    """Plain text prefix of a rendered HTML body."""
    if not body:
        return ""
    soup = BeautifulSoup(body, "html.parser")
    text = re.sub(r"\s+", " ", soup.get_text(separator=" ")).strip()
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "…"


def feed_entries(entries: Sequence[SiteEntry], limit: int = SITE.feed_limit) -> List[SiteEntry]:
    """Posts and talks, newest first."""
    dated = [e for e in entries if isinstance(e.metadata, (Post, Talk))]
    dated.sort(key=lambda e: meta.published_at(e.metadata), reverse=True)
    return dated[:limit]


def generate_feed(entries: Sequence[SiteEntry], site: SiteConfig = SITE) -> str:
    """
    Generate the Atom feed.

    Args:
        entries: Every page of the site; non-dated variants are skipped
        site: Site configuration

    Returns:
        XML string for feed.xml
    """
    items = feed_entries(entries, site.feed_limit)
    updated = meta.published_at(items[0].metadata) if items else EPOCH

    feed = ET.Element("feed")
    feed.set("xmlns", "http://www.w3.org/2005/Atom")
    ET.SubElement(feed, "title").text = site.name
    ET.SubElement(feed, "subtitle").text = site.tagline
    ET.SubElement(feed, "id").text = site.absolute_url("/")
    ET.SubElement(feed, "updated").text = updated.isoformat()
    ET.SubElement(feed, "link", href=site.absolute_url("/"))
    ET.SubElement(feed, "link", rel="self", href=site.absolute_url(site.feed_path))
    author = ET.SubElement(feed, "author")
    ET.SubElement(author, "name").text = site.author

    for entry in items:
        url = site.absolute_url(entry.path)
        published = meta.published_at(entry.metadata).isoformat()
        node = ET.SubElement(feed, "entry")
        ET.SubElement(node, "title").text = meta.title(entry.metadata)
        ET.SubElement(node, "id").text = url
        ET.SubElement(node, "link", href=url)
        ET.SubElement(node, "published").text = published
        ET.SubElement(node, "updated").text = published
        ET.SubElement(node, "summary").text = meta.summary(entry.metadata) or excerpt(entry.body)
        if isinstance(entry.metadata, Talk):
            ET.SubElement(node, "category", term="talks", label=entry.metadata.event)
        else:
            ET.SubElement(node, "category", term="posts")

    ET.indent(feed, space="  ")
    xml_string = ET.tostring(feed, encoding="unicode", method="xml")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{xml_string}'


def save_feed(output_dir: Path, entries: Sequence[SiteEntry], site: SiteConfig = SITE) -> Path:
    feed_path = Path(output_dir) / site.feed_path.lstrip("/")
    feed_path.parent.mkdir(parents=True, exist_ok=True)
    feed_path.write_text(generate_feed(entries, site), encoding="utf-8")
    logger.info(f"Created {feed_path} ({len(feed_entries(entries, site.feed_limit))} entries)")
    return feed_path
