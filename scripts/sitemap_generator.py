#!/usr/bin/env python3
"""
Sitemap Generator Module - Generates XML sitemap and robots.txt for SEO.

Includes:
- One <url> per rendered page
- lastmod from publication/update time where the page has one
- Priority and changefreq by page variant
"""

from pathlib import Path
from typing import Optional, Sequence, Tuple, assert_never
import xml.etree.ElementTree as ET

import metadata as meta
from config import SITE, SiteConfig, setup_logging
from metadata import EPOCH, HomePage, Index, Metadata, Page, Post, Talk
from render_page import SiteEntry

logger = setup_logging("sitemap_generator")

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _frequency(metadata: Metadata) -> Tuple[str, str]:
    """(changefreq, priority) for a page variant."""
    if isinstance(metadata, HomePage):
        return "weekly", "1.0"
    if isinstance(metadata, Index):
        return "weekly", "0.8"
    if isinstance(metadata, (Post, Talk)):
        return "never", "0.7"  # Published content doesn't change
    if isinstance(metadata, Page):
        return "monthly", "0.5"
    assert_never(metadata)


def lastmod_for(entry: SiteEntry) -> Optional[str]:
    published = meta.published_at(entry.metadata)
    if published == EPOCH:
        return None
    return published.strftime("%Y-%m-%d")


def generate_sitemap(entries: Sequence[SiteEntry], site: SiteConfig = SITE) -> str:
    """
    Generate XML sitemap for the website.

    Args:
        entries: Every page of the site
        site: Site configuration

    Returns:
        XML string for sitemap.xml
    """
    urlset = ET.Element("urlset")
    urlset.set("xmlns", SITEMAP_NS)

    # Track added URLs to prevent duplicates
    added_urls = set()

    for entry in sorted(entries, key=lambda e: e.path):
        full_url = site.absolute_url(entry.path)
        if full_url in added_urls:
            continue
        added_urls.add(full_url)

        page = ET.SubElement(urlset, "url")
        ET.SubElement(page, "loc").text = full_url

        lastmod = lastmod_for(entry)
        if lastmod:
            ET.SubElement(page, "lastmod").text = lastmod

        changefreq, priority = _frequency(entry.metadata)
        ET.SubElement(page, "changefreq").text = changefreq
        ET.SubElement(page, "priority").text = priority

    ET.indent(urlset, space="  ")

    xml_string = ET.tostring(urlset, encoding="unicode", method="xml")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{xml_string}'


def generate_robots_txt(site: SiteConfig = SITE) -> str:
    """
    Generate robots.txt with sitemap reference.

    Args:
        site: Site configuration

    Returns:
        robots.txt content string
    """
    return f"""# {site.name} robots.txt

User-agent: *
Allow: /

Sitemap: {site.absolute_url("/sitemap.xml")}
"""


def save_sitemap(
    public_dir: Path,
    entries: Sequence[SiteEntry],
    site: SiteConfig = SITE,
):
    """
    Save sitemap.xml and robots.txt to the public directory.

    Args:
        public_dir: Path to the public output directory
        entries: Every page of the site
        site: Site configuration
    """
    public_dir = Path(public_dir)
    public_dir.mkdir(parents=True, exist_ok=True)

    sitemap_path = public_dir / "sitemap.xml"
    sitemap_path.write_text(generate_sitemap(entries, site), encoding="utf-8")
    logger.info(f"Created {sitemap_path}")

    robots_path = public_dir / "robots.txt"
    robots_path.write_text(generate_robots_txt(site), encoding="utf-8")
    logger.info(f"Created {robots_path}")


def count_urls_in_sitemap(sitemap_path: Path) -> int:
    """
    Count the number of URLs in a sitemap.

    Args:
        sitemap_path: Path to sitemap.xml

    Returns:
        Number of URL entries, 0 if the file is missing or unreadable
    """
    try:
        tree = ET.parse(sitemap_path)
    except (OSError, ET.ParseError):
        return 0
    return len(tree.getroot().findall(".//sm:url", {"sm": SITEMAP_NS}))
