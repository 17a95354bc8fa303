#!/usr/bin/env python3
"""
Site Builder - Renders the markdown content tree into the public directory.

Pipeline:
1. Discover ``*.md`` sources and derive their routes
2. Split frontmatter, decode metadata, render markdown bodies
3. Render every page with the shared chrome and SEO tags
4. Write feed.xml, sitemap.xml and robots.txt

A page with malformed metadata fails the whole build.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import markdown

from animation import AnimationSession
from config import SITE, SiteConfig, setup_logging
from content_source import FrontmatterError, read_frontmatter
from feed_generator import save_feed
from metadata import MetadataDecodeError, decode
from render_page import SiteEntry, build_document, render
from seo_tags import head_tags
from sitemap_generator import save_sitemap

logger = setup_logging("build_site")

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc"]


class BuildError(Exception):
    """A source file could not be turned into a page."""


@dataclass(frozen=True)
class BuildOptions:
    seed: int = 0
    viewport_width: Optional[float] = None
    animate_ms: float = 0.0


def route_for(relative: Path) -> str:
    """Map a content path to its route: ``posts/hello.md`` -> ``/posts/hello/``."""
    parts = list(relative.with_suffix("").parts)
    if parts and parts[-1] == "index":
        parts = parts[:-1]
    if not parts:
        return "/"
    return "/" + "/".join(parts) + "/"


def output_path_for(output_dir: Path, route: str) -> Path:
    return output_dir.joinpath(*[p for p in route.split("/") if p], "index.html")


def render_markdown(source: str) -> str:
    return markdown.markdown(source, extensions=MARKDOWN_EXTENSIONS)


def discover(content_dir: Path) -> List[Path]:
    if not content_dir.is_dir():
        raise BuildError(f"content directory not found: {content_dir}")
    return sorted(content_dir.rglob("*.md"))


def load_entry(content_dir: Path, source: Path) -> SiteEntry:
    relative = source.relative_to(content_dir)
    try:
        document = read_frontmatter(source)
        page_metadata = decode(document.fields)
    except (FrontmatterError, MetadataDecodeError) as e:
        raise BuildError(f"{relative}: {e}") from e
    return SiteEntry(
        path=route_for(relative),
        metadata=page_metadata,
        body=render_markdown(document.body),
    )


def load_entries(content_dir: Path) -> List[SiteEntry]:
    entries = [load_entry(content_dir, source) for source in discover(content_dir)]

    seen = {}
    for entry in entries:
        if entry.path in seen:
            raise BuildError(f"route {entry.path} is produced by more than one source")
        seen[entry.path] = entry
    return entries


def render_entry(
    entry: SiteEntry,
    entries: Sequence[SiteEntry],
    site: SiteConfig,
    options: BuildOptions,
) -> str:
    """Render one page as seen by a fresh session on its route."""
    session = AnimationSession(
        options.seed,
        url=entry.path,
        viewport_width=options.viewport_width,
        layout=site.layout,
    )
    if options.animate_ms > 0:
        session.run(options.animate_ms)

    page = render(session.state, entries, entry.metadata, entry.body, site)
    return build_document(page, entry.metadata, head_tags(entry.metadata, site), site)


def build(
    content_dir: Path,
    output_dir: Path,
    site: SiteConfig = SITE,
    options: BuildOptions = BuildOptions(),
) -> List[Path]:
    """Build the whole site and return the written page paths."""
    content_dir = Path(content_dir)
    output_dir = Path(output_dir)

    entries = load_entries(content_dir)
    logger.info(f"Loaded {len(entries)} pages from {content_dir}")

    written = []
    for entry in entries:
        path = output_path_for(output_dir, entry.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_entry(entry, entries, site, options), encoding="utf-8")
        logger.info(f"  Wrote {entry.path} -> {path}")
        written.append(path)

    save_feed(output_dir, entries, site)
    save_sitemap(output_dir, entries, site)
    return written


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the personal website")
    parser.add_argument("--content", type=Path, default=Path("content"),
                        help="Directory holding markdown sources")
    parser.add_argument("--output", type=Path, default=Path("public"),
                        help="Directory to write the site into")
    parser.add_argument("--base-url", help="Override the configured base URL")
    parser.add_argument("--seed", type=int, default=0,
                        help="Seed for the fireworks generator")
    parser.add_argument("--viewport-width", type=float,
                        help="Viewport width used when pre-rendering the fireworks")
    parser.add_argument("--animate-ms", type=float, default=0.0,
                        help="Milliseconds of animation to simulate before rendering")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for building the site."""
    args = parse_args(argv)

    if args.verbose:
        for name in ("build_site", "animation", "feed_generator", "sitemap_generator"):
            logging.getLogger(name).setLevel(logging.DEBUG)

    site = SITE.with_base_url(args.base_url) if args.base_url else SITE
    options = BuildOptions(
        seed=args.seed,
        viewport_width=args.viewport_width,
        animate_ms=args.animate_ms,
    )

    try:
        written = build(args.content, args.output, site, options)
    except BuildError as e:
        logger.error(f"Build failed: {e}")
        return 1

    logger.info(f"Site built successfully: {len(written)} pages in {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
