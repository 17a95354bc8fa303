#!/usr/bin/env python3
"""
Page renderer - Wraps rendered markdown bodies in the shared site chrome.

Each metadata variant gets its own content composition:
- Home page: body plus the fireworks overlay when it is active
- Page: body only
- Post: heading, publication date, body
- Talk: heading, event line, body
- Index: heading and a newest-first listing of matching pages
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from datetime import datetime
from typing import List, Sequence, assert_never

import metadata as meta
from animation import AnimationState, Location
from config import SITE, SiteConfig
from metadata import HomePage, Index, IndexCategory, Metadata, Page, Post, Talk
from seo_tags import TagSet, render_head_tags

DATE_FORMAT = "%B %d, %Y"


@dataclass(frozen=True)
class SiteEntry:
    """One page of the site: its route, decoded metadata and rendered body."""

    path: str
    metadata: Metadata
    body: str


@dataclass(frozen=True)
class RenderedPage:
    title: str
    body: str


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def entries_for(category: IndexCategory, site_index: Sequence[SiteEntry]) -> List[SiteEntry]:
    """Entries listed on a category index, newest first."""
    if category is IndexCategory.POSTS:
        wanted: type = Post
    elif category is IndexCategory.TALKS:
        wanted = Talk
    else:
        assert_never(category)

    matching = [entry for entry in site_index if isinstance(entry.metadata, wanted)]
    return sorted(
        matching,
        key=lambda entry: (meta.published_at(entry.metadata), meta.title(entry.metadata)),
        reverse=True,
    )


class PageRenderer:
    """Renders pages for one browsing session."""

    def __init__(
        self,
        session: AnimationState,
        site_index: Sequence[SiteEntry],
        site: SiteConfig = SITE,
    ):
        self.session = session
        self.site_index = list(site_index)
        self.site = site

    def render(self, metadata: Metadata, rendered_body: str) -> RenderedPage:
        """Compose the page chrome around the variant-specific content."""
        content = self._build_content(metadata, rendered_body)
        body = f"""{self._build_header()}
    <main class="content">
{content}
    </main>
{self._build_footer()}{self._build_overlay()}"""
        return RenderedPage(title=meta.title(metadata), body=body)

    def _build_content(self, metadata: Metadata, rendered_body: str) -> str:
        if isinstance(metadata, HomePage):
            return rendered_body
        if isinstance(metadata, Page):
            return rendered_body
        if isinstance(metadata, Post):
            published = metadata.published_at
            return f"""        <h1>{html.escape(metadata.title)}</h1>
        <p class="post-date"><time datetime="{published.isoformat()}">{format_date(published)}</time></p>
{rendered_body}"""
        if isinstance(metadata, Talk):
            return f"""        <h1>{html.escape(metadata.title)}</h1>
        <p class="talk-event">Presented at {html.escape(metadata.event)}</p>
{rendered_body}"""
        if isinstance(metadata, Index):
            return self._build_listing(metadata.category)
        assert_never(metadata)

    def _build_listing(self, category: IndexCategory) -> str:
        items = []
        for entry in entries_for(category, self.site_index):
            published = meta.published_at(entry.metadata)
            extra = ""
            if isinstance(entry.metadata, Talk):
                extra = f' <span class="listing-event">{html.escape(entry.metadata.event)}</span>'
            items.append(
                f'            <li><a href="{html.escape(entry.path)}">'
                f"{html.escape(meta.title(entry.metadata))}</a> "
                f'<time datetime="{published.isoformat()}">{format_date(published)}</time>'
                f"{extra}</li>"
            )

        listing = "\n".join(items) if items else '            <li class="empty">Nothing here yet.</li>'
        return f"""        <h1>{html.escape(meta.category_title(category))}</h1>
        <ul class="listing listing-{category.value}">
{listing}
        </ul>"""

    def _build_nav(self) -> str:
        current = self.session.location.directory
        links = []
        for link in self.site.nav_links:
            directory = Location(path=link.href).directory
            if directory and directory == current:
                links.append(
                    f'            <a class="nav-link active" aria-current="page" '
                    f'href="{html.escape(link.href)}">{html.escape(link.label)}</a>'
                )
            else:
                links.append(
                    f'            <a class="nav-link" href="{html.escape(link.href)}">'
                    f"{html.escape(link.label)}</a>"
                )
        return "\n".join(links)

    def _build_header(self) -> str:
        return f"""    <header class="site-header">
        <a class="site-title" href="{html.escape(self.site.home_route)}">{html.escape(self.site.name)}</a>
        <nav class="site-nav">
{self._build_nav()}
        </nav>
    </header>"""

    def _build_footer(self) -> str:
        return f"""    <footer class="site-footer">
        <p><a href="{html.escape(self.site.license_url)}" rel="license">{html.escape(self.site.license_text)}</a></p>
    </footer>"""

    def _build_overlay(self) -> str:
        """Inline SVG snapshot of the live particles, only while animating."""
        if not self.session.active:
            return ""

        settings = self.session.engine.settings
        circles = "\n".join(
            f'        <circle cx="{p.x:.1f}" cy="{p.y:.1f}" r="{p.size:.1f}" '
            f'fill="{p.color}" opacity="{min(1.0, p.life / settings.max_life):.2f}"/>'
            for p in self.session.particles
        )
        return f"""
    <svg class="fireworks" aria-hidden="true" viewBox="0 0 {settings.width:g} {settings.height:g}" preserveAspectRatio="xMidYMid slice">
{circles}
    </svg>"""


def render(
    session: AnimationState,
    site_index: Sequence[SiteEntry],
    current_page: Metadata,
    rendered_body: str,
    site: SiteConfig = SITE,
) -> RenderedPage:
    return PageRenderer(session, site_index, site).render(current_page, rendered_body)


def document_title(metadata: Metadata, site: SiteConfig = SITE) -> str:
    if isinstance(metadata, HomePage):
        return site.name
    return f"{meta.title(metadata)} | {site.name}"


def _build_fonts(site: SiteConfig) -> str:
    primary = site.font_primary.replace(" ", "+")
    secondary = site.font_secondary.replace(" ", "+")
    return f"""    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
    <link href="https://fonts.googleapis.com/css2?family={primary}:wght@400;600;700&family={secondary}:wght@400;500&display=swap" rel="stylesheet">"""


def _build_styles(site: SiteConfig) -> str:
    layout = site.layout
    return f"""    <style>
        :root {{
            --color-bg: {site.color_bg};
            --color-text: {site.color_text};
            --color-accent: {site.color_accent};
            --color-muted: {site.color_muted};
            --font-primary: '{site.font_primary}', Georgia, serif;
            --font-secondary: '{site.font_secondary}', system-ui, sans-serif;
            --content-width: {layout.content_margin}px;
            --gutter: {layout.gutter}px;
        }}

        *, *::before, *::after {{
            box-sizing: border-box;
            margin: 0;
            padding: 0;
        }}

        body {{
            font-family: var(--font-secondary);
            line-height: 1.6;
            color: var(--color-text);
            background: var(--color-bg);
            min-height: 100vh;
        }}

        .site-header, .content, .site-footer {{
            max-width: var(--content-width);
            margin: 0 auto;
            padding: 1.5rem;
        }}

        .site-title {{
            font-family: var(--font-primary);
            font-weight: 700;
            color: var(--color-text);
            text-decoration: none;
        }}

        .nav-link {{
            color: var(--color-muted);
            margin-right: 1rem;
        }}

        .nav-link.active {{
            color: var(--color-accent);
            text-decoration: underline;
        }}

        .site-footer {{
            position: fixed;
            bottom: 0;
            left: 0;
            right: 0;
            font-size: 0.8rem;
            color: var(--color-muted);
        }}

        .fireworks {{
            position: fixed;
            inset: 0;
            width: 100%;
            height: 100%;
            pointer-events: none;
        }}

        @media (prefers-reduced-motion: reduce) {{
            .fireworks {{
                display: none;
            }}
        }}
    </style>"""


def build_document(
    page: RenderedPage,
    metadata: Metadata,
    tags: TagSet,
    site: SiteConfig = SITE,
) -> str:
    """Serialize a rendered page into a complete HTML document."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(document_title(metadata, site))}</title>
{render_head_tags(tags)}
    <link rel="alternate" type="application/atom+xml" title="{html.escape(site.name)}" href="{html.escape(site.feed_path)}">
{_build_fonts(site)}
{_build_styles(site)}
</head>
<body>
{page.body}
</body>
</html>"""
