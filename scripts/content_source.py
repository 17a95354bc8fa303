#!/usr/bin/env python3
"""Split markdown sources into a YAML frontmatter mapping and a body."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


DELIMITER = "---"


class FrontmatterError(ValueError):
    """Raised when a source file has no usable frontmatter block."""


@dataclass(frozen=True)
class SourceDocument:
    """Raw frontmatter mapping plus the unrendered markdown body."""

    fields: Dict[str, Any] = field(default_factory=dict)
    body: str = ""


def parse_frontmatter(text: str) -> SourceDocument:
    """
    Parse a document that starts with a ``---`` delimited YAML block.

    Every page needs metadata, so a missing or unterminated block is an
    error rather than an empty mapping.
    """
    lines = text.lstrip("\ufeff").splitlines()
    if not lines or lines[0].strip() != DELIMITER:
        raise FrontmatterError("document does not start with a frontmatter block")

    for end, line in enumerate(lines[1:], start=1):
        if line.strip() == DELIMITER:
            break
    else:
        raise FrontmatterError("frontmatter block is not terminated")

    try:
        fields = yaml.safe_load("\n".join(lines[1:end]))
    except yaml.YAMLError as e:
        raise FrontmatterError(f"invalid YAML in frontmatter: {e}") from e

    if fields is None:
        fields = {}
    if not isinstance(fields, dict):
        raise FrontmatterError(
            f"frontmatter must be a mapping, got {type(fields).__name__}"
        )

    body = "\n".join(lines[end + 1:]).strip()
    return SourceDocument(fields=fields, body=body)


def read_frontmatter(path: Path) -> SourceDocument:
    """Read and parse a markdown source file."""
    return parse_frontmatter(Path(path).read_text(encoding="utf-8"))
