"""Jekyll source pages: front matter split and HTML parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml
from bs4 import BeautifulSoup
from frontmatter.default_handlers import YAMLHandler

_HANDLER = YAMLHandler()


class FrontMatterError(ValueError):
    """Front matter block present but not valid YAML."""


@dataclass(frozen=True)
class SourceText:
    """A page split into its raw front matter block and its body.

    ``front_matter`` keeps the delimiters and original formatting, so
    ``front_matter + body`` reproduces the file exactly.
    """

    front_matter: str
    body: str
    metadata: dict = field(default_factory=dict)

    @property
    def line_offset(self) -> int:
        """Lines consumed by the front matter block."""
        return self.front_matter.count("\n")


def split_front_matter(text: str) -> SourceText:
    """Separate Jekyll front matter from *text*.

    Raises ``FrontMatterError`` when the block is not valid YAML.
    """
    if not _HANDLER.detect(text):
        return SourceText(front_matter="", body=text)
    try:
        fm, body = _HANDLER.split(text)
    except ValueError:
        # Opening delimiter without a closing one: treat as plain content.
        return SourceText(front_matter="", body=text)
    try:
        metadata = _HANDLER.load(fm) or {}
    except yaml.YAMLError as e:
        raise FrontMatterError(f"front matter is not valid YAML: {e}") from e
    if not isinstance(metadata, dict):
        raise FrontMatterError("front matter must be a mapping")
    return SourceText(
        front_matter=text[: len(text) - len(body)],
        body=body,
        metadata=metadata,
    )


def parse_html(body: str) -> BeautifulSoup:
    return BeautifulSoup(body, "html.parser")


@dataclass
class Page:
    """A loaded page: relative path, raw text, split source and parsed tree."""

    rel: str
    raw: str
    source: SourceText
    soup: BeautifulSoup

    def line_of(self, tag) -> int:
        """Best-effort 1-based line of *tag* in the original file."""
        line = getattr(tag, "sourceline", None) or 0
        return line + self.source.line_offset if line else 0


def load_page(root: Path, rel: str) -> Page:
    """Read *rel* under *root*, strip front matter and parse the body.

    Raises ``FileNotFoundError`` and ``FrontMatterError``.
    """
    path = root / rel
    if not path.is_file():
        raise FileNotFoundError(f"file not found: {rel}")
    raw = path.read_text(encoding="utf-8", errors="replace")
    source = split_front_matter(raw)
    return Page(rel=rel, raw=raw, source=source, soup=parse_html(source.body))
