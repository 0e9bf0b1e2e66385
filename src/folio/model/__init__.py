"""Enums shared across the check, timeline and visual layers."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Check outcome severity.

    ``ERROR`` is a hard failure (non-zero exit), ``WARNING`` is soft.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class CheckType(str, Enum):
    """Canonical check identifiers."""

    FILES = "files"
    SEO = "seo"
    IMAGES = "images"
    MANIFEST = "manifest"
    ROBOTS = "robots"
    GENERATOR = "generator"
    MARKUP = "markup"
    VISUAL = "visual"
    RUNNER = "runner"


class SortKey(str, Enum):
    """Selectable ordering for the works timeline.

    ``COLOR`` is legacy: it orders by the raw hex-like id as a string.
    """

    DATE = "date"
    LENGTH = "length"
    COLOR = "color"
