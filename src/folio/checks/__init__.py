"""Checks produce findings from a site's source and rendered output.

Every check exposes ``id``, ``version`` and ``run(root) -> list[Finding]``,
where *root* is the site source root.  What each check looks at is fixed
at construction time from ``SuiteConfig``.

Available checks:
    - RequiredFilesCheck: robots.txt / manifest.json presence
    - SeoCheck: head-template and rendered-page meta tags
    - ImageAltCheck: raw ``<img>`` tags in source pages
    - ManifestCheck, RobotsCheck: web-app manifest and robots.txt content
    - GeneratorPageCheck: structure of the interactive generator pages
    - MarkupCheck: inline script sanity and required elements
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from folio.model.finding import Finding


class Check(Protocol):
    """Every check must expose ``id``, ``version``, and ``run()``."""

    id: str
    version: str

    def run(self, root: Path) -> list[Finding]:
        """Check the site under *root* and return findings."""
        ...


# Lazy imports keep ``folio.checks`` cheap to import.
def __getattr__(name: str):
    if name == "RequiredFilesCheck":
        from .site_files import RequiredFilesCheck
        return RequiredFilesCheck
    if name == "ManifestCheck":
        from .site_files import ManifestCheck
        return ManifestCheck
    if name == "RobotsCheck":
        from .site_files import RobotsCheck
        return RobotsCheck
    if name == "SeoCheck":
        from .seo import SeoCheck
        return SeoCheck
    if name == "ImageAltCheck":
        from .images import ImageAltCheck
        return ImageAltCheck
    if name == "GeneratorPageCheck":
        from .generator_pages import GeneratorPageCheck
        return GeneratorPageCheck
    if name == "MarkupCheck":
        from .markup import MarkupCheck
        return MarkupCheck
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
