"""Raw ``<img>`` tags in source pages must carry ``alt=``.

Source pages may be Markdown with embedded HTML, so this works on the
raw text rather than a parsed tree.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from folio.core.config import PageSpec
from folio.model import CheckType, Severity
from folio.model.finding import Finding, assign_ids, make_finding

_logger = logging.getLogger(__name__)

_IMG_TAG = re.compile(r"<img[^>]*>", re.IGNORECASE)


class ImageAltCheck:
    """Flags ``<img>`` tags without an ``alt`` attribute in configured pages."""

    id: str = "image_alt"
    version: str = "1.0.0"

    def __init__(self, pages: Iterable[PageSpec] = ()):
        self.pages = tuple(pages)

    def run(self, root: Path) -> list[Finding]:
        findings: list[Finding] = []
        for spec in self.pages:
            path = root / spec.path
            if not path.is_file():
                _logger.debug("%s not present; skipped", spec.path)
                continue
            content = path.read_text(encoding="utf-8", errors="replace")
            label = spec.name or spec.path

            tags = list(_IMG_TAG.finditer(content))
            if not tags:
                findings.append(
                    make_finding(
                        CheckType.IMAGES,
                        Severity.INFO,
                        "IMG-NONE-001",
                        f"{label}: No images found",
                        spec.path,
                    )
                )
                continue

            missing = 0
            for m in tags:
                tag = m.group(0)
                if "alt=" in tag:
                    continue
                missing += 1
                line = content.count("\n", 0, m.start()) + 1
                findings.append(
                    make_finding(
                        CheckType.IMAGES,
                        Severity.ERROR,
                        "IMG-ALT-001",
                        f"{label}: Image tag missing alt attribute",
                        spec.path,
                        line=line,
                        symbol=tag,
                        metadata={"tag": tag},
                    )
                )
            if not missing:
                _logger.debug("%s: all %d images have alt attributes", label, len(tags))

        return assign_ids(findings, "img")
