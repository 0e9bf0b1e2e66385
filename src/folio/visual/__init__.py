"""Visual regression harness (Playwright screenshots, Pillow comparison)."""

from folio.visual.harness import (
    Profile,
    VisualRegressionRunner,
    build_visual_report,
    device_options,
    plan_profiles,
    snapshot_name,
)
from folio.visual.imaging import ImageDiff, compare_images
from folio.visual.server import serve_site

__all__ = [
    "ImageDiff",
    "Profile",
    "VisualRegressionRunner",
    "build_visual_report",
    "compare_images",
    "device_options",
    "plan_profiles",
    "serve_site",
    "snapshot_name",
]
