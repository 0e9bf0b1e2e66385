"""Visual regression: full-page screenshots of each route, compared to baselines.

Every route is captured once per profile.  A profile is a browser engine
plus either a desktop device descriptor or a named mobile device::

    home-chromium.png            desktop
    home-mobile-webkit.png       mobile (iPhone 12)

Elements holding randomly generated content are removed before capture.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable
from urllib.parse import urlsplit

from PIL import Image

from folio.core.config import ConfigError, RouteSpec, SiteNotBuiltError, SuiteConfig, VisualConfig
from folio.model import CheckType, Severity
from folio.model.finding import Finding, assign_ids, make_finding
from folio.model.report import CheckReport, CheckSummary
from folio.visual.imaging import compare_images
from folio.visual.server import serve_site

_logger = logging.getLogger(__name__)

ENGINES = ("chromium", "firefox", "webkit")

DESKTOP_DESCRIPTORS = {
    "chromium": "Desktop Chrome",
    "firefox": "Desktop Firefox",
    "webkit": "Desktop Safari",
}

_STRIP_ELEMENT_JS = "(selector) => { const el = document.querySelector(selector); if (el) el.remove(); }"


@dataclass(frozen=True, slots=True)
class Profile:
    engine: str
    device: str
    mobile: bool = False

    @property
    def label(self) -> str:
        return f"{self.device} ({self.engine})"


def plan_profiles(visual: VisualConfig, browsers: Iterable[str] | None = None) -> list[Profile]:
    """Desktop profiles first, then mobile ones, limited to *browsers* if given."""
    allowed = set(browsers) if browsers else None
    configured = set(visual.desktop_browsers) | {engine for _, engine in visual.mobile_devices}
    unknown = ((allowed or set()) | configured) - set(ENGINES)
    if unknown:
        raise ValueError(f"unknown browser engine(s): {', '.join(sorted(unknown))}")

    profiles = [
        Profile(engine, DESKTOP_DESCRIPTORS[engine])
        for engine in visual.desktop_browsers
    ]
    profiles += [
        Profile(engine, device, mobile=True)
        for device, engine in visual.mobile_devices
    ]
    if allowed is not None:
        profiles = [p for p in profiles if p.engine in allowed]
    return profiles


def snapshot_name(route: RouteSpec, profile: Profile) -> str:
    if profile.mobile:
        return f"{route.name}-mobile-{profile.engine}.png"
    return f"{route.name}-{profile.engine}.png"


def device_options(devices, profile: Profile) -> dict:
    """Browser-context options for *profile* from Playwright's device registry."""
    try:
        options = dict(devices[profile.device])
    except KeyError:
        raise ConfigError(
            f"unknown device descriptor {profile.device!r} for {profile.engine}"
        ) from None
    options.pop("default_browser_type", None)
    return options


class VisualRegressionRunner:
    """Captures and compares screenshots for every route × profile."""

    id: str = "visual_regression"
    version: str = "1.0.0"

    def __init__(
        self,
        config: SuiteConfig,
        *,
        update: bool = False,
        browsers: Iterable[str] | None = None,
    ):
        self.config = config
        self.visual = config.visual
        self.update = update
        self.profiles = plan_profiles(self.visual, browsers)

    # ── capture ─────────────────────────────────────────────────────

    def run(self, root: Path) -> list[Finding]:
        site_dir = root / self.config.site_dir
        if not site_dir.is_dir():
            raise SiteNotBuiltError(
                f"Site not built: {site_dir} does not exist. Build the site first."
            )

        from playwright.sync_api import Error as PlaywrightError
        from playwright.sync_api import sync_playwright

        parts = urlsplit(self.visual.base_url)
        host = parts.hostname or "127.0.0.1"
        port = parts.port or 8080

        findings: list[Finding] = []
        with serve_site(site_dir, host, port) as base_url, sync_playwright() as p:
            planned = [(profile, device_options(p.devices, profile)) for profile in self.profiles]
            for profile, options in planned:
                try:
                    browser = getattr(p, profile.engine).launch()
                except PlaywrightError as e:
                    _logger.error("Cannot launch %s: %s", profile.engine, e)
                    findings.append(self._launch_failure(profile, e))
                    continue
                try:
                    context = browser.new_context(**options)
                    context.set_default_timeout(self.visual.timeout_ms)
                    page = context.new_page()
                    for route in self.visual.routes:
                        findings.extend(
                            self._capture(page, base_url, route, profile, root, PlaywrightError)
                        )
                finally:
                    browser.close()
        return assign_ids(findings, "vis")

    def _capture(self, page, base_url, route, profile, root, error_type) -> list[Finding]:
        name = snapshot_name(route, profile)
        try:
            page.goto(base_url + route.path, wait_until="networkidle")
            if route.dynamic_selector:
                page.evaluate(_STRIP_ELEMENT_JS, route.dynamic_selector)
            png = page.screenshot(full_page=True)
        except error_type as e:
            _logger.error("%s on %s: %s", route.path, profile.label, e)
            return [
                make_finding(
                    CheckType.VISUAL,
                    Severity.ERROR,
                    "VISUAL-NAVIGATION-001",
                    f"{route.name} on {profile.label}: page could not be captured: {e}",
                    route.path,
                    symbol=name,
                )
            ]
        return self.evaluate_snapshot(root, name, png)

    def _launch_failure(self, profile: Profile, exc: BaseException) -> Finding:
        return make_finding(
            CheckType.VISUAL,
            Severity.ERROR,
            "VISUAL-BROWSER-001",
            f"{profile.label}: browser could not be launched: {exc}",
            "",
            symbol=f"{profile.engine}:{profile.device}",
            metadata={"engine": profile.engine, "device": profile.device},
        )

    # ── comparison ──────────────────────────────────────────────────

    def evaluate_snapshot(self, root: Path, name: str, png: bytes) -> list[Finding]:
        """Compare *png* with the stored baseline *name* and report the outcome."""
        snapshot_dir = root / self.visual.snapshot_dir
        baseline = snapshot_dir / name
        rel = (Path(self.visual.snapshot_dir) / name).as_posix()

        if self.update or not baseline.is_file():
            snapshot_dir.mkdir(parents=True, exist_ok=True)
            baseline.write_bytes(png)
            if self.update:
                _logger.info("Updated baseline %s", rel)
                return [
                    make_finding(
                        CheckType.VISUAL,
                        Severity.INFO,
                        "VISUAL-UPDATED-001",
                        f"Baseline {name} written",
                        rel,
                        symbol=name,
                    )
                ]
            _logger.error("No baseline for %s; actual written as new baseline", name)
            return [
                make_finding(
                    CheckType.VISUAL,
                    Severity.ERROR,
                    "VISUAL-BASELINE-001",
                    f"No baseline for {name}; the captured screenshot was written as the new baseline",
                    rel,
                    symbol=name,
                )
            ]

        with Image.open(baseline) as expected, Image.open(io.BytesIO(png)) as actual:
            diff = compare_images(expected, actual, pixel_tolerance=self.visual.pixel_tolerance)
            if diff.within(self.visual.max_diff_ratio):
                _logger.debug("%s matches baseline (%d differing pixels)", name, diff.differing_pixels)
                return []

            out_dir = root / self.visual.output_dir
            out_dir.mkdir(parents=True, exist_ok=True)
            stem = Path(name).stem
            actual_path = out_dir / f"{stem}-actual.png"
            actual_path.write_bytes(png)
            diff_path = None
            if diff.diff_image is not None:
                diff_path = out_dir / f"{stem}-diff.png"
                diff.diff_image.save(diff_path)

            if diff.size_mismatch:
                message = f"{name}: size {actual.size} differs from baseline {expected.size}"
            else:
                message = (
                    f"{name}: {diff.differing_pixels} of {diff.total_pixels} pixels differ "
                    f"({diff.ratio:.4%})"
                )

        _logger.error(message)
        return [
            make_finding(
                CheckType.VISUAL,
                Severity.ERROR,
                "VISUAL-MISMATCH-001",
                message,
                rel,
                symbol=name,
                metadata={
                    "differing_pixels": diff.differing_pixels,
                    "ratio": round(diff.ratio, 6),
                    "size_mismatch": diff.size_mismatch,
                    "actual": actual_path.as_posix(),
                    "diff": diff_path.as_posix() if diff_path else None,
                },
            )
        ]


def build_visual_report(
    root: Path,
    config: SuiteConfig,
    findings: list[Finding],
    runner: VisualRegressionRunner,
) -> CheckReport:
    return CheckReport(
        suite="visual",
        root=root.as_posix(),
        config=config.to_dict(),
        findings=findings,
        checks=[CheckSummary(runner.id, runner.version, findings=len(findings))],
    )
