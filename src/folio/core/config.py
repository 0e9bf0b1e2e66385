"""Suite configuration — ``folio.yaml`` loaded into frozen dataclasses.

Every field has a default that mirrors the site's Jekyll layout, so a
missing config file is valid.  Unknown keys are ignored; values of the
wrong shape raise ``ConfigError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAMES = ("folio.yaml", "folio.yml", ".folio.yaml")


class ConfigError(ValueError):
    """Raised for an unreadable or malformed ``folio.yaml``."""


class SiteNotBuiltError(ConfigError):
    """Raised when the rendered output directory does not exist."""


@dataclass(frozen=True)
class PageSpec:
    """A source page checked for image alt attributes."""

    path: str
    name: str = ""


@dataclass(frozen=True)
class GeneratorPageSpec:
    """Structural expectations for an interactive generator page."""

    path: str
    name: str = ""
    elements: tuple[str, ...] = ()
    functions: tuple[str, ...] = ()
    buttons: tuple[str, ...] = ()


@dataclass(frozen=True)
class MarkupPageSpec:
    """A page whose markup and inline scripts get a sanity pass."""

    path: str
    name: str = ""
    required_elements: tuple[str, ...] = ()


@dataclass(frozen=True)
class RouteSpec:
    """A published route for the visual-regression run.

    ``dynamic_selector`` names an element holding randomly generated
    content; it is removed before the screenshot.
    """

    path: str
    name: str
    dynamic_selector: str | None = None


@dataclass(frozen=True)
class VisualConfig:
    base_url: str = "http://localhost:8080"
    routes: tuple[RouteSpec, ...] = (
        RouteSpec("/", "home"),
        RouteSpec("/wuxianame/", "wuxia-name-generator", "#nameDisplay"),
        RouteSpec("/writingprompt/", "writing-prompts", "#promptDisplay"),
        RouteSpec("/books/", "books"),
        RouteSpec("/about/", "about"),
    )
    desktop_browsers: tuple[str, ...] = ("chromium", "firefox", "webkit")
    # device descriptor name -> browser engine
    mobile_devices: tuple[tuple[str, str], ...] = (
        ("Pixel 5", "chromium"),
        ("iPhone 12", "webkit"),
    )
    snapshot_dir: str = "tests/visual-snapshots"
    output_dir: str = "visual-results"
    timeout_ms: int = 30000
    pixel_tolerance: float = 0.2   # fraction of 255 per channel
    max_diff_ratio: float = 0.0    # fraction of differing pixels


_DEFAULT_GENERATOR_PAGES = (
    GeneratorPageSpec(
        path="_pages/writingprompts.html",
        name="Writing Prompts Generator",
        elements=("generateBtn", "promptDisplay", "promptText", "copyBtn"),
        functions=("generatePrompt", "copyPrompt", "getRandomElement", "shuffle"),
        buttons=("generateBtn", "copyBtn"),
    ),
    GeneratorPageSpec(
        path="_pages/wuxianame.html",
        name="Wuxia Name Generator",
        elements=("genname", "nameDisplay", "includeZi"),
        functions=("generateName",),
        buttons=("genname",),
    ),
)


@dataclass(frozen=True)
class SuiteConfig:
    """Immutable verification-suite configuration."""

    site_dir: str = "_site"
    head_template: str | None = "_includes/head.html"
    required_files: tuple[str, ...] = ("robots.txt", "manifest.json")
    manifest_path: str = "manifest.json"
    robots_path: str = "robots.txt"
    image_pages: tuple[PageSpec, ...] = (
        PageSpec("_pages/books.html", "Books page"),
        PageSpec("_pages/about.md", "About page"),
    )
    generator_pages: tuple[GeneratorPageSpec, ...] = _DEFAULT_GENERATOR_PAGES
    markup_pages: tuple[MarkupPageSpec, ...] = (
        MarkupPageSpec(
            path="_pages/wuxianame.html",
            name="Wuxia Name Generator",
            required_elements=("nameDisplay", "genname", "includeZi"),
        ),
    )
    visual: VisualConfig = field(default_factory=VisualConfig)

    # ── loading ─────────────────────────────────────────────────────

    @classmethod
    def from_yaml(cls, path: Path) -> "SuiteConfig":
        """Load configuration from a YAML file."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise ConfigError(f"cannot read config {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: top level must be a mapping")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SuiteConfig":
        kwargs: dict[str, Any] = {}
        for key in ("site_dir", "manifest_path", "robots_path"):
            if key in data:
                kwargs[key] = _str(data[key], key)
        if "head_template" in data:
            value = data["head_template"]
            kwargs["head_template"] = None if value is None else _str(value, "head_template")
        if "required_files" in data:
            kwargs["required_files"] = _str_tuple(data["required_files"], "required_files")
        if "image_pages" in data:
            kwargs["image_pages"] = tuple(
                _build(PageSpec, item, "image_pages") for item in _list(data["image_pages"], "image_pages")
            )
        if "generator_pages" in data:
            kwargs["generator_pages"] = tuple(
                _build(GeneratorPageSpec, item, "generator_pages")
                for item in _list(data["generator_pages"], "generator_pages")
            )
        if "markup_pages" in data:
            kwargs["markup_pages"] = tuple(
                _build(MarkupPageSpec, item, "markup_pages")
                for item in _list(data["markup_pages"], "markup_pages")
            )
        if "visual" in data:
            kwargs["visual"] = _visual_from_dict(data["visual"])
        return cls(**kwargs)

    @classmethod
    def discover(cls, root: Path) -> "SuiteConfig":
        """Use the first ``folio.yaml`` found at *root*, else defaults."""
        for name in CONFIG_FILENAMES:
            candidate = root / name
            if candidate.is_file():
                return cls.from_yaml(candidate)
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """Echo of the effective configuration for the report."""
        return {
            "site_dir": self.site_dir,
            "head_template": self.head_template,
            "required_files": list(self.required_files),
            "image_pages": [p.path for p in self.image_pages],
            "generator_pages": [p.path for p in self.generator_pages],
            "markup_pages": [p.path for p in self.markup_pages],
        }


# ── helpers ─────────────────────────────────────────────────────────


def _str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_str(value: Any, key: str) -> str | None:
    return None if value is None else _str(value, key)


def _list(value: Any, key: str) -> list:
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _number(value: Any, key: str, kind: type):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'{key}' must be a number, got {type(value).__name__}")
    return kind(value)


def _str_tuple(value: Any, key: str) -> tuple[str, ...]:
    return tuple(_str(v, key) for v in _list(value, key))


def _build(cls: type, item: Any, key: str):
    if isinstance(item, str):
        item = {"path": item}
    if not isinstance(item, dict):
        raise ConfigError(f"entries of '{key}' must be mappings or paths")
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in item:
            continue
        value = item[f.name]
        if f.type.startswith("tuple"):
            kwargs[f.name] = _str_tuple(value, f"{key}.{f.name}")
        else:
            kwargs[f.name] = _str(value, f"{key}.{f.name}")
    if "path" not in kwargs:
        raise ConfigError(f"entries of '{key}' need a 'path'")
    return cls(**kwargs)


def _visual_from_dict(data: Any) -> VisualConfig:
    if not isinstance(data, dict):
        raise ConfigError("'visual' must be a mapping")
    kwargs: dict[str, Any] = {}
    for key in ("base_url", "snapshot_dir", "output_dir"):
        if key in data:
            kwargs[key] = _str(data[key], f"visual.{key}")
    if "timeout_ms" in data:
        kwargs["timeout_ms"] = _number(data["timeout_ms"], "visual.timeout_ms", int)
    for key in ("pixel_tolerance", "max_diff_ratio"):
        if key in data:
            value = _number(data[key], f"visual.{key}", float)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"'visual.{key}' must be between 0 and 1")
            kwargs[key] = value
    if "desktop_browsers" in data:
        kwargs["desktop_browsers"] = _str_tuple(data["desktop_browsers"], "visual.desktop_browsers")
    if "mobile_devices" in data:
        devices = []
        for item in _list(data["mobile_devices"], "visual.mobile_devices"):
            if not isinstance(item, dict) or "device" not in item:
                raise ConfigError("entries of 'visual.mobile_devices' need a 'device'")
            devices.append((_str(item["device"], "device"), _str(item.get("browser", "chromium"), "browser")))
        kwargs["mobile_devices"] = tuple(devices)
    if "routes" in data:
        routes = []
        for item in _list(data["routes"], "visual.routes"):
            if not isinstance(item, dict) or "path" not in item or "name" not in item:
                raise ConfigError("entries of 'visual.routes' need 'path' and 'name'")
            routes.append(
                RouteSpec(
                    path=_str(item["path"], "visual.routes.path"),
                    name=_str(item["name"], "visual.routes.name"),
                    dynamic_selector=_optional_str(
                        item.get("dynamic_selector"), "visual.routes.dynamic_selector"
                    ),
                )
            )
        kwargs["routes"] = tuple(routes)
    return VisualConfig(**kwargs)
