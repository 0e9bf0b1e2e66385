"""Tests for folio.yaml loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio.core.config import ConfigError, RouteSpec, SuiteConfig


class TestDefaults:
    def test_default_layout(self):
        config = SuiteConfig()
        assert config.site_dir == "_site"
        assert config.head_template == "_includes/head.html"
        assert config.required_files == ("robots.txt", "manifest.json")
        assert [p.path for p in config.generator_pages] == [
            "_pages/writingprompts.html",
            "_pages/wuxianame.html",
        ]

    def test_default_visual_routes_strip_generated_content(self):
        routes = {r.path: r for r in SuiteConfig().visual.routes}
        assert routes["/wuxianame/"].dynamic_selector == "#nameDisplay"
        assert routes["/writingprompt/"].dynamic_selector == "#promptDisplay"
        assert routes["/"].dynamic_selector is None

    def test_discover_without_file_uses_defaults(self, tmp_path: Path):
        assert SuiteConfig.discover(tmp_path) == SuiteConfig()


class TestFromYaml:
    def test_overrides_and_unknown_keys(self, tmp_path: Path):
        (tmp_path / "folio.yaml").write_text(
            "site_dir: public\n"
            "head_template: null\n"
            "unknown_key: 1\n"
            "image_pages:\n"
            "  - _pages/gallery.html\n"
            "  - {path: _pages/about.md, name: About}\n"
            "visual:\n"
            "  base_url: http://localhost:4000\n"
            "  pixel_tolerance: 0.1\n"
            "  mobile_devices:\n"
            "    - {device: Pixel 5}\n"
            "  routes:\n"
            "    - {path: /, name: home}\n"
            "    - {path: /wuxianame/, name: names, dynamic_selector: '#nameDisplay'}\n",
            encoding="utf-8",
        )
        config = SuiteConfig.discover(tmp_path)
        assert config.site_dir == "public"
        assert config.head_template is None
        assert [p.path for p in config.image_pages] == ["_pages/gallery.html", "_pages/about.md"]
        assert config.image_pages[1].name == "About"
        assert config.visual.base_url == "http://localhost:4000"
        assert config.visual.pixel_tolerance == 0.1
        assert config.visual.mobile_devices == (("Pixel 5", "chromium"),)
        assert config.visual.routes[1] == RouteSpec("/wuxianame/", "names", "#nameDisplay")

    def test_generator_page_lists_become_tuples(self, tmp_path: Path):
        f = tmp_path / "custom.yaml"
        f.write_text(
            "generator_pages:\n"
            "  - path: _pages/gen.html\n"
            "    elements: [a, b]\n"
            "    buttons: [b]\n",
            encoding="utf-8",
        )
        page = SuiteConfig.from_yaml(f).generator_pages[0]
        assert page.elements == ("a", "b")
        assert page.functions == ()

    @pytest.mark.parametrize(
        "text, match",
        [
            ("- just\n- a list\n", "mapping"),
            ("site_dir: [1]\n", "site_dir"),
            ("required_files: robots.txt\n", "required_files"),
            ("visual:\n  timeout_ms: fast\n", "timeout_ms"),
            ("visual:\n  max_diff_ratio: 2\n", "between 0 and 1"),
            ("visual:\n  pixel_tolerance: true\n", "pixel_tolerance"),
            ("markup_pages:\n  - {name: x}\n", "path"),
            ("site_dir: [unclosed\n", "invalid YAML"),
            ("generator_pages:\n  - {path: p.html, elements: genname}\n", "generator_pages.elements"),
            ("markup_pages:\n  - {path: p.html, required_elements: nameDisplay}\n", "required_elements"),
            ("generator_pages:\n  - {path: p.html, buttons: [genname, 3]}\n", "generator_pages.buttons"),
            ("image_pages:\n  - {path: 7}\n", "image_pages.path"),
            ("image_pages:\n  - {path: a.md, name: [x]}\n", "image_pages.name"),
            ("visual:\n  routes:\n    - {path: /, name: home, dynamic_selector: [a]}\n", "dynamic_selector"),
        ],
    )
    def test_malformed_config(self, tmp_path: Path, text: str, match: str):
        f = tmp_path / "folio.yaml"
        f.write_text(text, encoding="utf-8")
        with pytest.raises(ConfigError, match=match):
            SuiteConfig.from_yaml(f)

    def test_unreadable_config(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="cannot read"):
            SuiteConfig.from_yaml(tmp_path / "missing.yaml")
