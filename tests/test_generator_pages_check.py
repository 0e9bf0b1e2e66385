"""Tests for the generator-page wiring check."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio.checks.generator_pages import (
    GeneratorPageCheck,
    function_pattern,
    is_iife,
    listener_patterns,
)
from folio.core.config import SuiteConfig, GeneratorPageSpec
from folio.model import Severity

FIXTURE_SITE = Path(__file__).resolve().parent / "fixtures" / "site"

SPEC = GeneratorPageSpec(
    path="page.html",
    name="Name Generator",
    elements=("genname", "nameDisplay"),
    functions=("generateName",),
    buttons=("genname",),
)


def _run(tmp_path: Path, html: str) -> list:
    (tmp_path / "page.html").write_text(html, encoding="utf-8")
    return GeneratorPageCheck([SPEC]).run(tmp_path)


def _rules(findings) -> list[str]:
    return [f.rule_id for f in findings]


class TestPatterns:
    @pytest.mark.parametrize(
        "code",
        ["function generateName() {}", "const generateName = () => {}", "let generateName = function() {}"],
    )
    def test_function_forms(self, code: str):
        assert function_pattern("generateName").search(code)

    def test_function_name_is_escaped(self):
        assert not function_pattern("a.b").search("function aXb() {}")

    @pytest.mark.parametrize(
        "code",
        [
            "document.getElementById('genname').addEventListener('click', f);",
            '$("#genname").on("click", f);',
            "$('#genname').click(f);",
        ],
    )
    def test_listener_forms(self, code: str):
        assert any(p.search(code) for p in listener_patterns("genname"))

    def test_iife_forms(self):
        assert is_iife("(function() { go(); })();")
        assert is_iife("(() => { go(); })()")
        assert not is_iife("function go() {}")


class TestGeneratorPageCheck:
    def test_fixture_pages_are_clean(self):
        findings = GeneratorPageCheck(SuiteConfig().generator_pages).run(FIXTURE_SITE)
        assert findings == []

    def test_missing_page(self, tmp_path: Path):
        findings = GeneratorPageCheck([SPEC]).run(tmp_path)
        assert _rules(findings) == ["GEN-PAGE-001"]
        assert findings[0].message.startswith("Name Generator: ")

    def test_missing_wiring(self, tmp_path: Path):
        findings = _run(tmp_path, '<button id="genname">Go</button>\n<script>\nfunction other() {}\n</script>')
        assert set(_rules(findings)) == {
            "GEN-ELEMENT-001",
            "GEN-FUNCTION-001",
            "GEN-LISTENER-001",
            "GEN-IIFE-001",
            "GEN-BUTTON-CLASS-001",
        }
        iife = [f for f in findings if f.rule_id == "GEN-IIFE-001"]
        assert iife[0].severity == Severity.WARNING

    def test_unbalanced_script(self, tmp_path: Path):
        html = (
            '<button id="genname" class="btn btn-primary">Go</button><p id="nameDisplay"></p>\n'
            "<script>\n(function() {\n  function generateName() {\n"
            "  document.getElementById('genname').addEventListener('click', generateName);\n"
            "})();\n</script>"
        )
        findings = _run(tmp_path, html)
        assert _rules(findings) == ["GEN-BRACES-001"]
        assert "2 opening, 1 closing" in findings[0].message
        assert findings[0].location.line == 2

    def test_no_inline_script(self, tmp_path: Path):
        html = (
            '<button id="genname" class="btn btn-primary">Go</button><p id="nameDisplay"></p>'
            '<script src="/assets/gen.js"></script>'
        )
        assert "GEN-SCRIPT-001" in _rules(_run(tmp_path, html))
