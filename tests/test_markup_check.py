"""Tests for the markup sanity check."""

from __future__ import annotations

from pathlib import Path

from folio.checks.markup import MarkupCheck, brace_surplus_lines
from folio.core.config import MarkupPageSpec, SuiteConfig
from folio.model import Severity

FIXTURE_SITE = Path(__file__).resolve().parent / "fixtures" / "site"

SPEC = MarkupPageSpec(path="gen.html", name="Generator", required_elements=("nameDisplay",))


def _run(tmp_path: Path, html: str):
    (tmp_path / "gen.html").write_text(html, encoding="utf-8")
    return [f for f in MarkupCheck([SPEC]).run(tmp_path) if f.severity != Severity.INFO]


def test_brace_surplus_lines_skips_comments_and_single_openers():
    script = "\nif (a) {\n// {{ ignored\nconst o = {a: {b: 1\n}}"
    assert brace_surplus_lines(script) == [4]


def test_fixture_page_is_clean():
    findings = MarkupCheck(SuiteConfig().markup_pages).run(FIXTURE_SITE)
    assert [(f.rule_id, f.severity) for f in findings] == [("MARKUP-SCRIPTS-001", Severity.INFO)]


def test_script_count_is_reported(tmp_path: Path):
    html = '<p id="nameDisplay"></p><script>var a = 1;</script><script> </script><script>go();</script>'
    (tmp_path / "gen.html").write_text(html, encoding="utf-8")
    findings = MarkupCheck([SPEC]).run(tmp_path)
    assert [f.rule_id for f in findings] == ["MARKUP-SCRIPTS-001"]
    assert findings[0].message == "Found 2 non-empty script tag(s)"
    assert findings[0].metadata == {"scripts": 2}


def test_missing_required_element(tmp_path: Path):
    findings = _run(tmp_path, "<div></div>")
    assert [f.message for f in findings] == ["Missing required element: #nameDisplay"]


def test_brace_line_warning_has_file_line(tmp_path: Path):
    html = '<p id="nameDisplay"></p>\n<script>\nconst o = {a: {b: 1\n}};\n</script>'
    findings = _run(tmp_path, html)
    assert len(findings) == 1
    f = findings[0]
    assert f.rule_id == "MARKUP-BRACE-LINE-001"
    assert f.severity == Severity.WARNING
    assert f.message == "Line 2: Possible brace mismatch"
    assert f.location.line == 3


def test_runaway_string(tmp_path: Path):
    findings = _run(tmp_path, "<p id=\"nameDisplay\"></p><script>const s = '''oops;</script>")
    assert [f.rule_id for f in findings] == ["MARKUP-RUNAWAY-STRING-001"]


def test_function_without_closing_brace(tmp_path: Path):
    findings = _run(tmp_path, '<p id="nameDisplay"></p><script>function go() {</script>')
    assert "MARKUP-CLOSE-BRACE-001" in [f.rule_id for f in findings]


def test_missing_page(tmp_path: Path):
    findings = MarkupCheck([SPEC]).run(tmp_path)
    assert [f.rule_id for f in findings] == ["MARKUP-PAGE-001"]
