"""Tests for the markdown linter."""

from __future__ import annotations

from pathlib import Path

from wrangler.models import Severity
from wrangler.postproc.lint import HEADING_SKIP_LEVEL, MISSING_FENCE_LANGUAGE, MarkdownLinter

README = Path("README.md")


def test_lint_flags_opening_fence_without_language() -> None:
    markdown = "# Test\n\n```\ncode here\n```\n"
    findings = MarkdownLinter().lint(README, markdown)

    fence_findings = [finding for finding in findings if finding.id == MISSING_FENCE_LANGUAGE]
    assert len(fence_findings) == 1
    assert fence_findings[0].line_start == 3
    assert fence_findings[0].line_end == 3
    assert fence_findings[0].severity is Severity.WARN
    assert fence_findings[0].file == README


def test_lint_ignores_tagged_fences_and_closing_fences() -> None:
    markdown = "# Test\n\n## Sub-heading\n\n```java\ncode here\n```\n"
    findings = MarkdownLinter().lint(README, markdown)
    assert findings == []


def test_lint_detects_heading_skip() -> None:
    findings = MarkdownLinter().lint(README, "# A\n\n### B\n")

    assert len(findings) == 1
    finding = findings[0]
    assert finding.id == HEADING_SKIP_LEVEL
    assert finding.severity is Severity.INFO
    assert finding.message == "Heading jumps from level 1 to 3"
    assert finding.line_start == 3


def test_lint_accepts_sequential_levels_and_decreases() -> None:
    assert MarkdownLinter().lint(README, "# A\n\n## B\n") == []
    assert MarkdownLinter().lint(README, "# A\n## B\n### C\n# D\n## E\n") == []


def test_lint_reports_fences_before_headings() -> None:
    markdown = "# A\n### B\n```\nx\n```\n"
    ids = [finding.id for finding in MarkdownLinter().lint(README, markdown)]
    assert ids == [MISSING_FENCE_LANGUAGE, HEADING_SKIP_LEVEL]


def test_lint_survives_unterminated_fence() -> None:
    markdown = "# A\n```\n### not a heading\n"
    findings = MarkdownLinter().lint(README, markdown)
    assert [finding.id for finding in findings] == [MISSING_FENCE_LANGUAGE]


def test_count_headings() -> None:
    markdown = "# H1\n## H2\n### H3\n## H2 Again\n"
    assert MarkdownLinter().count_headings(markdown) == 4


def test_count_headings_skips_fenced_lines() -> None:
    markdown = "# H1\n\n```bash\n# install deps\n## not a heading\n```\n\n## H2\n"
    assert MarkdownLinter().count_headings(markdown) == 2
