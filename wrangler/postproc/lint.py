"""Linting utilities for README markdown."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ..markdown import FENCE_TOKEN, is_fence, iter_headings, split_lines
from ..models import Finding, Severity

MISSING_FENCE_LANGUAGE = "missing-code-fence-language"
HEADING_SKIP_LEVEL = "heading-skip-level"


class MarkdownLinter:
    """Reports code fences without language tags and skipped heading levels."""

    def lint(self, path: Optional[Path], markdown: str) -> List[Finding]:
        findings: List[Finding] = []
        findings.extend(self._check_code_fences(path, markdown))
        findings.extend(self._check_headings(path, markdown))
        return findings

    def count_headings(self, markdown: str) -> int:
        """Count headings; ``#`` lines inside fenced code are not counted."""
        return sum(1 for _ in iter_headings(markdown))

    def _check_code_fences(self, path: Optional[Path], markdown: str) -> List[Finding]:
        findings: List[Finding] = []
        in_code = False
        for index, line in enumerate(split_lines(markdown)):
            if not is_fence(line):
                continue
            if not in_code:
                language = line.strip()[len(FENCE_TOKEN):].strip()
                if not language:
                    findings.append(
                        Finding.for_line(
                            MISSING_FENCE_LANGUAGE,
                            "Code fence missing language tag",
                            Severity.WARN,
                            path,
                            index + 1,
                        )
                    )
            in_code = not in_code
        return findings

    def _check_headings(self, path: Optional[Path], markdown: str) -> List[Finding]:
        findings: List[Finding] = []
        previous_level = 0
        for heading in iter_headings(markdown):
            if previous_level > 0 and heading.level > previous_level + 1:
                findings.append(
                    Finding.for_line(
                        HEADING_SKIP_LEVEL,
                        f"Heading jumps from level {previous_level} to {heading.level}",
                        Severity.INFO,
                        path,
                        heading.line_index + 1,
                    )
                )
            previous_level = heading.level
        return findings


__all__ = ["HEADING_SKIP_LEVEL", "MISSING_FENCE_LANGUAGE", "MarkdownLinter"]
