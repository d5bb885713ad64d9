"""Core data models shared across wrangler components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


class Severity(str, Enum):
    """Severity levels for polishing findings."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class BuildSystem(str, Enum):
    """Build systems the scanner knows how to recognise."""

    MAVEN = "MAVEN"
    GRADLE = "GRADLE"
    MAKEFILE = "MAKEFILE"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Heading:
    """ATX heading located in a markdown document."""

    level: int
    title: str
    line_index: int


@dataclass(frozen=True)
class Finding:
    """Structured observation about a document, with its location."""

    id: str
    message: str
    severity: Severity = Severity.INFO
    file: Optional[Path] = None
    line_start: int = 0
    line_end: int = 0

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValueError("Finding id cannot be blank")
        if not self.message or not self.message.strip():
            raise ValueError("Finding message cannot be blank")
        if self.line_start < 0 or self.line_end < 0 or self.line_end < self.line_start:
            raise ValueError(f"Invalid line range: {self.line_start}-{self.line_end}")

    @classmethod
    def for_line(
        cls,
        id: str,
        message: str,
        severity: Severity,
        file: Optional[Path],
        line: int,
    ) -> "Finding":
        return cls(id=id, message=message, severity=severity, file=file, line_start=line, line_end=line)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "severity": self.severity.value,
            "file": str(self.file) if self.file is not None else None,
            "line_start": self.line_start,
            "line_end": self.line_end,
        }


@dataclass(frozen=True)
class ChangeFlags:
    """Which improvements a polishing run applied."""

    added_test_section: bool = False
    fixed_code_blocks: bool = False
    normalized_headings: bool = False
    added_toc: bool = False
    added_badges: bool = False
    enhanced_visuals: bool = False

    def count(self) -> int:
        return sum(
            1
            for flag in (
                self.added_test_section,
                self.fixed_code_blocks,
                self.normalized_headings,
                self.added_toc,
                self.added_badges,
                self.enhanced_visuals,
            )
            if flag
        )

    def to_dict(self) -> Dict[str, bool]:
        return {
            "added_test_section": self.added_test_section,
            "fixed_code_blocks": self.fixed_code_blocks,
            "normalized_headings": self.normalized_headings,
            "added_toc": self.added_toc,
            "added_badges": self.added_badges,
            "enhanced_visuals": self.enhanced_visuals,
        }


@dataclass(frozen=True)
class PatchBundle:
    """Reviewable result of a polishing run.

    The bundle is the only output of the pipeline. Nothing is written to the
    target document; callers decide whether to persist or apply the diff.
    """

    unified_diff: str = ""
    findings: Tuple[Finding, ...] = ()
    flags: ChangeFlags = field(default_factory=ChangeFlags)
    path: Optional[Path] = None
    polished: Optional[str] = None

    @classmethod
    def empty(cls) -> "PatchBundle":
        return cls()

    def has_changes(self) -> bool:
        return bool(self.unified_diff.strip())

    def count_by_severity(self, severity: Severity) -> int:
        return sum(1 for finding in self.findings if finding.severity == severity)

    def summary_line(self) -> str:
        return f"{self.flags.count()} improvements, {len(self.findings)} findings"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": str(self.path) if self.path is not None else None,
            "has_changes": self.has_changes(),
            "unified_diff": self.unified_diff,
            "summary": self.summary_line(),
            "flags": self.flags.to_dict(),
            "findings": [finding.to_dict() for finding in self.findings],
        }


@dataclass
class RepoSnapshot:
    """Scanner view of a repository consumed by the polishing pipeline."""

    root: Path
    markdown_files: List[Path] = field(default_factory=list)
    build_system: BuildSystem = BuildSystem.OTHER
    scripts: List[Path] = field(default_factory=list)

    def find_readme(self) -> Optional[Path]:
        """Return the first markdown file named README.md (any case)."""
        for path in self.markdown_files:
            if path.name.lower() == "readme.md":
                return path
        return None


@dataclass(frozen=True)
class VisualStats:
    """Counts of visual elements found in a document."""

    total_headings: int
    headings_with_icons: int
    dividers: int
    emphasis_elements: int

    @property
    def icon_percentage(self) -> float:
        if self.total_headings == 0:
            return 0.0
        return self.headings_with_icons / self.total_headings * 100
