"""Badge generation for README headers."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import BuildSystem

LICENSE_FILENAMES: Sequence[str] = ("LICENSE", "LICENSE.txt", "LICENSE.md", "COPYING")

_SHIELDS_BASE = "https://img.shields.io/badge"

_BUILD_BADGES: Mapping[BuildSystem, Optional[Tuple[str, str]]] = {
    BuildSystem.MAVEN: ("Maven Build", "maven"),
    BuildSystem.GRADLE: ("Gradle Build", "gradle"),
    BuildSystem.MAKEFILE: None,
    BuildSystem.OTHER: None,
}

# First match wins, so more specific phrases must precede looser ones.
_LICENSE_PATTERNS: Sequence[Tuple[re.Pattern[str], str]] = (
    (re.compile(r"apache license"), "Apache-2.0"),
    (re.compile(r"mit license"), "MIT"),
    (re.compile(r"gnu general public license\s*,?\s*(?:v|version\s*)3"), "GPL-3.0"),
    (re.compile(r"gnu lesser general public license"), "LGPL"),
    (re.compile(r"bsd"), "BSD"),
)


class BadgeManager:
    """Builds the one-line shields.io badge block prepended to a README."""

    def __init__(self) -> None:
        self.logger = get_logger("badges")

    def generate(
        self,
        repo_name: str,
        build_system: BuildSystem,
        version_label: Optional[str],
        repo_path: Optional[Path],
        *,
        runtime_name: str = "JDK",
    ) -> str:
        """Return the badge line followed by a blank line, or an empty string."""
        badges: List[str] = []

        build_badge = _BUILD_BADGES[build_system]
        if build_badge is not None:
            alt, tool = build_badge
            badges.append(f"![{alt}]({_shield('build', tool, 'blue')})")

        if version_label and version_label.strip():
            version = version_label.strip()
            badges.append(
                f"![{runtime_name} {version}]({_shield(runtime_name, version, 'orange')})"
            )

        license_name = self.detect_license(repo_path)
        if license_name is not None:
            badges.append(f"![License]({_shield('license', license_name, 'green')})")

        if not badges:
            self.logger.debug("No badges produced for %s", repo_name)
            return ""

        self.logger.debug("Generated %d badges for %s", len(badges), repo_name)
        return " ".join(badges) + "\n\n"

    @staticmethod
    def has_badges(markdown: str) -> bool:
        return "![" in markdown and "shields.io" in markdown

    @staticmethod
    def detect_license(repo_path: Optional[Path]) -> Optional[str]:
        """Return a short license name, ``Custom`` when unrecognised, or None without a file."""
        if repo_path is None:
            return None

        license_file = next(
            (repo_path / name for name in LICENSE_FILENAMES if (repo_path / name).is_file()),
            None,
        )
        if license_file is None:
            return None

        content = license_file.read_text(encoding="utf-8", errors="replace").lower()
        for pattern, name in _LICENSE_PATTERNS:
            if pattern.search(content):
                return name
        return "Custom"


def _shield(label: str, message: str, color: str) -> str:
    return f"{_SHIELDS_BASE}/{_escape(label)}-{_escape(message)}-{color}"


def _escape(value: str) -> str:
    # shields.io static badges treat '-' and '_' as separators.
    return value.replace("-", "--").replace("_", "__").replace(" ", "_")


__all__ = ["LICENSE_FILENAMES", "BadgeManager"]
