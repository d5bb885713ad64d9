"""Tests for badge generation and license detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from wrangler.models import BuildSystem
from wrangler.postproc.badges import BadgeManager


def test_generate_maven_badges_with_license(tmp_path: Path) -> None:
    (tmp_path / "LICENSE").write_text("Apache License\nVersion 2.0\n", encoding="utf-8")

    badges = BadgeManager().generate("demo", BuildSystem.MAVEN, "21", tmp_path)

    assert badges == (
        "![Maven Build](https://img.shields.io/badge/build-maven-blue) "
        "![JDK 21](https://img.shields.io/badge/JDK-21-orange) "
        "![License](https://img.shields.io/badge/license-Apache--2.0-green)\n\n"
    )


def test_generate_gradle_build_badge() -> None:
    badges = BadgeManager().generate("demo", BuildSystem.GRADLE, None, None)
    assert badges == "![Gradle Build](https://img.shields.io/badge/build-gradle-blue)\n\n"


def test_generate_nothing_returns_empty(tmp_path: Path) -> None:
    assert BadgeManager().generate("demo", BuildSystem.OTHER, "", tmp_path) == ""
    assert BadgeManager().generate("demo", BuildSystem.MAKEFILE, "   ", None) == ""


def test_generate_uses_runtime_name() -> None:
    badges = BadgeManager().generate(
        "demo", BuildSystem.OTHER, "3.12", None, runtime_name="Python"
    )
    assert badges == "![Python 3.12](https://img.shields.io/badge/Python-3.12-orange)\n\n"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("MIT License\n\nCopyright (c) 2024", "MIT"),
        ("Apache License, Version 2.0", "Apache-2.0"),
        ("GNU GENERAL PUBLIC LICENSE\nVersion 3, 29 June 2007", "GPL-3.0"),
        ("GNU Lesser General Public License", "LGPL"),
        ("BSD 3-Clause License", "BSD"),
        ("All rights reserved.", "Custom"),
    ],
)
def test_detect_license(tmp_path: Path, text: str, expected: str) -> None:
    (tmp_path / "LICENSE").write_text(text, encoding="utf-8")
    assert BadgeManager.detect_license(tmp_path) == expected


def test_detect_license_checks_alternate_names(tmp_path: Path) -> None:
    (tmp_path / "LICENSE.md").write_text("MIT License", encoding="utf-8")
    assert BadgeManager.detect_license(tmp_path) == "MIT"


def test_detect_license_without_file(tmp_path: Path) -> None:
    assert BadgeManager.detect_license(tmp_path) is None
    assert BadgeManager.detect_license(None) is None


def test_has_badges() -> None:
    assert BadgeManager.has_badges("![x](https://img.shields.io/badge/a-b-c)")
    assert not BadgeManager.has_badges("![diagram](docs/diagram.png)")
