"""Tests for wrangler.models."""

from __future__ import annotations

from pathlib import Path

import pytest

from wrangler.models import ChangeFlags, Finding, PatchBundle, RepoSnapshot, Severity


def test_finding_rejects_blank_id_and_message() -> None:
    with pytest.raises(ValueError):
        Finding(id=" ", message="something")
    with pytest.raises(ValueError):
        Finding(id="x", message="")


def test_finding_rejects_inverted_range() -> None:
    with pytest.raises(ValueError):
        Finding(id="x", message="m", line_start=5, line_end=2)
    with pytest.raises(ValueError):
        Finding(id="x", message="m", line_start=-1, line_end=2)


def test_finding_for_line_and_to_dict() -> None:
    finding = Finding.for_line("lint", "msg", Severity.WARN, Path("README.md"), 7)
    assert finding.line_start == finding.line_end == 7
    assert finding.to_dict() == {
        "id": "lint",
        "message": "msg",
        "severity": "WARN",
        "file": "README.md",
        "line_start": 7,
        "line_end": 7,
    }


def test_empty_bundle() -> None:
    bundle = PatchBundle.empty()
    assert bundle.unified_diff == ""
    assert bundle.findings == ()
    assert bundle.flags.count() == 0
    assert not bundle.has_changes()
    assert bundle.summary_line() == "0 improvements, 0 findings"


def test_bundle_counts_and_summary() -> None:
    findings = (
        Finding(id="a", message="m", severity=Severity.WARN),
        Finding(id="b", message="m", severity=Severity.INFO),
        Finding(id="c", message="m", severity=Severity.WARN),
    )
    bundle = PatchBundle(
        unified_diff="--- a\n+++ b\n",
        findings=findings,
        flags=ChangeFlags(added_toc=True, fixed_code_blocks=True),
    )
    assert bundle.has_changes()
    assert bundle.count_by_severity(Severity.WARN) == 2
    assert bundle.count_by_severity(Severity.ERROR) == 0
    assert bundle.summary_line() == "2 improvements, 3 findings"

    payload = bundle.to_dict()
    assert payload["has_changes"] is True
    assert payload["flags"]["added_toc"] is True
    assert payload["flags"]["added_badges"] is False
    assert [entry["id"] for entry in payload["findings"]] == ["a", "b", "c"]


def test_whitespace_only_diff_is_not_a_change() -> None:
    assert not PatchBundle(unified_diff="  \n").has_changes()


def test_find_readme_is_case_insensitive(tmp_path: Path) -> None:
    snapshot = RepoSnapshot(
        root=tmp_path,
        markdown_files=[tmp_path / "CHANGELOG.md", tmp_path / "readme.MD"],
    )
    assert snapshot.find_readme() == tmp_path / "readme.MD"
    assert RepoSnapshot(root=tmp_path).find_readme() is None
