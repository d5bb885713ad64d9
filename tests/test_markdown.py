"""Tests for wrangler.markdown heading and fence helpers."""

from __future__ import annotations

from wrangler.markdown import ends_in_code, has_icon, iter_headings, parse_heading, strip_icons
from wrangler.models import Heading


def test_iter_headings_yields_levels_titles_and_lines() -> None:
    markdown = "# Title\n\nText\n## Section  \n###### Deep\n"
    headings = list(iter_headings(markdown))
    assert headings == [
        Heading(level=1, title="Title", line_index=0),
        Heading(level=2, title="Section", line_index=3),
        Heading(level=6, title="Deep", line_index=4),
    ]


def test_iter_headings_is_restartable() -> None:
    markdown = "# A\n## B\n"
    assert list(iter_headings(markdown)) == list(iter_headings(markdown))


def test_parse_heading_rejects_seven_hashes_and_indentation() -> None:
    assert parse_heading("####### Too deep") is None
    assert parse_heading("  # Indented") is None
    assert parse_heading("#NoSpace") is None
    assert parse_heading("# ") is None


def test_iter_headings_skips_fenced_code() -> None:
    markdown = "# Title\n\n```bash\n# a shell comment\n```\n\n## After\n"
    titles = [heading.title for heading in iter_headings(markdown)]
    assert titles == ["Title", "After"]


def test_unterminated_fence_hides_remaining_lines() -> None:
    markdown = "# Title\n```\n## Never closed\n"
    assert [heading.title for heading in iter_headings(markdown)] == ["Title"]


def test_has_icon_and_strip_icons() -> None:
    assert has_icon("🎯 Features")
    assert has_icon("⚙️ Setup")
    assert not has_icon("Plain title")
    assert strip_icons("📋 Table of Contents") == "Table of Contents"
    assert strip_icons("⚙️ Setup") == "Setup"
    assert strip_icons("Usage") == "Usage"


def test_ends_in_code() -> None:
    assert ends_in_code("text\n```bash\ncode")
    assert not ends_in_code("text\n```bash\ncode\n```")
    assert not ends_in_code("plain text")
