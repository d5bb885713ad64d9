"""Tests for visual enhancement of READMEs."""

from __future__ import annotations

from wrangler.postproc.visuals import VisualEnhancer


def test_add_icons_decorates_known_sections() -> None:
    markdown = "# Project\n\n## Features\n\n## Installation\n\n### Running the tests\n"
    result = VisualEnhancer().add_icons(markdown)
    assert result == (
        "# Project\n\n## 🎯 Features\n\n## 📦 Installation\n\n### ✅ Running the tests\n"
    )


def test_add_icons_keeps_existing_icon() -> None:
    markdown = "## 🚀 Quick Start\n"
    assert VisualEnhancer().add_icons(markdown) == markdown


def test_add_icons_ignores_code_blocks() -> None:
    markdown = "```bash\n## usage inside code\n```\n"
    assert VisualEnhancer().add_icons(markdown) == markdown


def test_icon_for_uses_first_matching_keyword() -> None:
    assert VisualEnhancer.icon_for("Configuration Options") == "⚙️"
    assert VisualEnhancer.icon_for("Quick Start Guide") == "🚀"
    assert VisualEnhancer.icon_for("Something else") is None


def test_dividers_between_h2_sections() -> None:
    markdown = "# T\n\n## A\n\ntext\n## B\n"
    result = VisualEnhancer().enhance_hierarchy(markdown)
    assert result == "# T\n\n## A\n\ntext\n\n---\n\n## B\n"


def test_dividers_not_duplicated() -> None:
    markdown = "# T\n\n## A\n\n---\n\n## B\n"
    assert VisualEnhancer().enhance_hierarchy(markdown) == markdown


def test_callouts_are_emphasised_outside_code() -> None:
    markdown = "Note: read this.\nTip: try it.\n```\nWarning: literal\n```\n"
    result = VisualEnhancer().enhance_hierarchy(markdown)
    assert result == (
        "📝 **Note:** read this.\n💡 **Tip:** try it.\n```\nWarning: literal\n```\n"
    )


def test_needs_enhancement() -> None:
    enhancer = VisualEnhancer()
    assert enhancer.needs_enhancement("# T\n## Usage\n## Setup\n")
    assert not enhancer.needs_enhancement("# T\n## 💻 Usage\n## ⚙️ Setup\n")
    assert not enhancer.needs_enhancement("# Only a title\n")


def test_enhance_is_idempotent() -> None:
    enhancer = VisualEnhancer()
    once = enhancer.enhance("# T\n\n## Usage\n\nNote: hi\n\n## License\n")
    assert enhancer.enhance(once) == once


def test_stats() -> None:
    markdown = "# T\n## 💻 Usage\n\n---\n\n## Setup\n⚠️ **Warning:** careful\n"
    stats = VisualEnhancer().stats(markdown)
    assert stats.total_headings == 3
    assert stats.headings_with_icons == 1
    assert stats.dividers == 1
    assert stats.emphasis_elements == 1
    assert round(stats.icon_percentage, 1) == 33.3
