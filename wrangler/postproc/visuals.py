"""Visual polish for README files: section icons, dividers and callouts."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from ..markdown import has_icon, iter_fence_states, iter_headings, parse_heading, split_lines
from ..models import VisualStats

DIVIDER = "---"

# Ordered keyword -> icon table; the first keyword found in a title wins.
SECTION_ICONS: Sequence[Tuple[str, str]] = (
    # features & capabilities
    ("features", "🎯"),
    ("capabilities", "⚡"),
    ("highlights", "✨"),
    # getting started & installation
    ("quick start", "🚀"),
    ("getting started", "🏁"),
    ("installation", "📦"),
    ("setup", "⚙️"),
    # usage & examples
    ("usage", "💻"),
    ("examples", "📚"),
    ("tutorial", "📖"),
    ("guide", "📝"),
    # configuration
    ("configuration", "⚙️"),
    ("settings", "🔧"),
    ("options", "🎛️"),
    # testing & development
    ("testing", "🧪"),
    ("tests", "✅"),
    ("development", "🛠️"),
    ("building", "🔨"),
    # architecture & design
    ("architecture", "🏗️"),
    ("design", "🎨"),
    ("structure", "📐"),
    # documentation
    ("documentation", "📄"),
    ("api", "🔌"),
    ("reference", "📚"),
    # community
    ("contributing", "🤝"),
    ("community", "👥"),
    ("support", "💬"),
    # operations
    ("deployment", "🚢"),
    ("production", "🏭"),
    ("monitoring", "📊"),
    # security & legal
    ("security", "🔒"),
    ("license", "📄"),
    ("legal", "⚖️"),
    # performance
    ("performance", "⚡"),
    ("optimization", "🚄"),
    # troubleshooting
    ("troubleshooting", "🐛"),
    ("faq", "❓"),
    ("known issues", "⚠️"),
    # history & plans
    ("changelog", "📋"),
    ("roadmap", "🗺️"),
    ("releases", "🎉"),
    # navigation
    ("table of contents", "📋"),
    ("contents", "📑"),
)

CALLOUTS: Sequence[Tuple[str, str]] = (
    ("Important:", "⚠️"),
    ("Note:", "📝"),
    ("Warning:", "⚠️"),
    ("Tip:", "💡"),
    ("Info:", "ℹ️"),
)

_EMPHASIS_PATTERN = re.compile(r"\*\*(Important|Note|Warning|Tip|Info):")

# Below this share of decorated H2+ headings a document is considered plain.
ICON_COVERAGE_THRESHOLD = 0.3


class VisualEnhancer:
    """Adds section icons, dividers between sections and emphasised callouts."""

    def enhance(self, markdown: str) -> str:
        return self.enhance_hierarchy(self.add_icons(markdown))

    def add_icons(self, markdown: str) -> str:
        lines = split_lines(markdown)
        for heading in iter_headings(markdown):
            if has_icon(heading.title):
                continue
            icon = self.icon_for(heading.title)
            if icon is None:
                continue
            hashes = "#" * heading.level
            lines[heading.line_index] = f"{hashes} {icon} {heading.title}"
        return "\n".join(lines)

    def enhance_hierarchy(self, markdown: str) -> str:
        return self._emphasize_callouts(self._add_dividers(markdown))

    def needs_enhancement(self, markdown: str) -> bool:
        subsections = [heading for heading in iter_headings(markdown) if heading.level >= 2]
        if not subsections:
            return False
        with_icons = sum(1 for heading in subsections if has_icon(heading.title))
        return with_icons / len(subsections) < ICON_COVERAGE_THRESHOLD

    def stats(self, markdown: str) -> VisualStats:
        headings = list(iter_headings(markdown))
        dividers = 0
        emphasis = 0
        for _, line, in_code in iter_fence_states(split_lines(markdown)):
            if in_code:
                continue
            if line.strip() == DIVIDER:
                dividers += 1
            if _EMPHASIS_PATTERN.search(line):
                emphasis += 1
        return VisualStats(
            total_headings=len(headings),
            headings_with_icons=sum(1 for heading in headings if has_icon(heading.title)),
            dividers=dividers,
            emphasis_elements=emphasis,
        )

    @staticmethod
    def icon_for(title: str) -> Optional[str]:
        lowered = title.lower()
        for keyword, icon in SECTION_ICONS:
            if keyword in lowered:
                return icon
        return None

    def _add_dividers(self, markdown: str) -> str:
        output: List[str] = []
        for index, line, in_code in iter_fence_states(split_lines(markdown)):
            heading = None if in_code else parse_heading(line, index)
            if heading is not None and heading.level == 2 and index > 0 and self._wants_divider(output):
                if output[-1].strip():
                    output.append("")
                output.extend([DIVIDER, ""])
            output.append(line)
        return "\n".join(output)

    @staticmethod
    def _wants_divider(previous_lines: Sequence[str]) -> bool:
        for line in reversed(previous_lines):
            if not line.strip():
                continue
            if line.strip() == DIVIDER:
                return False
            heading = parse_heading(line)
            return heading is None or heading.level != 1
        return False

    @staticmethod
    def _emphasize_callouts(markdown: str) -> str:
        output: List[str] = []
        for _, line, in_code in iter_fence_states(split_lines(markdown)):
            if not in_code:
                for keyword, icon in CALLOUTS:
                    if line.startswith(keyword):
                        line = f"{icon} **{keyword}**{line[len(keyword):]}"
                        break
            output.append(line)
        return "\n".join(output)


__all__ = ["CALLOUTS", "DIVIDER", "SECTION_ICONS", "VisualEnhancer"]
