"""'How to Run Tests' section for READMEs that never explain how to test."""

from __future__ import annotations

from typing import Mapping, Sequence

from ..markdown import FENCE_TOKEN, ends_in_code, iter_headings, split_lines, strip_icons
from ..models import BuildSystem, Heading

SECTION_TITLE = "How to Run Tests"

# Phrases whose presence means the README already covers running tests.
_TEST_PHRASES: Sequence[str] = ("run test", "running test", "test command")

_ANCHOR_SECTIONS: Sequence[str] = ("Installation", "Usage", "Getting Started")

_SNIPPETS: Mapping[BuildSystem, str] = {
    BuildSystem.MAVEN: (
        f"## {SECTION_TITLE}\n\n"
        "```bash\n"
        "# Using Maven wrapper (recommended)\n"
        "./mvnw test\n\n"
        "# Or with installed Maven\n"
        "mvn test\n"
        "```\n"
    ),
    BuildSystem.GRADLE: (
        f"## {SECTION_TITLE}\n\n"
        "```bash\n"
        "# Using Gradle wrapper (recommended)\n"
        "./gradlew test\n\n"
        "# Or with installed Gradle\n"
        "gradle test\n"
        "```\n"
    ),
    BuildSystem.MAKEFILE: (
        f"## {SECTION_TITLE}\n\n"
        "```bash\n"
        "make test\n"
        "```\n"
    ),
    BuildSystem.OTHER: (
        f"## {SECTION_TITLE}\n\n"
        "```bash\n"
        "# Add your test command here\n"
        "```\n"
    ),
}


class RunTestsSection:
    """Builds and places the test instructions section."""

    @staticmethod
    def needs_section(markdown: str) -> bool:
        lowered = markdown.lower()
        return not any(phrase in lowered for phrase in _TEST_PHRASES)

    @staticmethod
    def snippet(build_system: BuildSystem) -> str:
        return _SNIPPETS[build_system]

    def insert(self, markdown: str, build_system: BuildSystem) -> str:
        """Place the section after Installation/Usage/Getting Started, else append it.

        Only headings outside fenced code count as section boundaries, and a
        document that ends inside an open fence gets it closed first.
        """
        section = self.snippet(build_system)
        sections = [heading for heading in iter_headings(markdown) if heading.level == 2]
        for anchor in _ANCHOR_SECTIONS:
            start = next(
                (index for index, heading in enumerate(sections) if _is_anchor(heading, anchor)),
                None,
            )
            if start is None or start + 1 >= len(sections):
                continue
            lines = split_lines(markdown)
            boundary = sections[start + 1].line_index
            head = "\n".join(lines[:boundary]).rstrip("\n")
            tail = "\n".join(lines[boundary:])
            return f"{head}\n\n{section}\n{tail}"

        body = markdown.rstrip()
        if ends_in_code(body):
            body = f"{body}\n{FENCE_TOKEN}"
        return f"{body}\n\n{section}"


def _is_anchor(heading: Heading, anchor: str) -> bool:
    return strip_icons(heading.title).lower().startswith(anchor.lower())


__all__ = ["SECTION_TITLE", "RunTestsSection"]
