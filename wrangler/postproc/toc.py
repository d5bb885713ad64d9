"""Automatic table-of-contents generation."""

from __future__ import annotations

import re
from typing import List

from ..markdown import iter_headings, split_lines, strip_icons

TOC_TITLE = "Table of Contents"


class TableOfContentsBuilder:
    """Builds, detects and inserts a table of contents block."""

    _MARKER = re.compile(r"<!--\s*toc\s*-->", re.IGNORECASE)

    def generate(self, markdown: str) -> str:
        """Return a TOC block for every heading, or an empty string."""
        entries: List[str] = []
        for heading in iter_headings(markdown):
            if self._is_toc_title(heading.title):
                continue
            indent = "  " * (heading.level - 1)
            entries.append(f"{indent}- [{heading.title}](#{self.anchor(heading.title)})")

        if not entries:
            return ""

        output = [f"## {TOC_TITLE}", ""]
        output.extend(entries)
        return "\n".join(output) + "\n"

    def has_toc(self, markdown: str) -> bool:
        if self._MARKER.search(markdown):
            return True
        return any(self._is_toc_title(heading.title) for heading in iter_headings(markdown))

    def insert(self, markdown: str, toc: str) -> str:
        """Insert ``toc`` right after the first heading, or prepend it."""
        block = toc.strip("\n")
        if not block:
            return markdown

        for heading in iter_headings(markdown):
            lines = split_lines(markdown)
            before = lines[: heading.line_index + 1]
            after = lines[heading.line_index + 1 :]
            trailer = [""] if after and after[0].strip() else []
            return "\n".join(before + [""] + block.split("\n") + trailer + after)

        return f"{block}\n\n{markdown}"

    @staticmethod
    def anchor(title: str) -> str:
        slug = title.lower()
        slug = re.sub(r"[^a-z0-9\s-]", "", slug)
        slug = re.sub(r"\s+", "-", slug)
        slug = re.sub(r"-+", "-", slug)
        return slug.strip("-")

    @staticmethod
    def _is_toc_title(title: str) -> bool:
        return strip_icons(title).strip().lower() == TOC_TITLE.lower()


__all__ = ["TOC_TITLE", "TableOfContentsBuilder"]
