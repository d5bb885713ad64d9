"""Text rewrites that normalise README formatting."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from ..markdown import FENCE_TOKEN, is_fence, iter_fence_states, parse_heading, split_lines

_SHELL_PREFIXES = (
    "mvn ",
    "./mvnw",
    "gradle",
    "./gradlew",
    "cd ",
    "ls ",
    "npm ",
    "make ",
)

_SOURCE_PREFIXES = (
    "public class",
    "class ",
    "import ",
    "package ",
    "@",
)

_SETEXT_H1 = re.compile(r"^={2,}\s*$")
_SETEXT_H2 = re.compile(r"^-{2,}\s*$")
_LIST_MARKERS = ("- ", "* ", "+ ")
_TRAILING_WHITESPACE = re.compile(r"[ \t]+$", re.MULTILINE)


class TextRewriter:
    """Pure text-to-text rewrites; each one is safe to reapply."""

    def __init__(self, primary_language: str = "java") -> None:
        self.primary_language = primary_language

    def fix_code_fences(
        self,
        markdown: str,
        default_language: str,
        *,
        primary_language: Optional[str] = None,
    ) -> str:
        """Tag opening fences that lack a language, inferring it from the first code line."""
        source_language = primary_language or self.primary_language
        lines = split_lines(markdown)
        output: List[str] = []
        for index, line, in_code in iter_fence_states(lines):
            if not in_code and is_fence(line) and not line.strip()[len(FENCE_TOKEN):].strip():
                indent = line[: len(line) - len(line.lstrip())]
                language = self._infer_language(lines, index + 1, default_language, source_language)
                output.append(f"{indent}{FENCE_TOKEN}{language}")
                continue
            output.append(line)
        return "\n".join(output).rstrip()

    def normalize_headings(self, markdown: str) -> str:
        """Convert setext headings (``===`` / ``---`` underlines) to ATX form."""
        lines = split_lines(markdown)
        code_flags = [in_code for _, _, in_code in iter_fence_states(lines)]
        output: List[str] = []
        index = 0
        while index < len(lines):
            line = lines[index]
            if index + 1 < len(lines) and self._is_setext_title(line, code_flags[index]):
                underline = lines[index + 1]
                if not code_flags[index + 1]:
                    if _SETEXT_H1.match(underline):
                        output.append(f"# {line.strip()}")
                        index += 2
                        continue
                    if _SETEXT_H2.match(underline):
                        output.append(f"## {line.strip()}")
                        index += 2
                        continue
            output.append(line)
            index += 1
        return "\n".join(output)

    @staticmethod
    def remove_trailing_whitespace(markdown: str) -> str:
        return _TRAILING_WHITESPACE.sub("", markdown)

    @staticmethod
    def normalize_line_endings(markdown: str) -> str:
        return markdown.replace("\r\n", "\n")

    @staticmethod
    def _infer_language(
        lines: Sequence[str],
        start: int,
        default_language: str,
        source_language: str,
    ) -> str:
        if start >= len(lines):
            return default_language
        candidate = lines[start].strip()
        if is_fence(candidate):
            return default_language
        if candidate.startswith(_SHELL_PREFIXES):
            return "bash"
        if candidate.startswith(_SOURCE_PREFIXES):
            return source_language
        if candidate.startswith(("{", "---")):
            return "yaml"
        if candidate.startswith("<") and ">" in candidate:
            return "xml"
        return default_language

    @staticmethod
    def _is_setext_title(line: str, in_code: bool) -> bool:
        stripped = line.strip()
        if in_code or not stripped:
            return False
        if is_fence(line) or parse_heading(line) is not None:
            return False
        if stripped.startswith(_LIST_MARKERS):
            return False
        return not (_SETEXT_H1.match(stripped) or _SETEXT_H2.match(stripped))


__all__ = ["TextRewriter"]
