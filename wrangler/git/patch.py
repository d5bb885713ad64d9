"""Unified diff construction for reviewable README patches."""

from __future__ import annotations

import difflib
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..logging import get_logger

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S %z"
CONTEXT_LINES = 3


class PatchBuilder:
    """Turns an original/modified pair into a patch a human can review.

    The default ``minimal`` style lists removed lines, then added lines, then
    leading context in a single hunk. It is a set difference, not a longest
    common subsequence, so reordered or duplicated lines render approximately.
    The ``difflib`` style produces a standard multi-hunk unified diff.
    """

    def __init__(
        self,
        style: str = "minimal",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if style not in {"minimal", "difflib"}:
            raise ValueError(f"Unknown diff style: {style}")
        self.style = style
        self._clock = clock or self._default_clock
        self.logger = get_logger("patch")

    def create_unified_diff(self, path: Optional[Path | str], original: str, modified: str) -> str:
        if original == modified:
            return ""

        file_name = str(path) if path is not None else "unknown"
        timestamp = self._clock().strftime(TIMESTAMP_FORMAT)
        original_lines = original.split("\n")
        modified_lines = modified.split("\n")

        if self.style == "difflib":
            return self._difflib_diff(file_name, timestamp, original_lines, modified_lines)

        output = [
            f"--- a/{file_name}\t{timestamp}",
            f"+++ b/{file_name}\t{timestamp}",
            f"@@ -1,{len(original_lines)} +1,{len(modified_lines)} @@",
        ]
        output.extend(self._minimal_body(original_lines, modified_lines))
        return "\n".join(output) + "\n"

    def write_patch(self, patch: str, output_path: Path) -> Path:
        """Persist ``patch`` to ``output_path``; I/O errors propagate."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(patch, encoding="utf-8")
        self.logger.info("Patch written to %s", output_path)
        return output_path

    @staticmethod
    def _minimal_body(original: Sequence[str], modified: Sequence[str]) -> List[str]:
        original_set = set(original)
        modified_set = set(modified)
        body = [f"-{line}" for line in original if line not in modified_set]
        body.extend(f"+{line}" for line in modified if line not in original_set)
        for index in range(min(CONTEXT_LINES, len(original), len(modified))):
            if original[index] == modified[index]:
                body.append(f" {original[index]}")
        return body

    @staticmethod
    def _difflib_diff(
        file_name: str,
        timestamp: str,
        original: Sequence[str],
        modified: Sequence[str],
    ) -> str:
        diff = difflib.unified_diff(
            list(original),
            list(modified),
            fromfile=f"a/{file_name}",
            tofile=f"b/{file_name}",
            fromfiledate=timestamp,
            tofiledate=timestamp,
            n=CONTEXT_LINES,
            lineterm="",
        )
        return "\n".join(diff) + "\n"

    @staticmethod
    def _default_clock() -> datetime:
        return datetime.now().astimezone()


__all__ = ["PatchBuilder"]
