"""Text transforms applied to README markdown."""

from .badges import BadgeManager
from .lint import MarkdownLinter
from .rewrite import TextRewriter
from .run_tests import RunTestsSection
from .toc import TableOfContentsBuilder
from .visuals import VisualEnhancer

__all__ = [
    "BadgeManager",
    "MarkdownLinter",
    "RunTestsSection",
    "TableOfContentsBuilder",
    "TextRewriter",
    "VisualEnhancer",
]
