"""Pipeline orchestration for README polishing runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .config import ConfigError, PolishingConfig, load_config
from .git.patch import PatchBuilder
from .logging import get_logger
from .models import BuildSystem, ChangeFlags, Finding, PatchBundle, RepoSnapshot, Severity
from .postproc.badges import BadgeManager
from .postproc.lint import MarkdownLinter
from .postproc.rewrite import TextRewriter
from .postproc.run_tests import RunTestsSection
from .postproc.toc import TableOfContentsBuilder
from .postproc.visuals import VisualEnhancer
from .repo_scanner import RepoScanner

ADDED_TEST_SECTION = "added-test-section"
ADDED_TOC = "added-toc"
ENHANCED_VISUALS = "enhanced-visuals"


@dataclass
class _RunState:
    """Mutable bookkeeping for a single document pass."""

    text: str
    findings: List[Finding] = field(default_factory=list)
    fixed_code_blocks: bool = False
    normalized_headings: bool = False
    added_test_section: bool = False
    added_toc: bool = False
    added_badges: bool = False
    enhanced_visuals: bool = False


class Orchestrator:
    """Runs the fixed polishing pipeline over one README and returns a patch bundle."""

    def __init__(
        self,
        scanner: RepoScanner | None = None,
        linter: MarkdownLinter | None = None,
        rewriter: TextRewriter | None = None,
        toc_builder: TableOfContentsBuilder | None = None,
        badge_manager: BadgeManager | None = None,
        visual_enhancer: VisualEnhancer | None = None,
        test_section: RunTestsSection | None = None,
        patch_builder: PatchBuilder | None = None,
    ) -> None:
        self.scanner = scanner or RepoScanner()
        self.linter = linter or MarkdownLinter()
        self.rewriter = rewriter or TextRewriter()
        self.toc_builder = toc_builder or TableOfContentsBuilder()
        self.badge_manager = badge_manager or BadgeManager()
        self.visual_enhancer = visual_enhancer or VisualEnhancer()
        self.test_section = test_section or RunTestsSection()
        self.patch_builder = patch_builder
        self.logger = get_logger("orchestrator")

    def run_polish(self, path: str | Path, config: PolishingConfig | None = None) -> PatchBundle:
        """Scan the repository at ``path`` and polish its README."""
        repo_path = Path(path).expanduser().resolve()
        self.logger.info("Starting polish run for %s", repo_path)
        snapshot = self.scanner.scan(repo_path)
        effective = config or self._load_config(snapshot.root)
        return self.polish_snapshot(snapshot, effective)

    def polish_snapshot(self, snapshot: RepoSnapshot, config: PolishingConfig) -> PatchBundle:
        readme = snapshot.find_readme()
        if readme is None:
            self.logger.warning("No README.md found in %s", snapshot.root)
            return PatchBundle.empty()

        original = readme.read_text(encoding="utf-8")
        return self.polish_document(
            self._display_path(readme, snapshot.root),
            original,
            build_system=snapshot.build_system,
            repo_root=snapshot.root,
            config=config,
        )

    def run_lint(self, path: str | Path) -> List[Finding]:
        """Return linter findings for the README of the repository at ``path``."""
        snapshot = self.scanner.scan(path)
        readme = snapshot.find_readme()
        if readme is None:
            self.logger.warning("No README.md found in %s", snapshot.root)
            return []
        return self.linter.lint(
            self._display_path(readme, snapshot.root), readme.read_text(encoding="utf-8")
        )

    def polish_document(
        self,
        path: Optional[Path],
        original: str,
        *,
        build_system: BuildSystem = BuildSystem.OTHER,
        repo_root: Optional[Path] = None,
        config: PolishingConfig | None = None,
    ) -> PatchBundle:
        """Apply every polishing step to ``original`` and build the patch bundle."""
        config = config or PolishingConfig()
        state = _RunState(text=original)
        state.findings.extend(self.linter.lint(path, original))
        self.logger.debug("Linter reported %d findings for %s", len(state.findings), path)

        self._rewrite(state, config)
        self._maybe_add_test_section(state, build_system, path)
        self._maybe_add_toc(state, config, path)
        self._maybe_add_badges(state, config, build_system, repo_root)
        self._maybe_enhance_visuals(state, path)

        polished = self._restore_line_ending(state.text, original)
        patch_builder = self.patch_builder or PatchBuilder(style=config.diff_style)
        diff = patch_builder.create_unified_diff(path, original, polished)

        bundle = PatchBundle(
            unified_diff=diff,
            findings=tuple(state.findings),
            flags=ChangeFlags(
                added_test_section=state.added_test_section,
                fixed_code_blocks=state.fixed_code_blocks,
                normalized_headings=state.normalized_headings,
                added_toc=state.added_toc,
                added_badges=state.added_badges,
                enhanced_visuals=state.enhanced_visuals,
            ),
            path=path,
            polished=polished,
        )
        self.logger.info("Polishing complete for %s: %s", path, bundle.summary_line())
        return bundle

    def _rewrite(self, state: _RunState, config: PolishingConfig) -> None:
        fenced = self.rewriter.fix_code_fences(
            state.text,
            config.default_code_language,
            primary_language=config.primary_language,
        )
        state.fixed_code_blocks = fenced != state.text.rstrip()

        normalized = self.rewriter.normalize_headings(fenced)
        state.normalized_headings = normalized != fenced

        state.text = self.rewriter.remove_trailing_whitespace(normalized)

    def _maybe_add_test_section(
        self, state: _RunState, build_system: BuildSystem, path: Optional[Path]
    ) -> None:
        if build_system == BuildSystem.OTHER or not self.test_section.needs_section(state.text):
            return
        updated = self.test_section.insert(state.text, build_system)
        if updated == state.text:
            return
        self.logger.debug("Adding test section for %s build", build_system.value)
        state.text = updated
        state.added_test_section = True
        state.findings.append(
            Finding.for_line(
                ADDED_TEST_SECTION, "Added 'How to Run Tests' section", Severity.INFO, path, 0
            )
        )

    def _maybe_add_toc(self, state: _RunState, config: PolishingConfig, path: Optional[Path]) -> None:
        if config.toc_threshold <= 0:
            return
        heading_count = self.linter.count_headings(state.text)
        if heading_count < config.toc_threshold or self.toc_builder.has_toc(state.text):
            return
        toc = self.toc_builder.generate(state.text)
        updated = self.toc_builder.insert(state.text, toc)
        if updated == state.text:
            return
        self.logger.debug("Inserting table of contents (%d headings)", heading_count)
        state.text = updated
        state.added_toc = True
        state.findings.append(
            Finding.for_line(ADDED_TOC, "Added table of contents", Severity.INFO, path, 0)
        )

    def _maybe_add_badges(
        self,
        state: _RunState,
        config: PolishingConfig,
        build_system: BuildSystem,
        repo_root: Optional[Path],
    ) -> None:
        if not config.badges_enabled or self.badge_manager.has_badges(state.text):
            return
        repo_name = repo_root.name if repo_root is not None else "repository"
        badges = self.badge_manager.generate(
            repo_name,
            build_system,
            config.runtime_version_label,
            repo_root,
            runtime_name=config.runtime_name,
        )
        if not badges:
            return
        state.text = badges + state.text
        state.added_badges = True

    def _maybe_enhance_visuals(self, state: _RunState, path: Optional[Path]) -> None:
        if not self.visual_enhancer.needs_enhancement(state.text):
            return
        updated = self.visual_enhancer.enhance(state.text)
        if updated == state.text:
            self.logger.debug("Visual enhancement produced no changes")
            return
        state.text = updated
        state.enhanced_visuals = True
        state.findings.append(
            Finding.for_line(
                ENHANCED_VISUALS,
                "Added icons and visual formatting to headings",
                Severity.INFO,
                path,
                0,
            )
        )

    @staticmethod
    def _restore_line_ending(text: str, original: str) -> str:
        # Rewrites trim the document end; keep the original's final newline.
        stripped = text.rstrip()
        return f"{stripped}\n" if original.endswith("\n") else stripped

    @staticmethod
    def _display_path(readme: Path, root: Path) -> Path:
        try:
            return readme.relative_to(root)
        except ValueError:
            return readme

    def _load_config(self, repo_path: Path) -> PolishingConfig:
        try:
            return load_config(repo_path).polishing
        except ConfigError:
            self.logger.warning("Invalid .wrangler.yml in %s", repo_path)
            raise


__all__ = [
    "ADDED_TEST_SECTION",
    "ADDED_TOC",
    "ENHANCED_VISUALS",
    "Orchestrator",
]
