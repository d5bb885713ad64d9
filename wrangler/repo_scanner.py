"""Repository scanning: markdown files, build system and helper scripts."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .config import ConfigError, load_config
from .logging import get_logger
from .models import BuildSystem, RepoSnapshot

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
    ".vscode",
    "target",
    "build",
}

# Marker files checked in order; the first build system with a hit wins.
_BUILD_MARKERS: Sequence[tuple[BuildSystem, Sequence[str]]] = (
    (BuildSystem.MAVEN, ("pom.xml", "mvnw")),
    (BuildSystem.GRADLE, ("build.gradle", "build.gradle.kts", "gradlew")),
    (BuildSystem.MAKEFILE, ("Makefile",)),
)

_ROOT_SCRIPTS = ("mvnw", "gradlew", "test.sh", "build.sh")
_SCRIPT_DIR = "scripts"
_SCRIPT_DEPTH = 2


@dataclass
class IgnoreRule:
    """Represents an ignore rule parsed from .gitignore or .wrangler.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_ignore_rule(pattern: str, negate: bool = False) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        negate=negate,
        has_slash="/" in pattern,
    )


def _parse_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.exists():
        return []

    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        rule = _build_ignore_rule(line, negate=negate)
        if rule is not None:
            rules.append(rule)
    return rules


def _parse_config_excludes(root: Path) -> List[IgnoreRule]:
    try:
        config = load_config(root)
    except ConfigError:
        return []
    rules = [_build_ignore_rule(pattern) for pattern in config.exclude_paths]
    return [rule for rule in rules if rule is not None]


def _load_ignore_rules(root: Path) -> List[IgnoreRule]:
    rules = _parse_gitignore(root / ".gitignore")
    rules.extend(_parse_config_excludes(root))
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


def _iter_files(root: Path, rules: Sequence[IgnoreRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept_dirs = []
        for name in sorted(dirnames):
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _should_ignore(rel_path, True, rules):
                continue
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for filename in sorted(filenames):
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            yield current_dir / filename


def detect_build_system(root: Path) -> BuildSystem:
    for build_system, markers in _BUILD_MARKERS:
        if any((root / marker).exists() for marker in markers):
            return build_system
    return BuildSystem.OTHER


def _is_script(path: Path) -> bool:
    name = path.name.lower()
    return name.startswith(("test", "build")) or name.endswith((".sh", ".bat"))


def _find_scripts(root: Path) -> List[Path]:
    scripts: List[Path] = []
    script_dir = root / _SCRIPT_DIR
    if script_dir.is_dir():
        for dirpath, dirnames, filenames in os.walk(script_dir):
            current_dir = Path(dirpath)
            depth = len(current_dir.relative_to(script_dir).parts)
            if depth + 1 >= _SCRIPT_DEPTH:
                dirnames[:] = []
            else:
                dirnames.sort()
            for filename in sorted(filenames):
                candidate = current_dir / filename
                if _is_script(candidate):
                    scripts.append(candidate)

    for name in _ROOT_SCRIPTS:
        candidate = root / name
        if candidate.exists():
            scripts.append(candidate)
    return scripts


class RepoScanner:
    """Walks a repository to produce the snapshot the polishing pipeline consumes."""

    def __init__(self) -> None:
        self.logger = get_logger("scanner")

    def scan(self, root: str | Path) -> RepoSnapshot:
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Repository path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Repository path is not a directory: {root}")

        rules = _load_ignore_rules(root_path)
        markdown_files = [
            path for path in _iter_files(root_path, rules) if path.suffix.lower() == ".md"
        ]
        markdown_files.sort(key=lambda path: (len(path.relative_to(root_path).parts), path.as_posix()))

        build_system = detect_build_system(root_path)
        scripts = _find_scripts(root_path)

        self.logger.info(
            "Scanned %s: %d markdown files, build system %s",
            root_path,
            len(markdown_files),
            build_system.value,
        )
        return RepoSnapshot(
            root=root_path,
            markdown_files=markdown_files,
            build_system=build_system,
            scripts=scripts,
        )


__all__ = ["RepoScanner", "detect_build_system"]
