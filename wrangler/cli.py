"""CLI entrypoints for wrangler commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import DIFF_STYLES, ConfigError, PolishingConfig, load_config
from .git.patch import PatchBuilder
from .logging import configure_logging
from .orchestrator import Orchestrator
from .postproc.visuals import VisualEnhancer


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wrangler",
        description="Polish repository documentation into a reviewable patch.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        help="Also write log records to FILE.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    polish_parser = subparsers.add_parser(
        "polish",
        help="Polish the README and print the proposed patch.",
    )
    _add_verbose_option(polish_parser, suppress_default=True)
    _add_path_argument(polish_parser)
    polish_parser.add_argument(
        "--write-patch",
        metavar="FILE",
        help="Also write the patch to FILE for review.",
    )
    polish_parser.add_argument(
        "--toc-threshold",
        type=int,
        help="Minimum heading count that triggers a table of contents (0 disables).",
    )
    polish_parser.add_argument(
        "--no-badges",
        dest="badges",
        action="store_false",
        default=None,
        help="Do not prepend badges.",
    )
    polish_parser.add_argument(
        "--runtime-version",
        help="Runtime version shown in the version badge.",
    )
    polish_parser.add_argument(
        "--default-language",
        help="Language tag for code fences whose language cannot be inferred.",
    )
    polish_parser.add_argument(
        "--diff-style",
        choices=DIFF_STYLES,
        help="Patch rendering style.",
    )

    lint_parser = subparsers.add_parser(
        "lint",
        help="Report README findings without proposing changes.",
    )
    _add_verbose_option(lint_parser, suppress_default=True)
    _add_path_argument(lint_parser)

    apply_parser = subparsers.add_parser(
        "apply",
        help="Show how to review and apply a previously written patch.",
    )
    _add_verbose_option(apply_parser, suppress_default=True)
    apply_parser.add_argument("--patch", required=True, help="Patch file to apply.")
    apply_parser.add_argument("--branch", help="Git branch to create for the change.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for wrangler commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "polish":
        _run_polish(parser, args)
    elif args.command == "lint":
        _run_lint(parser, args)
    elif args.command == "apply":
        _run_apply(parser, args)
    elif args.command == "serve":  # pragma: no cover - integration path
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_polish(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    orchestrator = Orchestrator()
    try:
        repo_path = Path(args.path)
        base = load_config(repo_path).polishing if repo_path.is_dir() else PolishingConfig()
        config = base.with_overrides(
            toc_threshold=args.toc_threshold,
            badges_enabled=args.badges,
            runtime_version_label=args.runtime_version,
            default_code_language=args.default_language,
            diff_style=args.diff_style,
        )
        bundle = orchestrator.run_polish(args.path, config)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, ValueError) as exc:
        parser.exit(1, f"wrangler polish failed: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"wrangler polish failed: {exc}\nRun with --verbose for more details.\n")

    if not bundle.has_changes():
        print("No changes needed - documentation looks good")
        return

    print(bundle.summary_line())
    print()
    print(bundle.unified_diff, end="")

    if args.write_patch:
        try:
            written = PatchBuilder().write_patch(bundle.unified_diff, Path(args.write_patch))
        except OSError as exc:
            parser.exit(1, f"Failed to write patch: {exc}\n")
        print()
        print(f"Patch written to {_relativize(written)}")


def _run_lint(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    orchestrator = Orchestrator()
    try:
        snapshot = orchestrator.scanner.scan(args.path)
        readme = snapshot.find_readme()
        if readme is None:
            print("No README.md found")
            return
        text = readme.read_text(encoding="utf-8")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except OSError as exc:
        parser.exit(1, f"wrangler lint failed: {exc}\n")

    findings = orchestrator.linter.lint(readme.relative_to(snapshot.root), text)
    for finding in findings:
        print(f"{finding.file}:{finding.line_start} {finding.severity.value} {finding.id}: {finding.message}")

    stats = VisualEnhancer().stats(text)
    print(
        f"{len(findings)} findings; {stats.headings_with_icons}/{stats.total_headings} "
        f"headings with icons, {stats.dividers} dividers, {stats.emphasis_elements} callouts"
    )


def _run_apply(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    patch = Path(args.patch)
    if not patch.is_file():
        parser.exit(1, f"Patch file not found: {args.patch}\n")

    print("Patches are never applied automatically; review the diff before applying it.")
    print(f"Patch file: {patch}")
    print()
    print("To apply:")
    if args.branch:
        print(f"  git checkout -b {args.branch}")
    print(f"  git apply {patch}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
