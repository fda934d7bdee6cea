"""
Space CJK/English boundaries in Markdown files.

Usage:
    python -m cjk_spacing.cli [paths ...] [options]

Examples:
    # Print the spaced document
    python -m cjk_spacing.cli notes.md

    # Rewrite files in place
    python -m cjk_spacing.cli --in-place docs/*.md

    # CI check: exit 1 when a file would change
    python -m cjk_spacing.cli --check docs/*.md

    # Read stdin, only letters and digits count as English
    cat notes.md | python -m cjk_spacing.cli --after-cjk "" --before-cjk ""

    # Run a rule profile from the YAML profile file
    python -m cjk_spacing.cli --profile tidy notes.md
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from cjk_spacing.config import get_settings
from cjk_spacing.infrastructure.spacing import registry
from cjk_spacing.utils.logging import bind_context, get_logger

logger = get_logger(__name__)

STDIN_PATH = "-"
SPACING_RULE = "space_between_cjk_and_english"

EXIT_OK = 0
EXIT_WOULD_CHANGE = 1
EXIT_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cjk-spacing",
        description="Put one space between CJK text and English letters, numbers or punctuation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Markdown files to process ('-' or nothing reads stdin)",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--in-place",
        action="store_true",
        help="Rewrite files instead of printing the result",
    )
    mode.add_argument(
        "--check",
        action="store_true",
        help="Only report files that would change (exit 1 if any)",
    )

    parser.add_argument(
        "--after-cjk",
        default=None,
        metavar="CHARS",
        help="Extra English-like characters right after CJK text (default: from settings)",
    )
    parser.add_argument(
        "--before-cjk",
        default=None,
        metavar="CHARS",
        help="Extra English-like characters right before CJK text (default: from settings)",
    )
    parser.add_argument(
        "--profile",
        default=None,
        help="Run the rule chain of this profile instead of the spacing rule alone",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="List registered rules and profiles, then exit",
    )
    return parser


def _print_rules() -> None:
    for rule_obj in sorted(registry.list_all_rules(), key=lambda item: item.name):
        print(f"{rule_obj.name} [{rule_obj.category.value}] - {rule_obj.description}")
    profiles = registry.list_profiles()
    if profiles:
        print(f"profiles: {', '.join(profiles)}")


def _option_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if args.after_cjk is not None:
        overrides["english_like_after_cjk"] = args.after_cjk
    if args.before_cjk is not None:
        overrides["english_like_before_cjk"] = args.before_cjk
    return overrides


def _process_stdin(
    args: argparse.Namespace, rule_specs: List[Any], overrides: Dict[str, Any]
) -> int:
    text = sys.stdin.read()
    result = registry.apply_rules(text, rule_specs, **overrides)

    if args.check:
        if result != text:
            print("would reformat: <stdin>", file=sys.stderr)
            return EXIT_WOULD_CHANGE
        return EXIT_OK

    sys.stdout.write(result)
    return EXIT_OK


def _process_file(
    path: Path, args: argparse.Namespace, rule_specs: List[Any], overrides: Dict[str, Any]
) -> bool:
    """Process one file; returns True when its content would change."""
    text = path.read_text(encoding="utf-8")
    result = registry.apply_rules(text, rule_specs, **overrides)
    changed = result != text

    if args.check:
        if changed:
            print(f"would reformat: {path}")
    elif args.in_place:
        if changed:
            path.write_text(result, encoding="utf-8")
            logger.info("cli.file_rewritten", path=str(path))
    else:
        sys.stdout.write(result)

    return changed


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code: 0 on success, 1 when --check finds files that would
        change, 2 on usage, I/O or configuration errors.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
        registry.set_config_path(settings.rules_config_path())

        if args.list_rules:
            _print_rules()
            return EXIT_OK

        if args.profile:
            rule_specs = registry.get_profile_rules(args.profile)
        else:
            rule_specs = [SPACING_RULE]
    except (OSError, ValueError) as exc:
        logger.error("cli.configuration_failed", error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    overrides = _option_overrides(args)
    paths = args.paths or [STDIN_PATH]

    if STDIN_PATH in paths and (args.in_place or len(paths) > 1):
        print("Error: stdin cannot be combined with --in-place or other paths", file=sys.stderr)
        return EXIT_ERROR

    run_logger = bind_context(profile=args.profile or SPACING_RULE)

    try:
        if paths == [STDIN_PATH]:
            return _process_stdin(args, rule_specs, overrides)

        changed_files = 0
        for raw_path in paths:
            if _process_file(Path(raw_path), args, rule_specs, overrides):
                changed_files += 1
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        run_logger.error("cli.processing_failed", error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    run_logger.debug("cli.completed", files=len(paths), changed=changed_files)
    if args.check and changed_files:
        return EXIT_WOULD_CHANGE
    return EXIT_OK
