from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv
from pydantic import ValidationError

from bookvert.adapters.cbz import Manga, SeriesMetadata
from bookvert.adapters.filesystem import FilesystemScanner, compile_skip_patterns
from bookvert.app import ConversionRequest, convert_books
from bookvert.config import ConfigurationError, configure_logging, get_conversion_config
from bookvert.domain.context import RunContext
from bookvert.domain.errors import (
    BookvertError,
    MissingTitleError,
    NamingCollisionError,
    PolicySyntaxError,
    ResolutionError,
    ResolutionFailedError,
    UnresolvedCataloguesError,
)
from bookvert.domain.resolution import FailedResolution
from bookvert.ui.console import ConsoleOperator

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

PICK_HELP = """\
When there is more than one book for a number, specify how to pick.

Format: `[from=]to` where `from` is a book number or range to match:
`n..m` (exclusive), `n..=m` (inclusive), `n..` (open-ended) or `..` (all).
The `to` target can be `first`, `last`, `most-pages`, `largest`,
`smallest`, a zero-based index, or a regular expression.

Examples:
- `-p most-pages` picks the match with the most pages for all books.
- `-p 3=first` picks the first match for book number 3.
- `-p 3=1` picks the second match for book number 3.
- `-p 1..=5=most-pages` picks the match with the most pages for books 1 through 5.
- `-p fix` picks a match whose name contains `fix`."""


def _non_negative_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("must be non-negative")
    return parsed


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bookvert",
        description="Batch conversion of image directories into CBZ books",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", nargs="+", type=Path, help="Directories to convert")
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output directory to write to (defaults to BOOKVERT_OUTPUT_DIR or .)",
    )
    parser.add_argument(
        "--name",
        type=str,
        help="Base name of the output files; required when converting a series",
    )
    parser.add_argument(
        "-p", "--pick", action="append", default=[], metavar="SELECTOR", help=PICK_HELP
    )
    parser.add_argument("-f", "--force", action="store_true", help="Overwrite existing files")
    parser.add_argument(
        "-n",
        "--noninteractive",
        action="store_true",
        help="Error out instead of asking when a choice is required",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--dry-run", action="store_true", help="Perform a trial run with no changes made"
    )
    parser.add_argument(
        "--skip", action="append", default=[], help="Regular expression for names to skip"
    )
    parser.add_argument(
        "--include",
        action="append",
        default=[],
        help="Only include book numbers matching these ranges",
    )
    parser.add_argument(
        "--number-width",
        type=_non_negative_int,
        default=None,
        help="Zero-fill book numbers in output names to this width",
    )

    info = parser.add_argument_group("ComicInfo.xml metadata")
    info.add_argument("--series", help="Series (defaults to the name)")
    info.add_argument("--author", "--writer", dest="writer", help="Writer / author")
    info.add_argument("--artist", "--penciller", dest="penciller", help="Penciller")
    info.add_argument("--publisher", help="Publisher")
    info.add_argument("--genre", help="Genre (comma-separated)")
    info.add_argument("--language", help='Language ISO code (e.g. "en", "ja")')
    info.add_argument(
        "--manga",
        choices=[manga.value for manga in Manga],
        help="Manga reading direction",
    )
    info.add_argument("--summary", help="Summary / description")

    return parser.parse_args(list(argv))


def _build_request(args: argparse.Namespace, *, number_width: int) -> ConversionRequest:
    context = RunContext.from_arguments(
        title=args.name,
        picks=args.pick,
        interactive=not args.noninteractive,
        include=args.include,
        number_width=number_width,
    )
    metadata = SeriesMetadata(
        series=args.series,
        writer=args.writer,
        penciller=args.penciller,
        publisher=args.publisher,
        genre=args.genre,
        language_iso=args.language,
        manga=Manga(args.manga) if args.manga else None,
        summary=args.summary,
    )
    return ConversionRequest(
        roots=tuple(args.path),
        context=context,
        metadata=metadata,
        force=args.force,
        dry_run=args.dry_run,
    )


def describe_error(error: BookvertError, *, verbose: bool = False) -> list[str]:
    """Human-readable lines for a resolution error, one problem per entry."""

    if isinstance(error, ResolutionFailedError):
        lines: list[str] = []
        for nested in error.errors:
            lines.extend(describe_error(nested, verbose=verbose))
        return lines

    if isinstance(error, UnresolvedCataloguesError):
        lines = []
        for issue in error.issues:
            catalogue = issue.catalogue
            if isinstance(issue, FailedResolution):
                lines.append(f"{catalogue.label}: pick rule `{issue.rule}` failed: {issue.reason}")
            else:
                number = catalogue.number if catalogue.number is not None else 0
                lines.append(
                    f"{catalogue.label}: more than one match, "
                    f"use something like `-p {number}=0` to pick one:"
                )
            for rank, candidate in enumerate(catalogue.members):
                lines.append(
                    f"  {rank}: {candidate.raw_name} "
                    f"({candidate.page_count} pages, {candidate.byte_size} bytes)"
                )
                if verbose:
                    lines.append(f"    [source] {candidate.path}")
        return lines

    if isinstance(error, NamingCollisionError):
        return [
            f"{name}: produced by catalogues {', '.join(labels)}"
            for name, labels in error.collisions.items()
        ]

    if isinstance(error, MissingTitleError):
        return [str(error), *(f"  {name}" for name in error.suggestions)]

    return [str(error)]


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.verbose:
            configure_logging(verbose=True, force=True)
        config = get_conversion_config().with_overrides(
            output_dir=parsed_args.out,
            number_width=parsed_args.number_width,
        )
        request = _build_request(parsed_args, number_width=config.number_width)
        scanner = FilesystemScanner(skip=compile_skip_patterns(parsed_args.skip))
    except ConfigurationError:
        log.exception("Invalid configuration")
        sys.exit(1)
    except (PolicySyntaxError, ValidationError, ValueError):
        log.exception("CLI validation error")
        sys.exit(2)

    operator = None if parsed_args.noninteractive else ConsoleOperator()
    try:
        convert_books(request, scanner=scanner, operator=operator, config=config)
    except ResolutionError as exc:
        for line in describe_error(exc, verbose=parsed_args.verbose):
            log.error(line)  # noqa: TRY400
        log.error("Aborting: %s", exc)  # noqa: TRY400
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during conversion")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
