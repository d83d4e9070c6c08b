"""Command-line interface for article-grok."""

import argparse
import logging
import sys
from pathlib import Path

from article_grok.extractors import ArticleGrokker
from schemas.article import DEFAULT_AUTHOR, DEFAULT_TITLE


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
    )


def extract(args: argparse.Namespace) -> int:
    """Execute the extract command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    config = {
        "default_title": args.default_title,
        "default_author": args.default_author,
    }
    grokker = ArticleGrokker(config)
    manifest = grokker.grok_many(args.files, keep_going=args.keep_going)

    output = manifest.model_dump_json(indent=2)
    if args.output is None:
        sys.stdout.write(output + "\n")
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(output + "\n")
        logger.info(f"Wrote manifest to {args.output}")

    return 0 if manifest.status == "complete" else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="article-grok",
        description="Extract article metadata from opted-in XHTML blog articles",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract articles from XHTML files into a JSON manifest",
        description="Scan each file for an article marked with data-sblg-article and write the extracted title, author, date, tags, body and aside as a JSON manifest.",
    )
    extract_parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="XHTML article files to scan",
    )
    extract_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the manifest to this file instead of standard output",
    )
    extract_parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Continue with the remaining files after a failure",
    )
    extract_parser.add_argument(
        "--default-title",
        type=str,
        default=DEFAULT_TITLE,
        help=f"Title for articles without a heading (default: {DEFAULT_TITLE})",
    )
    extract_parser.add_argument(
        "--default-author",
        type=str,
        default=DEFAULT_AUTHOR,
        help=f"Author for articles without an address (default: {DEFAULT_AUTHOR})",
    )
    extract_parser.set_defaults(func=extract)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
