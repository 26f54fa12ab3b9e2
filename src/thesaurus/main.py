"""Thesaurus CLI entry point."""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv
from rich.console import Console

from adapter.external.oxford_thesaurus import OxfordThesaurusAdapter
from domain.model.errors import (
    AuthenticationError,
    ConfigError,
    DecodeError,
    NotFoundError,
    TransportError,
    UpstreamError,
)
from port.thesaurus import ThesaurusPort
from services.thesaurus_service import ThesaurusService
from thesaurus.config import DEFAULT_CONFIG_PATH, load_settings
from utils.logging import setup_structured_logging
from utils.rendering import Markup, render_results

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thesaurus",
        description="Look up synonyms and antonyms in the Oxford Dictionaries thesaurus.",
    )
    parser.add_argument("word", help="The word to look up.")
    parser.add_argument(
        "-c", "--config", default=DEFAULT_CONFIG_PATH,
        help=f"Path to the JSON config file (default: {DEFAULT_CONFIG_PATH}).",
    )
    parser.add_argument("--disable-color", action="store_true", help="Disable color output.")
    parser.add_argument("--category", help="Only show one lexical category (noun, verb, ...).")
    parser.add_argument(
        "--abbreviate", action="store_true",
        help="Abbreviate category headers (n., v., adj.).",
    )
    parser.add_argument(
        "--exclude-tag", action="append", default=[], metavar="TAG",
        help="Hide a region/domain/register tag. May be repeated.",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: $LOG_LEVEL or WARNING).")
    return parser


def env_disables_color(environ=None) -> bool:
    """NO_COLOR (https://no-color.org) or a dumb terminal turns color off."""
    environ = os.environ if environ is None else environ
    if "NO_COLOR" in environ:
        return True
    return environ.get("TERM", "").lower() == "dumb"


def run(
    args: argparse.Namespace,
    source: ThesaurusPort,
    console: Console,
    err_console: Console,
    markup: Markup,
) -> int:
    """Look the word up and print it. Returns the process exit code."""
    service = ThesaurusService(source)

    try:
        result_set = service.lookup(args.word)
    except NotFoundError as e:
        err_console.print(f"No results for '{e.word}'", markup=False)
        return EXIT_FAILURE
    except AuthenticationError:
        err_console.print(
            "Authentication failed: check your Oxford Dictionaries app id and app key.",
            markup=False,
        )
        return EXIT_FAILURE
    except (DecodeError, UpstreamError, TransportError) as e:
        logger.error("Error retrieving thesaurus entry", extra={"word": args.word, "error": str(e)})
        err_console.print(f"Error retrieving thesaurus entry: {e}", markup=False)
        return EXIT_FAILURE

    lines = render_results(
        result_set,
        markup,
        category=args.category,
        abbreviate=args.abbreviate,
        exclude_tags=args.exclude_tag,
    )
    if not lines:
        if args.category:
            err_console.print(f"No {args.category} entries for '{args.word}'", markup=False)
        else:
            err_console.print(f"No results for '{args.word.strip()}'", markup=False)
        return EXIT_FAILURE

    for line in lines:
        console.print(line, markup=markup.enabled)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the thesaurus CLI."""
    load_dotenv(override=False)
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.word.strip():
        parser.error("No word provided")

    setup_structured_logging(args.log_level or os.getenv("LOG_LEVEL", "WARNING"))

    color = not (args.disable_color or env_disables_color())
    console = Console(no_color=not color, highlight=False, soft_wrap=True)
    err_console = Console(stderr=True, no_color=not color, highlight=False, soft_wrap=True)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        err_console.print(str(e), markup=False)
        return EXIT_FAILURE

    logger.debug("Settings loaded", extra=settings.safe_log_values())

    source = OxfordThesaurusAdapter(
        app_id=settings.app_id,
        app_key=settings.app_key,
        base_url=settings.base_url,
        timeout=settings.timeout_seconds,
    )
    return run(args, source, console, err_console, Markup(enabled=color))


if __name__ == "__main__":
    sys.exit(main())
