"""Entry point: python -m jelly_snippets"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from jelly_snippets import __version__
from jelly_snippets.app import JellySnippets
from jelly_snippets.constants import LOG_FORMAT


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler if available."""
    level = logging.DEBUG if verbose else logging.INFO

    try:
        from rich.console import Console
        from rich.logging import RichHandler

        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        )
    except ImportError:
        logging.basicConfig(level=level, format=LOG_FORMAT)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="jelly-snippets",
        description="Expand abbreviations ending at the cursor",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"jelly-snippets {__version__}"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path to config file"
    )
    parser.add_argument(
        "--list-snippets", action="store_true", help="Print the compiled snippet table and exit"
    )
    parser.add_argument(
        "--expand", type=str, default=None, metavar="FILE",
        help="Trigger a snippet in FILE ('-' for stdin) and print the result",
    )
    parser.add_argument(
        "--cursor", type=int, default=None, help="Cursor offset for --expand (default: end of text)"
    )
    parser.add_argument(
        "--key", choices=["space", "tab", "enter", "none"], default="none",
        help="Key to simulate for --expand ('none' runs the explicit trigger command)",
    )
    parser.add_argument(
        "--serve", action="store_true", help="Run the HTTP API"
    )
    return parser.parse_args(argv)


def cmd_list_snippets(app: JellySnippets) -> None:
    """Print the compiled snippet table and parse diagnostics."""
    table = app.table
    for lhs, rhs in table.snippets.items():
        marker = f"  (cursor -{rhs.info.cursor_end})" if rhs.info.cursor_end else ""
        print(f"  {lhs!r:<20} -> {rhs.data!r}{marker}")
    for diagnostic in table.diagnostics:
        print(f"  ! record {diagnostic.index}: {diagnostic.reason}: {diagnostic.record!r}")
    print(f"{len(table)} snippet(s), {len(table.diagnostics)} malformed record(s)")


def cmd_expand(app: JellySnippets, path: str, cursor: int | None, key: str) -> int:
    """Run a trigger over a file's text and print the edited text."""
    from jelly_snippets.dispatcher import KeyEvent
    from jelly_snippets.editor import TextDocument, press_key

    text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    document = TextDocument(text, cursor)

    if key == "none":
        snippet = app.trigger(document)
    else:
        snippet = press_key(document, app.dispatcher, KeyEvent(key)).snippet

    sys.stdout.write(document.text)
    logging.getLogger("jelly_snippets").info(
        "%s; cursor at %d",
        f"Expanded {snippet.lhs!r}" if snippet else "No snippet matched",
        document.get_cursor(),
    )
    return 0 if snippet else 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    logger = logging.getLogger("jelly_snippets")

    from jelly_snippets.config import AppConfig

    config_path = Path(args.config) if args.config else None
    config = AppConfig.load(config_path)

    app = JellySnippets(config=config)
    app.setup()

    if args.list_snippets:
        cmd_list_snippets(app)
        return 0

    if args.expand is not None:
        try:
            return cmd_expand(app, args.expand, args.cursor, args.key)
        except OSError as e:
            logger.error("Cannot read %s: %s", args.expand, e)
            return 2

    if args.serve:
        from jelly_snippets.web.api.deps import set_snippet_app
        from jelly_snippets.web.server import run_server

        set_snippet_app(app)
        try:
            run_server(host=config.web.host, port=config.web.port)
        except KeyboardInterrupt:
            logger.info("Keyboard interrupt received")
        return 0

    logger.info("Nothing to do; see --help")
    return 0


if __name__ == "__main__":
    sys.exit(main())
