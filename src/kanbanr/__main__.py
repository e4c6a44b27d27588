"""CLI entry point for kanbanr."""

import argparse
from pathlib import Path

from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="kanbanr",
        description="Replay kanban board operations and print the resulting board",
    )
    parser.add_argument(
        "--board",
        type=Path,
        default=None,
        help="YAML or JSON file with the initial board (default: empty board)",
    )
    parser.add_argument(
        "--script",
        type=Path,
        default=None,
        help="YAML file with a list of operations to replay",
    )
    parser.add_argument(
        "--element-id",
        default=None,
        help="Host element ID messages are addressed to",
    )
    parser.add_argument(
        "--host-url",
        default=None,
        help="Send messages to this host endpoint over HTTP (default: record only)",
    )
    parser.add_argument(
        "--options",
        type=Path,
        default=None,
        help="YAML file with cosmetic board options",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    # Build settings from CLI args
    settings_kwargs: dict = {}
    if args.element_id:
        settings_kwargs["element_id"] = args.element_id
    if args.host_url:
        settings_kwargs["host_url"] = args.host_url
    if args.options:
        settings_kwargs["options_file"] = args.options
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)

    setup_logging(settings.verbose, settings.log_file)

    from .cli.replay import run_replay

    exit_code = run_replay(
        args.board,
        args.script,
        element_id=settings.element_id,
        host_url=settings.host_url,
        options_file=settings.options_file,
    )
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
