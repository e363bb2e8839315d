"""Command-line entry: argument parsing, logging setup and wiring."""

import logging
import sys
from argparse import ArgumentParser

from log_search.client import create_client
from log_search.config import ConfigError, load_config, load_yaml_config
from log_search.executor import SearchExecutor
from log_search.indices import show_index_summary
from log_search.loop import InteractionLoop

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="log-search",
        description="Interactively search a log index by field name and value.",
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--index",
        help="Index to search (fixed for the whole session)",
    )
    parser.add_argument(
        "--host",
        dest="hosts",
        action="append",
        help="Elasticsearch URL; repeat for several nodes",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors",
    )
    parser.add_argument(
        "--no-summary",
        action="store_true",
        help="Skip the index summary printed at startup",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level (stderr)",
    )
    return parser


def run(args, read=input, write=print) -> int:
    """Load config, connect, and run the search loop. Returns an exit code."""
    try:
        config = load_config(args, load_yaml_config(args.config))
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.getLogger().setLevel(config.log_level)
    logger.info("Target index: %s", config.index)

    client = create_client(config)
    try:
        if config.show_summary:
            show_index_summary(client, config.index, write=write, color=config.color)

        loop = InteractionLoop(
            executor=SearchExecutor(client),
            index=config.index,
            read=read,
            write=write,
            color=config.color,
        )
        loop.run()
    finally:
        client.close()
    return 0


def main():
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    parser = build_parser()
    args = parser.parse_args()
    try:
        code = run(args)
    except (KeyboardInterrupt, EOFError):
        code = 0
    sys.exit(code)


if __name__ == "__main__":
    main()
