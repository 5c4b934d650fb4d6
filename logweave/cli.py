"""Command line entry point: collect, merge, filter and print logs."""

import argparse
import sys
from typing import List, Optional

from rich.console import Console

from logweave.config import (
    load_policy,
    load_scheme,
    load_settings,
    load_sources,
    load_transport
)
from logweave.core.collector import CommandSource, collect
from logweave.core.errors import ConfigError, error_handler
from logweave.core.logging import setup_logging
from logweave.core.presentation import print_records, print_summary
from logweave.core.scheme import compile_scheme
from logweave.models import UnmatchedPolicy

EXIT_OK = 0
EXIT_ALL_SOURCES_FAILED = 1
EXIT_CONFIG_ERROR = 2

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logweave",
        description="Merge logs from several hosts into one chronological stream"
    )
    parser.add_argument("--settings", action="append", metavar="FILE",
                        help="Settings file to load (repeatable, default: settings.yaml)")
    parser.add_argument("--source", action="append", metavar="NAME",
                        help="Only collect the named source (repeatable)")
    parser.add_argument("-i", "--include", action="append", default=[], metavar="WORD",
                        help="Keep only entries whose message contains WORD (repeatable)")
    parser.add_argument("-e", "--exclude", action="append", default=[], metavar="WORD",
                        help="Drop entries whose message contains WORD (repeatable)")
    parser.add_argument("--unmatched", choices=[p.value for p in UnmatchedPolicy],
                        help="Handling of entries that do not match the scheme")
    parser.add_argument("--summary", action="store_true",
                        help="Print per-source results after the records")
    parser.add_argument("--log-level", help="Logging level (overrides settings)")
    return parser

@error_handler(reraise=True, exclude=(KeyboardInterrupt, SystemExit))
def run(args: argparse.Namespace, console: Console) -> int:
    """Run one collection. Returns the process exit status."""
    # Settings errors are logged before the settings can configure logging
    setup_logging(args.log_level or "INFO")
    settings = load_settings(args.settings)
    setup_logging(
        args.log_level or settings.get("logging.level"),
        json_logs=settings.get("logging.json_logs"),
        enable_debug=settings.get("logging.enable_debug")
    )

    compiled = compile_scheme(load_scheme(settings))
    transport = load_transport(settings)
    policy = UnmatchedPolicy(args.unmatched) if args.unmatched else load_policy(settings)

    configs = load_sources(settings)
    if args.source:
        unknown = sorted(set(args.source) - {config.name for config in configs})
        if unknown:
            raise ConfigError("Unknown source", details={"sources": unknown})
        configs = [config for config in configs if config.name in args.source]

    sources = [CommandSource(config, compiled, transport, policy) for config in configs]
    result = collect(sources, max_workers=settings.processing.max_workers)

    print_records(result.stream.filter(exclude=args.exclude, include=args.include), console)
    if args.summary:
        print_summary(result)

    if result.results and not result.succeeded:
        return EXIT_ALL_SOURCES_FAILED
    return EXIT_OK

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args, Console())
    except ConfigError:
        return EXIT_CONFIG_ERROR

if __name__ == "__main__":
    sys.exit(main())
