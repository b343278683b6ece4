from __future__ import annotations

import argparse
from pathlib import Path
import sys

from antig.config import LOG_LEVELS, configure_logging, load_defaults
from antig.errors import AntigError, ConfigurationError
from antig.run_service import CopyOptions, run_copy


EXIT_SUCCESS = 0
EXIT_COPY_FAILED = 1
EXIT_USAGE_ERROR = 2
EXIT_INVALID_CONFIG = 3


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="antig", description="Copy files and directories with progress")
    parser.add_argument("sources", nargs="+", type=Path, metavar="SOURCE")
    parser.add_argument("destination", type=Path, metavar="DESTINATION")
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Copy contents recursively. Usually it is used to copy a directory",
    )
    parser.add_argument("--noise", action="store_true", help="Print every file as it is copied")
    parser.add_argument(
        "--no-progress",
        dest="no_progress",
        action="store_true",
        help="Disable showing the progress bar",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Defaults file (.yaml/.yml or .json); ~/.antig/config.yaml is used when present",
    )
    parser.add_argument("--log-level", choices=LOG_LEVELS, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        defaults = load_defaults(args.config)
    except Exception as exc:
        print(f"Invalid config: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    try:
        configure_logging(
            level=args.log_level or defaults.log_level,
            log_file=args.log_file or defaults.log_file,
        )
    except OSError as exc:
        print(f"Invalid config: cannot open log file: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    options = CopyOptions(
        sources=args.sources,
        destination=args.destination,
        recursive=args.recursive or defaults.recursive,
        noise=args.noise or defaults.noise,
        progress=defaults.progress and not args.no_progress,
    )

    try:
        run_copy(options)
    except ConfigurationError as exc:
        print(f"antig: {exc}", file=sys.stderr)
        return EXIT_USAGE_ERROR
    except AntigError as exc:
        print(f"antig: {exc}", file=sys.stderr)
        return EXIT_COPY_FAILED

    return EXIT_SUCCESS


if __name__ == "__main__":
    raise SystemExit(main())
