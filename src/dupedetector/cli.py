#!/usr/bin/env python3
"""
dupedetector CLI — command line interface for finding exact duplicate files.
Prints duplicate sets as they are found; never modifies, moves or deletes anything.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from dupedetector import __version__
from dupedetector.core.models import DetectionParams, DetectionResult, DuplicateSet, Stage
from dupedetector.core.scanner import InvalidRootError
from dupedetector.core.state import ScanState, STAGE_SCANNING
from dupedetector.core.exclusions import build_exclusion_pattern
from dupedetector.core.hasher import is_supported, is_collision_resistant, XXHASH_ALGORITHMS
from dupedetector.commands import DetectionCommand
from dupedetector.utils.convert_utils import ConvertUtils
from dupedetector.aliases import (
    ALGORITHM_HELP_TEXT, EXCLUDE_HELP_TEXT, MIN_SIZE_HELP_TEXT, EPILOG_TEXT, resolve_algorithm
)

INDENT = "  "


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self._progress_width: int = 0

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError.
        # Undecodable file names arrive surrogate-escaped and are printed as escapes.
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding='utf-8', errors='backslashreplace')

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="dupedetector",
            description="dupedetector — quickly finds exact duplicates among files and folders",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "paths",
            nargs="*",
            metavar="PATH",
            help="Files and folders to search. Symlinks are followed only when named here."
        )

        # Filtering options
        parser.add_argument(
            "--min", "-m",
            default="1",
            type=str,
            dest="min_size",
            metavar="SIZE",
            help=MIN_SIZE_HELP_TEXT
        )
        parser.add_argument(
            "--exclude", "-e",
            action="append",
            default=[],
            type=str,
            metavar="REGEX",
            dest="excluded_patterns",
            help=EXCLUDE_HELP_TEXT
        )

        # Detection options
        parser.add_argument(
            "--algorithm", "-a",
            default="sha256",
            type=str,
            metavar="NAME",
            help=ALGORITHM_HELP_TEXT
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress progress and summary output (duplicates are still printed)"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics and log messages"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )
        return parser

    @classmethod
    def parse_args(cls, args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        return cls.build_parser().parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before any scanning starts."""
        if not ConvertUtils.is_valid_size_format(args.min_size):
            self.error_exit(f"Invalid size format: '{args.min_size}'")

        try:
            build_exclusion_pattern(args.excluded_patterns)
        except ValueError as e:
            self.error_exit(str(e))

        algorithm = resolve_algorithm(args.algorithm)
        if not is_supported(algorithm):
            self.error_exit(f"This digest algorithm is not available: {args.algorithm}")
        if algorithm in XXHASH_ALGORITHMS:
            self.warning(f"{algorithm} is not a cryptographic digest; matches among 3+ files are not guaranteed")
        elif not is_collision_resistant(algorithm):
            self.warning(f"{algorithm} is a weak digest; matches among 3+ files are not guaranteed")

    def create_params(self, args: argparse.Namespace) -> DetectionParams:
        """Create DetectionParams from CLI arguments."""
        try:
            return DetectionParams.from_human_readable(
                roots=args.paths,
                min_size_str=args.min_size,
                excluded_patterns=args.excluded_patterns,
                algorithm=resolve_algorithm(args.algorithm),
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    # ----- engine callbacks -----

    def progress_listener(self, stage: str, state: ScanState) -> None:
        """CLI progress listener - overwrites one status line on stderr."""
        if self.quiet or not sys.stderr.isatty():
            return

        if stage == STAGE_SCANNING:
            line = f"{INDENT}Files scanned: {state.scanned}"
        else:
            line = f"{INDENT}Files to read: {state.pending}"
        padding = " " * max(0, self._progress_width - len(line))
        sys.stderr.write(f"\r{line}{padding}")
        sys.stderr.flush()
        self._progress_width = len(line)

    def clear_progress(self) -> None:
        if self._progress_width:
            sys.stderr.write("\r" + " " * self._progress_width + "\r")
            sys.stderr.flush()
            self._progress_width = 0

    def print_error(self, message: str, cause: Optional[BaseException]) -> None:
        """Error sink: every non-fatal error is reported, the scan continues."""
        self.clear_progress()
        print(f"Error: {message}", file=sys.stderr)
        if cause is not None:
            print(f"{INDENT}{cause}", file=sys.stderr)

    def print_duplicate_set(self, duplicate_set: DuplicateSet) -> None:
        self.clear_progress()
        size_str = ConvertUtils.bytes_to_human(duplicate_set.size)
        print(f"{duplicate_set.duplicate_count} {duplicate_set.method.display_name} {size_str} files:")
        for path in duplicate_set.paths:
            print(f"{INDENT}{path}")
        sys.stdout.flush()

    def on_stage_complete(self, stage: Stage, state: ScanState) -> None:
        if self.quiet:
            return
        self.clear_progress()
        if stage == Stage.COLLECT:
            print(f"Total files scanned: {state.scanned}", file=sys.stderr)
        elif stage == Stage.SIZE:
            print(f"Total files to read: {state.pending}", file=sys.stderr)

    # ----- workflow -----

    def run_detection(self, params: DetectionParams) -> DetectionResult:
        """Execute detection workflow."""
        command = DetectionCommand()
        try:
            return command.execute(
                params,
                on_duplicate_set=self.print_duplicate_set,
                error_sink=self.print_error,
                progress_listener=self.progress_listener,
                on_stage_complete=self.on_stage_complete
            )
        except InvalidRootError as e:
            self.error_exit(str(e), cause=e.__cause__)

    def output_summary(self, result: DetectionResult) -> None:
        self.clear_progress()
        if self.quiet:
            return

        print(
            f"Search complete! Number of errors: {result.errors}\n"
            f"If you deleted all but one file from each group\n"
            f"then you could reclaim about {ConvertUtils.bytes_to_human(result.wasted_bytes)} of storage space.",
            file=sys.stderr
        )

        if self.verbose and result.stats is not None:
            print(f"\n{result.stats.print_summary()}", file=sys.stderr)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"Warning: {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1, cause: Optional[BaseException] = None) -> NoReturn:
        """Print a fatal error and exit."""
        print(f"Error: {message}", file=sys.stderr)
        if cause is not None:
            print(str(cause), file=sys.stderr)
        print("For help, run dupedetector with no arguments or with --help.", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point. Returns the process exit status."""
        parser = self.build_parser()
        args = parser.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger("dupedetector").setLevel(logging.INFO)

        # Nothing to scan: show help.
        if not args.paths:
            parser.print_help(sys.stderr)
            return 0

        self.validate_args(args)
        params = self.create_params(args)

        result = self.run_detection(params)
        self.output_summary(result)

        if self.verbose:
            elapsed = time.time() - self.start_time
            print(f"\nCompleted in {elapsed:.2f} seconds", file=sys.stderr)
        return 0


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        app.clear_progress()
        print("\nOperation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
