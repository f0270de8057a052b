# src/pbcat/cli.py
import sys
import argparse
import importlib.metadata
from pathlib import Path
from typing import List, Optional

# Module imports
from pbcat.clipboard import deliver
from pbcat.core.renderer import render_to_bytes
from pbcat.core.resolver import resolve_files
from pbcat.core.walker import DirectoryWalker
from pbcat.errors import ClipboardToolError, PbcatError, UsageError
from pbcat.models import CopySummary, RenderOptions, SortMode


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def _version() -> str:
    try:
        return importlib.metadata.version("pbcat")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def create_arg_parser():
    parser = _ArgumentParser(
        prog="pbcat",
        description="Concatenate files and directory trees and copy the result to the clipboard.",
    )
    parser.add_argument("paths", nargs="+", metavar="PATH", help="Files or directories to copy")
    parser.add_argument(
        "-s", "--separator",
        type=str,
        default=None,
        help="Text inserted between files (use --separator=TEXT if it starts with '-')",
    )
    parser.add_argument("-H", "--header", action="store_true", help="Prefix each file with '== path =='")
    parser.add_argument(
        "--sort",
        choices=[m.value for m in SortMode],
        default=SortMode.ARGS.value,
        help="'args' keeps discovery order, 'name' sorts by path (default: args)",
    )
    parser.add_argument("-l", "--list", action="store_true", help="Print the resolved files instead of copying")
    parser.add_argument("--hidden", action="store_true", help="Include hidden files and directories")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    return parser


def _plural(count: int) -> str:
    return "" if count == 1 else "s"


def _log(verbose: bool, message: str) -> None:
    if verbose:
        print(f"[pbcat] {message}", file=sys.stderr)


def run(args: argparse.Namespace) -> CopySummary:
    options = RenderOptions(
        separator=args.separator,
        header=args.header,
        sort=SortMode(args.sort),
    )

    _log(args.verbose, f"Resolving {len(args.paths)} input{_plural(len(args.paths))} (sort: {options.sort.value})")
    walker = DirectoryWalker(hidden=args.hidden)
    files = resolve_files(args.paths, options.sort, walker)
    _log(args.verbose, f"Resolved {len(files)} file{_plural(len(files))}")

    # Render everything up front so a bad file never leaves partial output behind
    payload = render_to_bytes(files, options)
    summary = CopySummary(files=len(files), bytes=len(payload))

    if args.list:
        for path in files:
            print(path)
        print(f"Listed {summary.files} file{_plural(summary.files)} ({summary.bytes} bytes)")
        return summary

    def report_failure(error: ClipboardToolError) -> None:
        _log(args.verbose, f"Clipboard candidate failed: {error}")

    target: Optional[Path] = deliver(payload, on_failure=report_failure)
    destination = "clipboard" if target is None else str(target)
    print(f"Copied {summary.files} file{_plural(summary.files)} ({summary.bytes} bytes) to {destination}")
    return summary


def main(argv: Optional[List[str]] = None):
    parser = create_arg_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        run(args)

    except PbcatError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
