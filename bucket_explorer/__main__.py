"""Module entry point for the bucket explorer application."""
import argparse
import json
import logging
import sys
import tkinter as tk

from .parser import ListingParseError, parse_listing
from .settings import LOG_LEVELS, SettingsStorage
from .tk_view import BucketExplorerApp


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bucket-explorer",
        description="Browse the objects of an S3-style bucket listing.",
    )
    parser.add_argument("url", nargs="?", default="", help="listing URL to prefill in the window")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="logging level (defaults to the saved setting)",
    )
    parser.add_argument(
        "--dump",
        metavar="FILE",
        help="parse a local listing file, print it as JSON and exit",
    )
    return parser


def dump_listing(path: str) -> int:
    try:
        with open(path, "rb") as handle:
            listing = parse_listing(handle.read())
    except (OSError, ListingParseError) as exc:
        print(exc, file=sys.stderr)
        return 1
    print(json.dumps(listing.to_dict(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = SettingsStorage().load()
    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.dump:
        return dump_listing(args.dump)

    root = tk.Tk()
    BucketExplorerApp(root, url=args.url)
    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
