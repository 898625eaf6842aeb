"""Main module for the s3-put CLI."""

import sys
import argparse

from .put_files import main as put_files_main

VERSION = "0.1.0"


def main() -> None:
    """
    Entry point for the unified command-line interface (CLI) of s3-put.

    The "put" command hands every remaining argument to `put_files.main`,
    so the put options live in one parser only.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="s3-put",
        description="s3-put - upload local file selections to an S3 bucket",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Upload a build directory under a versioned prefix
  s3-put put --bucket assets --dest v1 --fileset build:**/*

  # Public CSS with a long cache lifetime, everything else one hour
  s3-put put --bucket assets --fileset build --public-read \\
             --content-type-mapping .css=text/css \\
             --cache-control-mapping .css=31536000 --cache-control 3600

  # Run a job described in a JSON file
  s3-put put --config upload.json

  # Show version
  s3-put version
        """,
    )

    subparsers: argparse._SubParsersAction = parser.add_subparsers(
        dest="command", help="Available commands"
    )
    subparsers.add_parser(
        "put",
        help="Upload files to S3 (see 's3-put put --help')",
        add_help=False,
    )
    subparsers.add_parser("version", help="Show version information")

    args, remaining = parser.parse_known_args()

    if args.command == "put":
        put_files_main(remaining)

    elif args.command == "version":
        print("s3-put CLI")
        print(f"Version {VERSION}")
        print("Upload local files to S3 with per-extension metadata")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
