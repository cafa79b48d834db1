#!/usr/bin/env python3
"""
Command line client for manual end-to-end checks.

Run with: enhance-image photo.jpg --prompt "on a marble table" -o result.png
"""

import argparse
import logging
import sys
from pathlib import Path

import requests

from app.client import DEFAULT_BASE_URL, EnhanceClient, EnhanceClientError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Enhance a product photo via the relay API")
    parser.add_argument("image", type=Path, help="Path to the product photo")
    parser.add_argument("--prompt", help="Scene description (server default if omitted)")
    parser.add_argument("--url", default=DEFAULT_BASE_URL, help="API base URL")
    parser.add_argument("-o", "--output", type=Path, help="Save the enhanced image here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    """Execute one enhancement and optionally download the result."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.image.is_file():
        print(f"Image not found: {args.image}", file=sys.stderr)
        return 2

    client = EnhanceClient(args.url)
    try:
        url = client.enhance(args.image, prompt=args.prompt)
    except EnhanceClientError as e:
        print(f"Enhancement failed ({e.status_code}): {e}", file=sys.stderr)
        return 1
    except requests.RequestException as e:
        print(f"Could not reach {args.url}: {e}", file=sys.stderr)
        return 1

    print(url)

    if args.output:
        try:
            args.output.write_bytes(client.download(url))
        except (requests.RequestException, OSError) as e:
            print(f"Failed to save enhanced image: {e}", file=sys.stderr)
            return 1
        print(f"Saved to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
