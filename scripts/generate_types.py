#!/usr/bin/env python3
"""Write TypeScript interfaces for the CMS records.

Frontend code imports the generated file instead of restating the record
shapes by hand.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

from app.utils.typegen import render_module

logger = logging.getLogger("generate_types")


def write_types(output: str) -> None:
    parent = os.path.dirname(output)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(output, "w", encoding="utf-8") as handle:
        handle.write(render_module())


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate TypeScript types for Chukfi records")
    parser.add_argument("--output", default="cms.types.ts", help="Destination .ts file")
    parser.add_argument("--stdout", action="store_true", help="Print instead of writing a file")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    if args.stdout:
        sys.stdout.write(render_module())
        return 0

    try:
        write_types(args.output)
    except OSError as exc:
        logger.error("Failed to write %s: %s", args.output, exc)
        return 1
    logger.info("Wrote %s", args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
