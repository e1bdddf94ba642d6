"""
cli.py  –  mmr-dump, print the Manufacturing Meta Region of an image
======================================================================

Usage
-----
```bash
mmr-dump flash.bin                    # locate the MMR, print it as JSON
mmr-dump flash.bin -e 0x4000          # MMR footer ends at byte 0x4000
mmr-dump flash.bin -a 3               # ... and list the LittleFS in area 3
mmr-dump flash.bin -a 3 -c -b 1024    # ... with file contents, 1 KiB blocks
```

The image is read into RAM once; nothing is ever written back.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from .area_fs import DEFAULT_BLOCK_SIZE, flash_area, list_area, mount_area
from .errors import MmrError
from .parse import read_meta
from .projection import render_json

log = logging.getLogger(__name__)


def _int(text: str) -> int:
    return int(text, 0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mmr-dump",
        description="Decode the Manufacturing Meta Region of a firmware/flash image")
    parser.add_argument("image", type=Path, help="Path to the binary image")
    parser.add_argument("-e", "--end-offset", type=_int, default=None,
                        help="Offset just past the MMR footer (default: search "
                             "the image for the footer magic)")
    parser.add_argument("-a", "--area", type=_int, default=None,
                        help="FLASH_AREA id whose LittleFS contents to list")
    parser.add_argument("-b", "--block-size", type=_int, default=DEFAULT_BLOCK_SIZE,
                        help=f"LittleFS erase block size in bytes "
                             f"(default: {DEFAULT_BLOCK_SIZE})")
    parser.add_argument("-c", "--contents", action="store_true",
                        help="Dump file contents as well as the directory tree")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log parsing details to stderr")
    return parser


def run(args: argparse.Namespace) -> None:
    try:
        buf = args.image.read_bytes()
    except FileNotFoundError:
        sys.exit(f"Error: image '{args.image}' not found")

    meta, end_offset = read_meta(buf, args.end_offset)
    print(render_json(meta, end_offset))

    if args.area is None:
        return

    area = flash_area(meta, args.area)
    fs = mount_area(buf, area, args.block_size)
    print(f"\nFlash area {area.area} @ 0x{area.offset:x} "
          f"({area.size // 1024} KiB)\n/")
    try:
        for line in list_area(fs, args.contents):
            print(line)
    finally:
        fs.unmount()


def main(argv: List[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        run(args)
    except MmrError as err:
        log.debug("mmr-dump failed", exc_info=True)
        sys.exit(f"error: {err}")


if __name__ == "__main__":
    main()
