"""
parse.py  –  pull an MMR out of a raw flash / firmware image
==============================================================

The footer is the last thing in the region, so everything is found
backwards from the byte just past the footer (the *end offset*):

    start = end - footer.size
    [start ............................. end - 8) TLVs
    [end - 8 ........................... end)     footer
"""

from __future__ import annotations

import logging
import struct
from typing import List, Optional, Tuple

from .errors import ParseError
from .meta import (FOOTER_FMT, FOOTER_SZ, META_MAGIC, META_VERSION,
                   TLV_HEADER_FMT, TLV_HEADER_SZ, Meta, MetaFooter, MetaTlv,
                   MetaTlvHeader)

log = logging.getLogger(__name__)

_MAGIC_BYTES = struct.pack("<I", META_MAGIC)


def find_meta_end(buf: bytes) -> int:
    """End offset of the last MMR footer in `buf` (just past its magic)."""
    pos = buf.rfind(_MAGIC_BYTES)
    if pos < 0:
        raise ParseError("no MMR footer magic found in image")
    return pos + len(_MAGIC_BYTES)


def parse_footer(buf: bytes, end_offset: int) -> MetaFooter:
    if end_offset < FOOTER_SZ or end_offset > len(buf):
        raise ParseError(f"end offset {end_offset} leaves no room for a footer "
                         f"in a {len(buf)}-byte image")

    size, version, magic = struct.unpack_from(FOOTER_FMT, buf, end_offset - FOOTER_SZ)
    if magic != META_MAGIC:
        raise ParseError(f"bad MMR footer magic: 0x{magic:08x} "
                         f"(want 0x{META_MAGIC:08x})")
    if version != META_VERSION:
        raise ParseError(f"unsupported MMR version: {version} (want {META_VERSION})")
    if size < FOOTER_SZ:
        raise ParseError(f"MMR size {size} is smaller than its footer")
    return MetaFooter(size=size, magic=magic, version=version)


def parse_meta(buf: bytes, end_offset: int) -> Meta:
    """Parse the MMR whose footer ends at `end_offset`."""
    footer = parse_footer(buf, end_offset)

    start = end_offset - footer.size
    if start < 0:
        raise ParseError(f"MMR size {footer.size} runs past the start of the image "
                         f"(end offset {end_offset})")

    ftr_off = end_offset - FOOTER_SZ
    tlvs: List[MetaTlv] = []
    off = start
    while off < ftr_off:
        if off + TLV_HEADER_SZ > ftr_off:
            raise ParseError(f"truncated TLV header at 0x{off:x}")
        tag, size = struct.unpack_from(TLV_HEADER_FMT, buf, off)
        body_off = off + TLV_HEADER_SZ
        if body_off + size > ftr_off:
            raise ParseError(f"TLV at 0x{off:x} (type {tag}, {size} bytes) "
                             f"overlaps the footer at 0x{ftr_off:x}")
        tlvs.append(MetaTlv(MetaTlvHeader(tag, size), bytes(buf[body_off:body_off + size])))
        off = body_off + size

    log.debug("MMR at 0x%x-0x%x: %d TLVs", start, end_offset, len(tlvs))
    return Meta(tlvs, footer)


def read_meta(buf: bytes, end_offset: Optional[int] = None) -> Tuple[Meta, int]:
    """Parse the MMR ending at `end_offset`, locating it first if not given."""
    if end_offset is None:
        end_offset = find_meta_end(buf)
        log.debug("located MMR footer, end offset 0x%x", end_offset)
    return parse_meta(buf, end_offset), end_offset
