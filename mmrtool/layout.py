"""
layout.py  –  byte offsets of the records inside an MMR
=========================================================

The region is a plain concatenation (no padding) of TLV records and the
footer, so offsets come from counting bytes; TLV bodies are never looked at.
"""

from __future__ import annotations

from typing import List, Sequence

from .meta import TLV_HEADER_SZ, Meta, MetaTlv, Offsets


def offsets(tlvs: Sequence[MetaTlv]) -> Offsets:
    """Region-relative offset of every TLV (first is 0) and of the footer."""
    cur = 0
    tlv_offs: List[int] = []
    for tlv in tlvs:
        tlv_offs.append(cur)
        cur += TLV_HEADER_SZ + len(tlv.data)
    return Offsets(tuple(tlv_offs), cur)


def region_start(meta: Meta, end_offset: int) -> int:
    """Absolute start of a region ending at `end_offset`.

    Negative when the footer claims more bytes than precede `end_offset`;
    the value is returned as is so callers can spot the malformed footer.
    """
    return end_offset - meta.footer.size


def absolute_offsets(meta: Meta, end_offset: int) -> Offsets:
    start = region_start(meta, end_offset)
    rel = offsets(meta.tlvs)
    return Offsets(tuple(start + o for o in rel.tlvs), start + rel.footer)
