"""
meta.py  –  Manufacturing Meta Region (MMR) data model
========================================================

An MMR is a tightly packed run of TLV records followed by a fixed footer,
appended to a firmware image:

    <TLV 0> <TLV 1> ... <TLV n-1> <footer>

Each TLV is a 3-byte header (type u8, size u16) and `size` body bytes.
Everything on the wire is little-endian.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Tuple

# ──────────────────────────────────────────────────────────────────────────────
# Wire layout
# ──────────────────────────────────────────────────────────────────────────────

TLV_HEADER_FMT = "<BH"
TLV_HEADER_SZ = struct.calcsize(TLV_HEADER_FMT)    # 3

FOOTER_FMT = "<HBxI"                                # size, version, pad, magic
FOOTER_SZ = struct.calcsize(FOOTER_FMT)             # 8

META_MAGIC = 0x3BB2A269
META_VERSION = 2

HASH_SZ = 32

# Type tags
META_TLV_TYPE_HASH = 0x01
META_TLV_TYPE_FLASH_AREA = 0x02
META_TLV_TYPE_MMR_REF = 0x04

TNAME = {
    META_TLV_TYPE_HASH:       "HASH",
    META_TLV_TYPE_FLASH_AREA: "FLASH_AREA",
    META_TLV_TYPE_MMR_REF:    "MMR_REF",
}


def type_name(tag: int) -> str:
    """Display name of a TLV type tag ("???" if unknown)."""
    return TNAME.get(tag, "???")


# ──────────────────────────────────────────────────────────────────────────────
# Records
# ──────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MetaTlvHeader:
    type: int
    size: int


@dataclass(frozen=True)
class MetaTlv:
    header: MetaTlvHeader
    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != self.header.size:
            raise ValueError(f"TLV body is {len(self.data)} bytes, "
                             f"header says {self.header.size}")

    @classmethod
    def of(cls, tag: int, data: bytes) -> "MetaTlv":
        """Build a TLV whose header size matches `data`."""
        return cls(MetaTlvHeader(tag, len(data)), bytes(data))

    @property
    def wire_size(self) -> int:
        return TLV_HEADER_SZ + len(self.data)


@dataclass(frozen=True)
class MetaFooter:
    size: int
    magic: int
    version: int


@dataclass(frozen=True)
class Meta:
    """One complete MMR. `tlvs` is in physical byte order."""
    tlvs: Tuple[MetaTlv, ...]
    footer: MetaFooter

    def __post_init__(self) -> None:
        # accept any sequence, store a tuple
        object.__setattr__(self, "tlvs", tuple(self.tlvs))


@dataclass(frozen=True)
class Offsets:
    """Region-relative byte offsets of every TLV and of the footer."""
    tlvs: Tuple[int, ...]
    footer: int
