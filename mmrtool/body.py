"""
body.py  –  decode the body of a single MMR TLV
=================================================

Dispatch is on the numeric type tag. Every known tag has one fixed
`struct` layout; a body whose length does not match that layout, or whose
tag is unknown, raises `BodyDecodeError`. `decode_or_opaque()` turns that
failure into an `Opaque` body so the raw bytes are never lost.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, Dict, Tuple, Union

from .errors import BodyDecodeError
from .meta import (HASH_SZ, META_TLV_TYPE_FLASH_AREA, META_TLV_TYPE_HASH,
                   META_TLV_TYPE_MMR_REF, MetaTlv)


@dataclass(frozen=True)
class MetaTlvBodyHash:
    hash: bytes

    def to_map(self) -> dict:
        return {"hash": self.hash.hex()}


@dataclass(frozen=True)
class MetaTlvBodyFlashArea:
    area: int
    device: int
    offset: int
    size: int

    def to_map(self) -> dict:
        return {
            "area":   self.area,
            "device": self.device,
            "offset": self.offset,
            "size":   self.size,
        }


@dataclass(frozen=True)
class MetaTlvBodyMmrRef:
    area: int

    def to_map(self) -> dict:
        return {"area": self.area}


@dataclass(frozen=True)
class Opaque:
    """Undecodable body: raw bytes plus the reason decoding failed."""
    data: bytes
    error: BodyDecodeError

    def to_map(self) -> str:
        return self.data.hex()


Body = Union[MetaTlvBodyHash, MetaTlvBodyFlashArea, MetaTlvBodyMmrRef]

# tag -> (struct format, constructor)
_LAYOUTS: Dict[int, Tuple[str, Callable[..., Body]]] = {
    META_TLV_TYPE_HASH:       (f"<{HASH_SZ}s", MetaTlvBodyHash),
    META_TLV_TYPE_FLASH_AREA: ("<BBII",        MetaTlvBodyFlashArea),
    META_TLV_TYPE_MMR_REF:    ("<B",           MetaTlvBodyMmrRef),
}


def body_size(tag: int) -> int:
    """Fixed body width for a known tag."""
    try:
        fmt, _ = _LAYOUTS[tag]
    except KeyError:
        raise BodyDecodeError(f"unknown meta TLV type: {tag}") from None
    return struct.calcsize(fmt)


def decode_body(tag: int, data: bytes) -> Body:
    """Decode `data` as the body of a TLV of type `tag`."""
    want = body_size(tag)
    if len(data) != want:
        raise BodyDecodeError(f"error parsing TLV data: type {tag} body is "
                              f"{len(data)} bytes, expected {want}")
    fmt, ctor = _LAYOUTS[tag]
    return ctor(*struct.unpack(fmt, data))


def decode_or_opaque(tlv: MetaTlv) -> Union[Body, Opaque]:
    try:
        return decode_body(tlv.header.type, tlv.data)
    except BodyDecodeError as err:
        return Opaque(tlv.data, err)
