"""
mmrtool  –  decode Manufacturing Meta Regions (MMRs) in firmware images
"""

from .body import (MetaTlvBodyFlashArea, MetaTlvBodyHash, MetaTlvBodyMmrRef,
                   Opaque, decode_body, decode_or_opaque)
from .errors import AreaError, BodyDecodeError, MmrError, ParseError, RenderError
from .layout import absolute_offsets, offsets, region_start
from .meta import (META_TLV_TYPE_FLASH_AREA, META_TLV_TYPE_HASH,
                   META_TLV_TYPE_MMR_REF, Meta, MetaFooter, MetaTlv,
                   MetaTlvHeader, Offsets, type_name)
from .parse import find_meta_end, parse_meta, read_meta
from .projection import project, render_json, render_tree

__all__ = [
    "AreaError", "BodyDecodeError", "MmrError", "ParseError", "RenderError",
    "META_TLV_TYPE_FLASH_AREA", "META_TLV_TYPE_HASH", "META_TLV_TYPE_MMR_REF",
    "Meta", "MetaFooter", "MetaTlv", "MetaTlvHeader", "Offsets",
    "MetaTlvBodyFlashArea", "MetaTlvBodyHash", "MetaTlvBodyMmrRef", "Opaque",
    "absolute_offsets", "decode_body", "decode_or_opaque", "find_meta_end",
    "offsets", "parse_meta", "project", "read_meta", "region_start",
    "render_json", "render_tree", "type_name",
]
