"""
projection.py  –  JSON-friendly view of an MMR
================================================

`project()` turns a `Meta` into nested dicts / lists / ints / strings in
the order they should be printed. Keys with a leading underscore are
computed (index, absolute offsets); the rest are read from the region.

A TLV whose body cannot be decoded is shown as the hex of its raw bytes;
it never stops the rest of the region from being projected.
"""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Union

from .body import Opaque, decode_or_opaque
from .errors import RenderError
from .layout import absolute_offsets, region_start
from .meta import Meta, MetaFooter, MetaTlv, type_name

log = logging.getLogger(__name__)

Tree = Union[str, int, List["Tree"], Dict[str, "Tree"]]


def tlv_map(tlv: MetaTlv, index: int, offset: int) -> Dict[str, Tree]:
    body = decode_or_opaque(tlv)
    if isinstance(body, Opaque):
        log.debug("TLV %d: showing raw body (%s)", index, body.error)

    return {
        "_index":  index,
        "_offset": offset,
        "header": {
            "_type_name": type_name(tlv.header.type),
            "type":       tlv.header.type,
            "size":       tlv.header.size,
        },
        "data":    body.to_map(),
    }


def footer_map(footer: MetaFooter, offset: int) -> Dict[str, Tree]:
    return {
        "_offset": offset,
        "size":    footer.size,
        "magic":   footer.magic,
        "version": footer.version,
    }


def project(meta: Meta, end_offset: int) -> Dict[str, Tree]:
    """Build the projection tree of `meta`, a region ending at `end_offset`."""
    offs = absolute_offsets(meta, end_offset)

    tlvs = [tlv_map(t, i, offs.tlvs[i]) for i, t in enumerate(meta.tlvs)]

    return {
        "_offset":     region_start(meta, end_offset),
        "_end_offset": end_offset,
        "_size":       meta.footer.size,
        "tlvs":        tlvs,
        "footer":      footer_map(meta.footer, offs.footer),
    }


def _check_tree(node: Tree, path: str = "$") -> None:
    """Raise TypeError for anything outside str / int / list / dict[str, ...]."""
    if isinstance(node, dict):
        for key, value in node.items():
            if not isinstance(key, str):
                raise TypeError(f"{path}: mapping key {key!r} is not a string")
            _check_tree(value, f"{path}.{key}")
    elif isinstance(node, list):
        for i, value in enumerate(node):
            _check_tree(value, f"{path}[{i}]")
    elif isinstance(node, bool) or not isinstance(node, (str, int)):
        raise TypeError(f"{path}: {type(node).__name__} is not a tree value")


def render_tree(tree: Tree) -> str:
    """Serialize a projection tree, keeping authored key order."""
    try:
        _check_tree(tree)
        return json.dumps(tree, indent=4, allow_nan=False)
    except (TypeError, ValueError) as err:
        raise RenderError("failed to render region") from err


def render_json(meta: Meta, end_offset: int) -> str:
    return render_tree(project(meta, end_offset))
