"""
area_fs.py  –  look inside a LittleFS flash area named by an MMR
==================================================================

A FLASH_AREA TLV gives the offset and size of a region on a flash device.
When that region holds a LittleFS filesystem and the image being inspected
is a dump of the same device, the bytes can be mounted straight from RAM:

    area = flash_area(meta, 3)
    fs = mount_area(buf, area, block_size=512)
    print("\\n".join(tree_lines(fs)))

The area is copied out of the image first; the forensic copy is never
written to.
"""

from __future__ import annotations

import os
from typing import Iterator, List, Tuple

from littlefs import LittleFS, LittleFSError

from .body import MetaTlvBodyFlashArea, decode_or_opaque
from .errors import AreaError
from .meta import META_TLV_TYPE_FLASH_AREA, Meta

LFS_TYPE_DIR = 2
DEFAULT_BLOCK_SIZE = 512


def flash_area(meta: Meta, area_id: int) -> MetaTlvBodyFlashArea:
    """First FLASH_AREA record describing area `area_id`."""
    for tlv in meta.tlvs:
        if tlv.header.type != META_TLV_TYPE_FLASH_AREA:
            continue
        body = decode_or_opaque(tlv)
        if isinstance(body, MetaTlvBodyFlashArea) and body.area == area_id:
            return body
    raise AreaError(f"MMR has no FLASH_AREA record for area {area_id}")


def mount_area(buf: bytes, area: MetaTlvBodyFlashArea,
               block_size: int = DEFAULT_BLOCK_SIZE) -> LittleFS:
    """Mount the LittleFS held in `area` of the image `buf`."""
    end = area.offset + area.size
    if end > len(buf):
        raise AreaError(f"flash area {area.area} (0x{area.offset:x}-0x{end:x}) "
                        f"runs past the end of a {len(buf)}-byte image")
    if area.size == 0 or area.size % block_size != 0:
        raise AreaError(f"flash area {area.area} size {area.size} is not a "
                        f"multiple of block size {block_size}")
    block_count = area.size // block_size

    # build without mounting, then drop the area bytes into the flash buffer
    fs = LittleFS(block_size=block_size, block_count=block_count, mount=False)
    fs.context.buffer[:] = bytearray(buf[area.offset:end])

    try:
        fs.mount()
    except LittleFSError as err:
        raise AreaError(f"failed to mount flash area {area.area}: invalid "
                        f"super-block or wrong geometry") from err
    return fs


def tree_lines(fs: LittleFS, path: str = "/", indent: str = "") -> List[str]:
    """Directory tree below `path`, one line per entry, sorted."""
    lines: List[str] = []
    entries = sorted(fs.listdir(path))
    for idx, name in enumerate(entries):
        full = os.path.join(path, name).replace("//", "/")
        is_dir = fs.stat(full).type == LFS_TYPE_DIR

        last = idx == len(entries) - 1
        branch = "└── " if last else "├── "
        child_indent = "    " if last else "│   "
        lines.append(f"{indent}{branch}{name}{'/' if is_dir else ''}")

        if is_dir:
            lines.extend(tree_lines(fs, full, indent + child_indent))
    return lines


def file_dumps(fs: LittleFS) -> Iterator[Tuple[str, int, str]]:
    """(path, byte count, text) for every file; binary files are not shown."""
    for root, _dirs, files in fs.walk("/"):
        for fname in sorted(files):
            full_path = os.path.join(root, fname).replace("//", "/")
            with fs.open(full_path, "rb") as fh:
                data = fh.read()
            try:
                text = data.decode("utf-8")
            except UnicodeDecodeError:
                text = "[binary data omitted]"
            yield full_path, len(data), text


def list_area(fs: LittleFS, contents: bool = False) -> List[str]:
    """Tree lines, followed by file dumps when `contents` is set."""
    try:
        lines = tree_lines(fs)
        if contents:
            for path, size, text in file_dumps(fs):
                lines.append(f"\n--- {path}  ({size} bytes) ---\n{text}")
    except LittleFSError as err:
        raise AreaError(f"corrupt filesystem in flash area: {err}") from err
    return lines
