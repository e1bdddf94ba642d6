import struct

import pytest

from mmrtool.meta import FOOTER_SZ, META_MAGIC, META_VERSION


def _region(tlvs, magic=META_MAGIC, version=META_VERSION, size=None):
    """Raw MMR bytes for [(tag, body), ...] followed by a footer."""
    body = b"".join(struct.pack("<BH", tag, len(data)) + data for tag, data in tlvs)
    if size is None:
        size = len(body) + FOOTER_SZ
    return body + struct.pack("<HBxI", size, version, magic)


@pytest.fixture
def build_region():
    return _region


@pytest.fixture
def flash_area_body():
    return struct.pack("<BBII", 1, 0, 0x00020000, 0x00060000)


@pytest.fixture
def hash_body():
    return bytes(range(0xE0, 0x100))
