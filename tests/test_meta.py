import pytest

from mmrtool.meta import (META_TLV_TYPE_FLASH_AREA, META_TLV_TYPE_HASH,
                          META_TLV_TYPE_MMR_REF, TLV_HEADER_SZ, Meta, MetaFooter,
                          MetaTlv, MetaTlvHeader, type_name)


@pytest.mark.parametrize(
    "tag, name",
    [
        (META_TLV_TYPE_HASH, "HASH"),
        (META_TLV_TYPE_FLASH_AREA, "FLASH_AREA"),
        (META_TLV_TYPE_MMR_REF, "MMR_REF"),
    ],
)
def test_type_name_known(tag, name):
    assert type_name(tag) == name
    assert type_name(tag) == type_name(tag)


def test_type_name_unknown():
    assert type_name(0x7F) == "???"


def test_tlv_header_is_three_bytes():
    assert TLV_HEADER_SZ == 3


def test_tlv_rejects_size_mismatch():
    with pytest.raises(ValueError):
        MetaTlv(MetaTlvHeader(META_TLV_TYPE_MMR_REF, 2), b"\x01")


def test_tlv_of_sets_header_size():
    tlv = MetaTlv.of(META_TLV_TYPE_MMR_REF, b"\x05")
    assert tlv.header == MetaTlvHeader(META_TLV_TYPE_MMR_REF, 1)
    assert tlv.wire_size == 4


def test_meta_keeps_tlvs_as_tuple():
    tlvs = [MetaTlv.of(META_TLV_TYPE_MMR_REF, b"\x05")]
    meta = Meta(tlvs, MetaFooter(size=12, magic=0, version=2))
    tlvs.append(MetaTlv.of(META_TLV_TYPE_MMR_REF, b"\x06"))
    assert isinstance(meta.tlvs, tuple)
    assert len(meta.tlvs) == 1
