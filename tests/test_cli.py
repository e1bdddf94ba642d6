import json
import struct

import pytest
from littlefs import LittleFS, LittleFSError

import mmrtool.cli
from mmrtool.cli import main
from mmrtool.meta import META_TLV_TYPE_FLASH_AREA, META_TLV_TYPE_HASH


def test_dump_located_region(tmp_path, capsys, build_region, hash_body):
    region = build_region([(META_TLV_TYPE_HASH, hash_body)])
    image = tmp_path / "flash.bin"
    image.write_bytes(b"\xff" * 256 + region)

    main([str(image)])

    tree = json.loads(capsys.readouterr().out)
    assert tree["_offset"] == 256
    assert tree["_end_offset"] == 256 + len(region)
    assert tree["tlvs"][0]["data"] == {"hash": hash_body.hex()}


def test_dump_with_end_offset(tmp_path, capsys, build_region):
    region = build_region([])
    image = tmp_path / "flash.bin"
    image.write_bytes(region + region + b"\xff" * 16)

    main([str(image), "-e", hex(len(region))])

    tree = json.loads(capsys.readouterr().out)
    assert tree["_offset"] == 0
    assert tree["_end_offset"] == len(region)


def test_dump_area_listing(tmp_path, capsys, build_region):
    fs = LittleFS(block_size=512, block_count=8)
    with fs.open("boot.log", "w") as fh:
        fh.write("Boot successful\n")
    data = bytes(fs.context.buffer)
    fs.unmount()

    region = build_region([(META_TLV_TYPE_FLASH_AREA,
                            struct.pack("<BBII", 5, 0, 0, len(data)))])
    image = tmp_path / "flash.bin"
    image.write_bytes(data + region)

    main([str(image), "-a", "5", "-c"])

    out = capsys.readouterr().out
    assert "Flash area 5 @ 0x0 (4 KiB)" in out
    assert "└── boot.log" in out
    assert "Boot successful" in out


def test_missing_image(tmp_path):
    with pytest.raises(SystemExit, match="not found"):
        main([str(tmp_path / "nope.bin")])


def test_image_without_region(tmp_path):
    image = tmp_path / "flash.bin"
    image.write_bytes(b"\xff" * 64)
    with pytest.raises(SystemExit, match="error: no MMR footer magic"):
        main([str(image)])


def test_corrupt_area_is_reported_and_unmounted(tmp_path, monkeypatch, build_region):
    class CorruptFS:
        unmounted = False

        def listdir(self, path):
            raise LittleFSError(-84)

        def unmount(self):
            self.unmounted = True

    fs = CorruptFS()
    monkeypatch.setattr(mmrtool.cli, "mount_area", lambda buf, area, block_size: fs)

    region = build_region([(META_TLV_TYPE_FLASH_AREA, struct.pack("<BBII", 5, 0, 0, 512))])
    image = tmp_path / "flash.bin"
    image.write_bytes(bytes(512) + region)

    with pytest.raises(SystemExit, match="error: corrupt filesystem"):
        main([str(image), "-a", "5"])
    assert fs.unmounted
