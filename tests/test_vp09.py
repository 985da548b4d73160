import io

import pytest

from mp4atoms.boxio import BoxHeader, BoxType
from mp4atoms.media import Vp9Config
from mp4atoms.types import InvalidDataError, Mp4Error
from mp4atoms.vp09 import Vp09Box
from mp4atoms.vpcc import VpccBox


def _written(box: Vp09Box) -> bytes:
    buf = io.BytesIO()
    box.write_box(buf)
    return buf.getvalue()


def test_vp09_round_trip():
    src_box = Vp09Box.from_config(Vp9Config(width=1920, height=1080))
    buf = _written(src_box)
    assert len(buf) == src_box.box_size()

    reader = io.BytesIO(buf)
    header = BoxHeader.read(reader)
    assert header.name == BoxType.VP09
    assert header.size == src_box.box_size()

    dst_box = Vp09Box.read_box(reader, header.size)
    assert dst_box == src_box


def test_box_size_is_fixed():
    box = Vp09Box.from_config(Vp9Config(width=640, height=480))
    assert box.box_size() == 106
    assert box.write_box(io.BytesIO()) == 106


def test_from_config_defaults():
    box = Vp09Box.from_config(Vp9Config(width=320, height=240))
    assert (box.width, box.height) == (320, 240)
    assert box.data_reference_index == 1
    assert box.horizresolution == (0x48, 0x00)
    assert box.vertresolution == (0x48, 0x00)
    assert box.frame_count == 1
    assert box.depth == 24
    assert box.end_code == 0xFFFF
    assert box.compressorname == bytes(32)
    assert box.vpcc.version == VpccBox.DEFAULT_VERSION
    assert box.vpcc.level == 0x1F
    assert box.vpcc.bit_depth == 8


def test_written_bytes_layout():
    buf = _written(Vp09Box.from_config(Vp9Config(width=1920, height=1080)))
    assert buf[:8] == b"\x00\x00\x00\x6avp09"
    assert buf[32:36] == (1920).to_bytes(2, "big") + (1080).to_bytes(2, "big")
    assert buf[90:94] == b"vpcC"


def test_read_skips_trailing_bytes():
    src_box = Vp09Box.from_config(Vp9Config(width=100, height=50))
    buf = _written(src_box)
    padded = bytearray(buf + b"\xaa\xbb")
    padded[0:4] = (len(padded)).to_bytes(4, "big")
    reader = io.BytesIO(bytes(padded) + b"tail")
    header = BoxHeader.read(reader)
    dst_box = Vp09Box.read_box(reader, header.size)
    assert dst_box == src_box
    assert reader.read() == b"tail"


def test_inner_box_larger_than_outer_is_rejected():
    buf = bytearray(_written(Vp09Box.from_config(Vp9Config(width=1, height=1))))
    buf[86:90] = (1000).to_bytes(4, "big")
    reader = io.BytesIO(bytes(buf))
    header = BoxHeader.read(reader)
    with pytest.raises(InvalidDataError):
        Vp09Box.read_box(reader, header.size)


def test_truncated_body_raises():
    buf = _written(Vp09Box.from_config(Vp9Config(width=1, height=1)))
    reader = io.BytesIO(buf[:40])
    header = BoxHeader.read(reader)
    with pytest.raises(Mp4Error):
        Vp09Box.read_box(reader, header.size)


def test_bad_reserved_length_rejected():
    with pytest.raises(InvalidDataError):
        Vp09Box(reserved0=b"\x00" * 3)


def test_summary_mentions_dimensions():
    box = Vp09Box.from_config(Vp9Config(width=1920, height=1080))
    text = box.summary()
    assert "width=1920" in text
    assert "height=1080" in text
    assert box.box_type() == BoxType.VP09