import io

import pytest

from mp4atoms.boxio import BoxHeader, BoxType
from mp4atoms.trex import TrexBox
from mp4atoms.types import Mp4Error

SOURCE = TrexBox(
    version=0,
    flags=0,
    track_id=1,
    default_sample_description_index=1,
    default_sample_duration=1000,
    default_sample_size=0,
    default_sample_flags=65536,
)


def _encoded() -> bytes:
    out = io.BytesIO()
    SOURCE.write_box(out)
    return out.getvalue()


def _decode(data: bytes):
    stream = io.BytesIO(data)
    header = BoxHeader.read(stream)
    return header, stream


def test_trex():
    data = _encoded()
    assert len(data) == SOURCE.box_size()
    header, stream = _decode(data)
    assert header.name is BoxType.TREX
    assert header.size == SOURCE.box_size()
    assert TrexBox.read_box(stream, header.size) == SOURCE


@pytest.mark.parametrize(
    "start, expected",
    [
        (0, b"\x00\x00\x00\x20trex"),
        (8, b"\x00\x00\x00\x00"),
        (12, (1).to_bytes(4, "big")),
        (20, (1000).to_bytes(4, "big")),
        (28, (65536).to_bytes(4, "big")),
    ],
)
def test_trex_wire_layout(start, expected):
    data = _encoded()
    assert len(data) == 32
    assert data[start : start + len(expected)] == expected


def test_trex_read_skips_trailing_bytes():
    padded = (36).to_bytes(4, "big") + _encoded()[4:] + b"\xff" * 4 + b"next"
    header, stream = _decode(padded)
    assert TrexBox.read_box(stream, header.size) == SOURCE
    assert stream.read() == b"next"


def test_trex_truncated():
    header, stream = _decode(_encoded()[:20])
    with pytest.raises(Mp4Error):
        TrexBox.read_box(stream, header.size)


def test_trex_summary_and_json():
    assert SOURCE.summary() == "track_id=1 default_sample_duration=1000"
    assert SOURCE.to_json() == (
        '{"version":0,"flags":0,"track_id":1,"default_sample_description_index":1,'
        '"default_sample_duration":1000,"default_sample_size":0,"default_sample_flags":65536}'
    )
    assert SOURCE.box_type() is BoxType.TREX