import io
import json
import struct
from dataclasses import dataclass, field

import pytest

from mp4atoms import boxio
from mp4atoms.types import FixedPointU16, FourCC, InvalidDataError, Mp4Error, TrackType


@dataclass
class _ProbeBox(boxio.Mp4Box):
    version: int = 0
    flags: int = 0
    brand: FourCC = field(default_factory=lambda: FourCC.from_str("isom"))
    kind: TrackType = TrackType.VIDEO
    width: FixedPointU16 = field(default_factory=lambda: FixedPointU16.from_int(320))
    data: bytes = b"\x01\x02"
    hidden: list = field(default_factory=list, metadata={"json": False})

    def box_type(self):
        return boxio.BoxType.VMHD

    def box_size(self):
        return boxio.HEADER_SIZE + boxio.HEADER_EXT_SIZE

    def summary(self):
        return f"version={self.version}"


@pytest.mark.parametrize("box_type", list(boxio.BoxType))
def test_box_type_fourcc_round_trip(box_type):
    assert boxio.BoxType.from_fourcc(box_type.fourcc()) is box_type


def test_box_type_mixed_case_code():
    assert str(boxio.BoxType.VPCC.fourcc()) == "vpcC"


def test_box_type_unknown_raises():
    with pytest.raises(InvalidDataError):
        boxio.BoxType.from_fourcc(FourCC.from_str("zzzz"))


@pytest.mark.parametrize(
    "box_type, size",
    [(boxio.BoxType.VMHD, 20), (boxio.BoxType.MDAT, 2**32 + 100)],
)
def test_header_round_trip(box_type, size):
    header = boxio.BoxHeader(box_type, size)
    out = io.BytesIO()
    written = header.write(out)
    encoded = out.getvalue()
    assert written == len(encoded)
    assert written >= boxio.HEADER_SIZE
    assert encoded[4:8] == str(box_type.fourcc()).encode()
    assert boxio.BoxHeader.read(io.BytesIO(encoded)) == header


def test_small_header_is_eight_bytes():
    assert boxio.BoxHeader(boxio.BoxType.VMHD, 20).write(io.BytesIO()) == boxio.HEADER_SIZE


@pytest.mark.parametrize(
    "raw, error",
    [
        (struct.pack(">I4sQ", 1, b"mdat", 8), InvalidDataError),
        (b"\x00\x00\x00", Mp4Error),
    ],
)
def test_header_bad_input(raw, error):
    with pytest.raises(error):
        boxio.BoxHeader.read(io.BytesIO(raw))


def test_header_unknown_type_kept_as_fourcc():
    header = boxio.BoxHeader.read(io.BytesIO(struct.pack(">I4s", 8, b"abcd")))
    assert header.name == FourCC.from_str("abcd")
    assert header.fourcc == FourCC.from_str("abcd")


def test_header_ext_round_trip():
    out = io.BytesIO()
    assert boxio.write_header_ext(out, 1, 0xABCDEF) == boxio.HEADER_EXT_SIZE
    out.seek(0)
    assert boxio.read_header_ext(out) == (1, 0xABCDEF)


@pytest.mark.parametrize("version, flags", [(0, 0x1000000), (256, 0)])
def test_header_ext_rejects_out_of_range(version, flags):
    with pytest.raises(InvalidDataError):
        boxio.write_header_ext(io.BytesIO(), version, flags)


def test_box_start_and_skip_box():
    stream = io.BytesIO()
    boxio.BoxHeader(boxio.BoxType.FREE, 20).write(stream)
    stream.write(bytes(12))
    boxio.BoxHeader(boxio.BoxType.MDAT, 8).write(stream)
    stream.seek(0)
    first = boxio.BoxHeader.read(stream)
    assert boxio.box_start(stream) == 0
    boxio.skip_box(stream, first.size)
    assert stream.tell() == first.size
    assert boxio.BoxHeader.read(stream).name is boxio.BoxType.MDAT


def test_skip_bytes_to():
    stream = io.BytesIO(bytes(32))
    boxio.skip_bytes_to(stream, 17)
    assert stream.tell() == 17


def test_mp4box_to_json_respects_metadata():
    decoded = json.loads(_ProbeBox(hidden=[1, 2, 3]).to_json())
    assert decoded == {
        "version": 0,
        "flags": 0,
        "brand": "isom",
        "kind": "VIDEO",
        "width": FixedPointU16.from_int(320).raw,
        "data": [1, 2],
    }


def test_mp4box_interface():
    probe = _ProbeBox(version=1)
    assert probe.summary() == "version=1"
    out = io.BytesIO()
    boxio.BoxHeader(probe.box_type(), probe.box_size()).write(out)
    header = boxio.BoxHeader.read(io.BytesIO(out.getvalue()))
    assert header.name is boxio.BoxType.VMHD
    assert header.size == boxio.HEADER_SIZE + boxio.HEADER_EXT_SIZE


def test_mp4box_is_abstract():
    with pytest.raises(TypeError):
        boxio.Mp4Box()