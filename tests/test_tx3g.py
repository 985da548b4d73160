import io

import pytest

from mp4atoms.boxio import BoxHeader, BoxType
from mp4atoms.tx3g import RgbaColor, Tx3gBox
from mp4atoms.types import InvalidDataError


def test_tx3g():
    src = Tx3gBox(
        data_reference_index=1,
        display_flags=0,
        horizontal_justification=1,
        vertical_justification=-1,
        bg_color_rgba=RgbaColor(0, 0, 0, 255),
        box_record=(0, 0, 0, 0),
        style_record=bytes([0, 0, 0, 0, 0, 1, 0, 16, 255, 255, 255, 255]),
    )
    buf = io.BytesIO()
    src.write_box(buf)
    data = buf.getvalue()
    assert len(data) == src.box_size() == 46

    reader = io.BytesIO(data)
    header = BoxHeader.read(reader)
    assert header.name == BoxType.TX3G
    assert header.size == src.box_size()

    dst = Tx3gBox.read_box(reader, header.size)
    assert dst == src


def test_tx3g_defaults():
    box = Tx3gBox()
    assert box.horizontal_justification == 1
    assert box.vertical_justification == -1
    assert box.bg_color_rgba == RgbaColor(0, 0, 0, 255)
    assert box.style_record == bytes([0, 0, 0, 0, 0, 1, 0, 16, 255, 255, 255, 255])


def test_tx3g_negative_box_record_round_trip():
    src = Tx3gBox(box_record=[-5, 10, -300, 400])
    buf = io.BytesIO()
    src.write_box(buf)
    reader = io.BytesIO(buf.getvalue())
    header = BoxHeader.read(reader)
    dst = Tx3gBox.read_box(reader, header.size)
    assert dst.box_record == (-5, 10, -300, 400)


def test_tx3g_summary():
    box = Tx3gBox(data_reference_index=1)
    assert box.summary() == (
        "data_reference_index=1 horizontal_justification=1 "
        "vertical_justification=-1 rgba=000255"
    )


def test_tx3g_bad_style_record():
    with pytest.raises(InvalidDataError):
        Tx3gBox(style_record=b"\x00\x01")