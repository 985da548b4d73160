"""The timed-text sample entry box (tx3g)."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import BinaryIO

from mp4atoms.boxio import (
    HEADER_SIZE,
    BoxHeader,
    BoxType,
    Mp4Box,
    box_start,
    skip_bytes_to,
)
from mp4atoms.types import InvalidDataError, Mp4Error

_BODY = struct.Struct(">IHHIbb4B4h12s")
_DEFAULT_STYLE_RECORD = bytes([0, 0, 0, 0, 0, 1, 0, 16, 255, 255, 255, 255])


@dataclass
class RgbaColor:
    """A colour with 8-bit channels and alpha."""

    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: int = 0


@dataclass
class Tx3gBox(Mp4Box):
    """Sample description of a 3GPP timed-text track."""

    data_reference_index: int = 0
    display_flags: int = 0
    horizontal_justification: int = 1
    vertical_justification: int = -1
    bg_color_rgba: RgbaColor = field(default_factory=lambda: RgbaColor(0, 0, 0, 255))
    box_record: tuple[int, int, int, int] = (0, 0, 0, 0)
    style_record: bytes = _DEFAULT_STYLE_RECORD

    def __post_init__(self) -> None:
        self.box_record = tuple(self.box_record)  # type: ignore[assignment]
        self.style_record = bytes(self.style_record)
        if len(self.box_record) != 4:
            raise InvalidDataError("box_record must hold four values")
        if len(self.style_record) != 12:
            raise InvalidDataError("style_record must hold twelve bytes")

    def box_type(self) -> BoxType:
        return BoxType.TX3G

    def box_size(self) -> int:
        return HEADER_SIZE + 6 + 32

    def summary(self) -> str:
        c = self.bg_color_rgba
        return (
            f"data_reference_index={self.data_reference_index} "
            f"horizontal_justification={self.horizontal_justification} "
            f"vertical_justification={self.vertical_justification} "
            f"rgba={c.red}{c.green}{c.blue}{c.alpha}"
        )

    @classmethod
    def read_box(cls, stream: BinaryIO, size: int) -> Tx3gBox:
        """Read the box body; its header has just been read."""
        start = box_start(stream)
        data = stream.read(_BODY.size)
        if data is None or len(data) != _BODY.size:
            raise Mp4Error("unexpected end of data")
        values = _BODY.unpack(data)
        _, _, data_reference_index, display_flags, horizontal, vertical = values[:6]
        color = RgbaColor(*values[6:10])
        box_record = tuple(values[10:14])
        style_record = values[14]
        skip_bytes_to(stream, start + size)
        return cls(
            data_reference_index=data_reference_index,
            display_flags=display_flags,
            horizontal_justification=horizontal,
            vertical_justification=vertical,
            bg_color_rgba=color,
            box_record=box_record,  # type: ignore[arg-type]
            style_record=style_record,
        )

    def write_box(self, stream: BinaryIO) -> int:
        """Write the whole box and return its size."""
        size = self.box_size()
        BoxHeader(self.box_type(), size).write(stream)
        c = self.bg_color_rgba
        stream.write(
            _BODY.pack(
                0,
                0,
                self.data_reference_index,
                self.display_flags,
                self.horizontal_justification,
                self.vertical_justification,
                c.red,
                c.green,
                c.blue,
                c.alpha,
                *self.box_record,
                self.style_record,
            )
        )
        return size