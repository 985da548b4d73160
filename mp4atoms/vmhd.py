"""The video media header box (vmhd)."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass, field
from typing import BinaryIO

from mp4atoms import boxio
from mp4atoms.types import Mp4Error

_MODE_AND_COLOUR = struct.Struct(">H3H")


@dataclass
class RgbColor:
    """A colour with 16-bit channels."""

    red: int = 0
    green: int = 0
    blue: int = 0


@dataclass
class VmhdBox(boxio.Mp4Box):
    """Compositing mode and colour of a video track."""

    version: int = 0
    flags: int = 0
    graphics_mode: int = 0
    op_color: RgbColor = field(default_factory=RgbColor)

    def box_type(self) -> boxio.BoxType:
        return boxio.BoxType.VMHD

    def box_size(self) -> int:
        return boxio.HEADER_SIZE + boxio.HEADER_EXT_SIZE + _MODE_AND_COLOUR.size

    def summary(self) -> str:
        channels = "".join(str(part) for part in astuple(self.op_color))
        return f"graphics_mode={self.graphics_mode} op_color={channels}"

    @classmethod
    def read_box(cls, stream: BinaryIO, size: int) -> VmhdBox:
        """Read the box body; its header has just been read."""
        start = boxio.box_start(stream)
        version, flags = boxio.read_header_ext(stream)
        payload = stream.read(_MODE_AND_COLOUR.size) or b""
        if len(payload) < _MODE_AND_COLOUR.size:
            raise Mp4Error("vmhd box is truncated")
        mode, *channels = _MODE_AND_COLOUR.unpack(payload)
        boxio.skip_bytes_to(stream, start + size)
        return cls(version, flags, mode, RgbColor(*channels))

    def write_box(self, stream: BinaryIO) -> int:
        """Write the whole box and return its size."""
        length = self.box_size()
        boxio.BoxHeader(self.box_type(), length).write(stream)
        boxio.write_header_ext(stream, self.version, self.flags)
        stream.write(_MODE_AND_COLOUR.pack(self.graphics_mode, *astuple(self.op_color)))
        return length