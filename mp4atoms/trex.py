"""The track extends box (trex): per-track defaults for movie fragments."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

from mp4atoms import boxio
from mp4atoms.types import Mp4Error

_FIELDS = (
    "track_id",
    "default_sample_description_index",
    "default_sample_duration",
    "default_sample_size",
    "default_sample_flags",
)
_LAYOUT = struct.Struct(f">{len(_FIELDS)}I")


@dataclass
class TrexBox(boxio.Mp4Box):
    """Default sample values for the fragments of one track."""

    version: int = 0
    flags: int = 0
    track_id: int = 0
    default_sample_description_index: int = 0
    default_sample_duration: int = 0
    default_sample_size: int = 0
    default_sample_flags: int = 0

    def box_type(self) -> boxio.BoxType:
        return boxio.BoxType.TREX

    def box_size(self) -> int:
        return boxio.HEADER_SIZE + boxio.HEADER_EXT_SIZE + _LAYOUT.size

    def summary(self) -> str:
        return (
            f"track_id={self.track_id} "
            f"default_sample_duration={self.default_sample_duration}"
        )

    @classmethod
    def read_box(cls, stream: BinaryIO, size: int) -> TrexBox:
        """Read the box body; its header has just been read."""
        start = boxio.box_start(stream)
        version, flags = boxio.read_header_ext(stream)
        raw = stream.read(_LAYOUT.size) or b""
        if len(raw) < _LAYOUT.size:
            raise Mp4Error("trex box is truncated")
        box = cls(version, flags, *_LAYOUT.unpack(raw))
        boxio.skip_bytes_to(stream, start + size)
        return box

    def write_box(self, stream: BinaryIO) -> int:
        """Write the whole box and return its size."""
        total = self.box_size()
        boxio.BoxHeader(self.box_type(), total).write(stream)
        boxio.write_header_ext(stream, self.version, self.flags)
        stream.write(_LAYOUT.pack(*(getattr(self, name) for name in _FIELDS)))
        return total