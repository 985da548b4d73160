"""The VP codec configuration box (vpcC)."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, ClassVar

from mp4atoms.boxio import (
    HEADER_EXT_SIZE,
    HEADER_SIZE,
    BoxHeader,
    BoxType,
    Mp4Box,
    box_start,
    read_header_ext,
    skip_bytes_to,
    write_header_ext,
)
from mp4atoms.types import Mp4Error

_BODY = struct.Struct(">6BH")


@dataclass
class VpccBox(Mp4Box):
    """Decoder configuration of a VP8/VP9 track."""

    DEFAULT_VERSION: ClassVar[int] = 1
    DEFAULT_BIT_DEPTH: ClassVar[int] = 8

    version: int = 0
    flags: int = 0
    profile: int = 0
    level: int = 0
    bit_depth: int = 0
    chroma_subsampling: int = 0
    video_full_range_flag: bool = False
    color_primaries: int = 0
    transfer_characteristics: int = 0
    matrix_coefficients: int = 0
    codec_initialization_data_size: int = 0

    def box_type(self) -> BoxType:
        return BoxType.VPCC

    def box_size(self) -> int:
        return HEADER_SIZE + HEADER_EXT_SIZE + _BODY.size

    def summary(self) -> str:
        return repr(self)

    @classmethod
    def read_box(cls, stream: BinaryIO, size: int) -> VpccBox:
        """Read the box body; its header has just been read."""
        start = box_start(stream)
        version, flags = read_header_ext(stream)
        data = stream.read(_BODY.size)
        if data is None or len(data) != _BODY.size:
            raise Mp4Error("unexpected end of data")
        profile, level, packed, primaries, transfer, matrix, init_size = _BODY.unpack(data)
        skip_bytes_to(stream, start + size)
        return cls(
            version=version,
            flags=flags,
            profile=profile,
            level=level,
            bit_depth=packed >> 4,
            chroma_subsampling=(packed >> 1) & 0x07,
            video_full_range_flag=bool(packed & 0x01),
            color_primaries=primaries,
            transfer_characteristics=transfer,
            matrix_coefficients=matrix,
            codec_initialization_data_size=init_size,
        )

    def write_box(self, stream: BinaryIO) -> int:
        """Write the whole box and return its size."""
        size = self.box_size()
        BoxHeader(self.box_type(), size).write(stream)
        write_header_ext(stream, self.version, self.flags)
        packed = (
            (self.bit_depth << 4)
            | (self.chroma_subsampling << 1)
            | int(self.video_full_range_flag)
        ) & 0xFF
        stream.write(
            _BODY.pack(
                self.profile,
                self.level,
                packed,
                self.color_primaries,
                self.transfer_characteristics,
                self.matrix_coefficients,
                self.codec_initialization_data_size,
            )
        )
        return size