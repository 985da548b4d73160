"""The VP9 sample entry box (vp09)."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
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
from mp4atoms.media import Vp9Config
from mp4atoms.types import InvalidDataError, Mp4Error
from mp4atoms.vpcc import VpccBox

_BODY = struct.Struct(">HH16sHHHHHH4sH32sHH")


@dataclass
class Vp09Box(Mp4Box):
    """Visual sample entry of a VP9 track, with its codec configuration."""

    DEFAULT_START_CODE: ClassVar[int] = 0
    DEFAULT_END_CODE: ClassVar[int] = 0xFFFF
    DEFAULT_DATA_REFERENCE_INDEX: ClassVar[int] = 1
    DEFAULT_HORIZRESOLUTION: ClassVar[tuple[int, int]] = (0x48, 0x00)
    DEFAULT_VERTRESOLUTION: ClassVar[tuple[int, int]] = (0x48, 0x00)
    DEFAULT_FRAME_COUNT: ClassVar[int] = 1
    DEFAULT_COMPRESSORNAME: ClassVar[bytes] = bytes(32)
    DEFAULT_DEPTH: ClassVar[int] = 24

    version: int = 0
    flags: int = 0
    start_code: int = 0
    data_reference_index: int = 0
    reserved0: bytes = bytes(16)
    width: int = 0
    height: int = 0
    horizresolution: tuple[int, int] = (0, 0)
    vertresolution: tuple[int, int] = (0, 0)
    reserved1: bytes = bytes(4)
    frame_count: int = 0
    compressorname: bytes = bytes(32)
    depth: int = 0
    end_code: int = 0
    vpcc: VpccBox = field(default_factory=VpccBox)

    def __post_init__(self) -> None:
        self.reserved0 = bytes(self.reserved0)
        self.reserved1 = bytes(self.reserved1)
        self.compressorname = bytes(self.compressorname)
        self.horizresolution = tuple(self.horizresolution)  # type: ignore[assignment]
        self.vertresolution = tuple(self.vertresolution)  # type: ignore[assignment]
        if len(self.reserved0) != 16:
            raise InvalidDataError("reserved0 must hold sixteen bytes")
        if len(self.reserved1) != 4:
            raise InvalidDataError("reserved1 must hold four bytes")
        if len(self.compressorname) != 32:
            raise InvalidDataError("compressorname must hold thirty-two bytes")
        if len(self.horizresolution) != 2 or len(self.vertresolution) != 2:
            raise InvalidDataError("resolutions must hold two values")

    @classmethod
    def from_config(cls, config: Vp9Config) -> Vp09Box:
        """Build a sample entry with default values for the given track configuration."""
        return cls(
            version=0,
            flags=0,
            start_code=cls.DEFAULT_START_CODE,
            data_reference_index=cls.DEFAULT_DATA_REFERENCE_INDEX,
            width=config.width,
            height=config.height,
            horizresolution=cls.DEFAULT_HORIZRESOLUTION,
            vertresolution=cls.DEFAULT_VERTRESOLUTION,
            frame_count=cls.DEFAULT_FRAME_COUNT,
            compressorname=cls.DEFAULT_COMPRESSORNAME,
            depth=cls.DEFAULT_DEPTH,
            end_code=cls.DEFAULT_END_CODE,
            vpcc=VpccBox(
                version=VpccBox.DEFAULT_VERSION,
                flags=0,
                profile=0,
                level=0x1F,
                bit_depth=VpccBox.DEFAULT_BIT_DEPTH,
                chroma_subsampling=0,
                video_full_range_flag=False,
                color_primaries=0,
                transfer_characteristics=0,
                matrix_coefficients=0,
                codec_initialization_data_size=0,
            ),
        )

    def box_type(self) -> BoxType:
        return BoxType.VP09

    def box_size(self) -> int:
        return 0x6A

    def summary(self) -> str:
        return repr(self)

    @classmethod
    def read_box(cls, stream: BinaryIO, size: int) -> Vp09Box:
        """Read the box body; its header has just been read."""
        start = box_start(stream)
        version, flags = read_header_ext(stream)
        data = stream.read(_BODY.size)
        if data is None or len(data) != _BODY.size:
            raise Mp4Error("unexpected end of data")
        (
            start_code,
            data_reference_index,
            reserved0,
            width,
            height,
            horiz_hi,
            horiz_lo,
            vert_hi,
            vert_lo,
            reserved1,
            frame_count,
            compressorname,
            depth,
            end_code,
        ) = _BODY.unpack(data)

        header = BoxHeader.read(stream)
        if header.size > size:
            raise InvalidDataError("vp09 box contains a box with a larger size than it")
        vpcc = VpccBox.read_box(stream, header.size)

        skip_bytes_to(stream, start + size)
        return cls(
            version=version,
            flags=flags,
            start_code=start_code,
            data_reference_index=data_reference_index,
            reserved0=reserved0,
            width=width,
            height=height,
            horizresolution=(horiz_hi, horiz_lo),
            vertresolution=(vert_hi, vert_lo),
            reserved1=reserved1,
            frame_count=frame_count,
            compressorname=compressorname,
            depth=depth,
            end_code=end_code,
            vpcc=vpcc,
        )

    def write_box(self, stream: BinaryIO) -> int:
        """Write the whole box and return its size."""
        size = self.box_size()
        BoxHeader(self.box_type(), size).write(stream)
        write_header_ext(stream, self.version, self.flags)
        stream.write(
            _BODY.pack(
                self.start_code,
                self.data_reference_index,
                self.reserved0,
                self.width,
                self.height,
                *self.horizresolution,
                *self.vertresolution,
                self.reserved1,
                self.frame_count,
                self.compressorname,
                self.depth,
                self.end_code,
            )
        )
        self.vpcc.write_box(stream)
        return size


# The fixed size above must match what is written.
assert HEADER_SIZE + HEADER_EXT_SIZE + _BODY.size + VpccBox().box_size() == 0x6A