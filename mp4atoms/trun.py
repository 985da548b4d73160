"""The track fragment run box (trun): per-sample values of a fragment."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import BinaryIO, ClassVar

from mp4atoms import boxio
from mp4atoms.types import InvalidDataError, Mp4Error


def _take(stream: BinaryIO, fmt: str) -> tuple:
    wanted = struct.calcsize(fmt)
    chunk = stream.read(wanted) or b""
    if len(chunk) < wanted:
        raise Mp4Error("trun box is truncated")
    return struct.unpack(fmt, chunk)


def _column() -> list[int]:
    return field(default_factory=list, metadata={"json": False})


@dataclass
class TrunBox(boxio.Mp4Box):
    """A run of samples in a track fragment.

    Which per-sample columns are present is decided by ``flags``.
    """

    FLAG_DATA_OFFSET: ClassVar[int] = 0x01
    FLAG_FIRST_SAMPLE_FLAGS: ClassVar[int] = 0x04
    FLAG_SAMPLE_DURATION: ClassVar[int] = 0x100
    FLAG_SAMPLE_SIZE: ClassVar[int] = 0x200
    FLAG_SAMPLE_FLAGS: ClassVar[int] = 0x400
    FLAG_SAMPLE_CTS: ClassVar[int] = 0x800

    version: int = 0
    flags: int = 0
    sample_count: int = 0
    data_offset: int | None = None
    first_sample_flags: int | None = None
    sample_durations: list[int] = _column()
    sample_sizes: list[int] = _column()
    sample_flags: list[int] = _column()
    sample_cts: list[int] = _column()

    @classmethod
    def _columns(cls, flags: int) -> list[str]:
        """Names of the per-sample columns present under ``flags``, in wire order."""
        candidates = (
            (cls.FLAG_SAMPLE_DURATION, "sample_durations"),
            (cls.FLAG_SAMPLE_SIZE, "sample_sizes"),
            (cls.FLAG_SAMPLE_FLAGS, "sample_flags"),
            (cls.FLAG_SAMPLE_CTS, "sample_cts"),
        )
        return [name for flag, name in candidates if flags & flag]

    @classmethod
    def _fixed_size(cls, flags: int) -> int:
        optional = (cls.FLAG_DATA_OFFSET, cls.FLAG_FIRST_SAMPLE_FLAGS)
        return 4 + sum(4 for flag in optional if flags & flag)

    def box_type(self) -> boxio.BoxType:
        return boxio.BoxType.TRUN

    def box_size(self) -> int:
        per_sample = 4 * len(self._columns(self.flags))
        return (
            boxio.HEADER_SIZE
            + boxio.HEADER_EXT_SIZE
            + self._fixed_size(self.flags)
            + per_sample * self.sample_count
        )

    def to_json(self) -> str:
        """The box's header fields as compact JSON; sample columns are left out."""
        return super().to_json()

    def summary(self) -> str:
        return f"sample_size={self.sample_count}"

    @classmethod
    def read_box(cls, stream: BinaryIO, size: int) -> TrunBox:
        """Read the box body; its header has just been read."""
        start = boxio.box_start(stream)
        version, flags = boxio.read_header_ext(stream)

        columns = cls._columns(flags)
        width = len(columns)
        room = max(
            0, size - boxio.HEADER_SIZE - boxio.HEADER_EXT_SIZE - cls._fixed_size(flags)
        )

        (sample_count,) = _take(stream, ">I")
        data_offset = (
            _take(stream, ">i")[0] if flags & cls.FLAG_DATA_OFFSET else None
        )
        first_sample_flags = (
            _take(stream, ">I")[0] if flags & cls.FLAG_FIRST_SAMPLE_FLAGS else None
        )

        if sample_count * 4 * width > room:
            raise InvalidDataError(
                "trun sample_count indicates more values than could fit in the box"
            )

        table: dict[str, list[int]] = {}
        if width:
            values = _take(stream, f">{sample_count * width}I")
            table = {name: list(values[k::width]) for k, name in enumerate(columns)}

        boxio.skip_bytes_to(stream, start + size)
        return cls(
            version=version,
            flags=flags,
            sample_count=sample_count,
            data_offset=data_offset,
            first_sample_flags=first_sample_flags,
            **table,
        )

    def write_box(self, stream: BinaryIO) -> int:
        """Write the whole box and return its size."""
        if self.sample_count != len(self.sample_sizes):
            raise InvalidDataError("sample count out of sync")
        columns = [getattr(self, name) for name in self._columns(self.flags)]
        flat = [value for row in zip(*columns) for value in row]
        if len(flat) != self.sample_count * len(columns):
            raise InvalidDataError("sample count out of sync")

        box_len = self.box_size()
        boxio.BoxHeader(self.box_type(), box_len).write(stream)
        boxio.write_header_ext(stream, self.version, self.flags)

        head = [self.sample_count]
        fmt = ">I"
        if self.data_offset is not None:
            fmt += "i"
            head.append(self.data_offset)
        if self.first_sample_flags is not None:
            fmt += "I"
            head.append(self.first_sample_flags)
        stream.write(struct.pack(fmt, *head))
        if flat:
            stream.write(struct.pack(f">{len(flat)}I", *flat))
        return box_len