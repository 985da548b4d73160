"""Box types, box headers and the low-level helpers every box codec uses."""

from __future__ import annotations

import json
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any, BinaryIO

from mp4atoms.types import FourCC, InvalidDataError, Mp4Error

HEADER_SIZE = 8
HEADER_EXT_SIZE = 4


class BoxType(Enum):
    """Known box types, keyed by their four-character code."""

    FTYP = "ftyp"
    MVHD = "mvhd"
    MFHD = "mfhd"
    FREE = "free"
    MDAT = "mdat"
    MOOV = "moov"
    MVEX = "mvex"
    MEHD = "mehd"
    TREX = "trex"
    EMSG = "emsg"
    MOOF = "moof"
    TKHD = "tkhd"
    TFHD = "tfhd"
    TFDT = "tfdt"
    EDTS = "edts"
    MDIA = "mdia"
    ELST = "elst"
    MDHD = "mdhd"
    HDLR = "hdlr"
    MINF = "minf"
    VMHD = "vmhd"
    SMHD = "smhd"
    STBL = "stbl"
    STSD = "stsd"
    STTS = "stts"
    CTTS = "ctts"
    STSS = "stss"
    STSC = "stsc"
    STSZ = "stsz"
    STCO = "stco"
    CO64 = "co64"
    TRAK = "trak"
    TRAF = "traf"
    TRUN = "trun"
    UDTA = "udta"
    META = "meta"
    ILST = "ilst"
    DATA = "data"
    COVR = "covr"
    DESC = "desc"
    DINF = "dinf"
    DREF = "dref"
    URL = "url "
    WIDE = "wide"
    AVC1 = "avc1"
    AVCC = "avcC"
    HEV1 = "hev1"
    HVCC = "hvcC"
    AV01 = "av01"
    MP4A = "mp4a"
    ESDS = "esds"
    TX3G = "tx3g"
    VP09 = "vp09"
    VPCC = "vpcC"

    def fourcc(self) -> FourCC:
        """The four-character code of this box type."""
        return FourCC(self.value.encode("latin-1"))

    @classmethod
    def from_fourcc(cls, fourcc: FourCC) -> BoxType:
        """Look up a known box type by its code."""
        try:
            return cls(fourcc.value.decode("latin-1"))
        except ValueError:
            raise InvalidDataError(f"unknown box type {fourcc!r}") from None

    def __str__(self) -> str:
        return self.value


def _read_exact(stream: BinaryIO, count: int) -> bytes:
    data = stream.read(count)
    if data is None or len(data) != count:
        raise Mp4Error("unexpected end of data")
    return data


@dataclass(frozen=True)
class BoxHeader:
    """Type and size of a box.

    ``size`` counts the box from an 8-byte header onward, so that the box
    always ends at ``box_start(stream) + size``; a 64-bit size on the wire
    is therefore reported 8 bytes smaller than written.
    """

    name: BoxType | FourCC
    size: int

    @property
    def fourcc(self) -> FourCC:
        """The code of the box, whether its type is known or not."""
        return self.name.fourcc() if isinstance(self.name, BoxType) else self.name

    @classmethod
    def read(cls, stream: BinaryIO) -> BoxHeader:
        """Read a header; unknown types are kept as a plain FourCC."""
        size, raw = struct.unpack(">I4s", _read_exact(stream, HEADER_SIZE))
        code = FourCC(raw)
        try:
            name: BoxType | FourCC = BoxType.from_fourcc(code)
        except InvalidDataError:
            name = code
        if size == 1:
            (largesize,) = struct.unpack(">Q", _read_exact(stream, 8))
            if largesize == 0:
                size = 0
            elif largesize < 16:
                raise InvalidDataError("64-bit box size too small")
            else:
                size = largesize - 8
        return cls(name, size)

    def write(self, stream: BinaryIO) -> int:
        """Write the header and return the number of bytes written."""
        code = self.fourcc.value
        if self.size > 0xFFFFFFFF:
            stream.write(struct.pack(">I4sQ", 1, code, self.size + 8))
            return 16
        stream.write(struct.pack(">I4s", self.size, code))
        return HEADER_SIZE


def read_header_ext(stream: BinaryIO) -> tuple[int, int]:
    """Read a full-box version byte and 24-bit flags."""
    data = _read_exact(stream, HEADER_EXT_SIZE)
    return data[0], int.from_bytes(data[1:], "big")


def write_header_ext(stream: BinaryIO, version: int, flags: int) -> int:
    """Write a full-box version byte and 24-bit flags; return bytes written."""
    if not 0 <= version <= 0xFF:
        raise InvalidDataError("box version out of range")
    if not 0 <= flags <= 0xFFFFFF:
        raise InvalidDataError("box flags out of range")
    stream.write(bytes([version]) + flags.to_bytes(3, "big"))
    return HEADER_EXT_SIZE


def box_start(stream: BinaryIO) -> int:
    """Position of the header of the box whose header was just read."""
    return stream.tell() - HEADER_SIZE


def skip_bytes_to(stream: BinaryIO, position: int) -> None:
    """Move the stream to an absolute position."""
    stream.seek(position)


def skip_box(stream: BinaryIO, size: int) -> None:
    """Skip the rest of the box whose header was just read."""
    skip_bytes_to(stream, box_start(stream) + size)


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, FourCC):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if is_dataclass(value) and not isinstance(value, type):
        if all(f.name == "raw" for f in fields(value)):
            return value.raw
        return {
            f.name: _jsonable(getattr(value, f.name))
            for f in fields(value)
            if f.metadata.get("json", True)
        }
    return value


class Mp4Box(ABC):
    """Common interface of every box.

    Dataclass fields whose metadata holds ``{"json": False}`` are left out
    of :meth:`to_json`.
    """

    @abstractmethod
    def box_type(self) -> BoxType:
        """The type of this box."""

    @abstractmethod
    def box_size(self) -> int:
        """The size of this box when written, header included."""

    def to_json(self) -> str:
        """The box's fields as compact JSON."""
        return json.dumps(_jsonable(self), separators=(",", ":"))

    @abstractmethod
    def summary(self) -> str:
        """A short human-readable description of the box."""