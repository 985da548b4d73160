"""Core value types shared by the MP4 box readers and writers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Mp4Error(Exception):
    """Base error for malformed or unsupported MP4 data."""


class InvalidDataError(Mp4Error, ValueError):
    """The data violates the MP4 format or holds an unsupported value."""


def _check_raw(name: str, raw: int, low: int, high: int) -> None:
    if not low <= raw <= high:
        raise InvalidDataError(f"{name} raw value {raw} out of range [{low}, {high}]")


@dataclass(frozen=True)
class FixedPointU8:
    """Unsigned 8.8 fixed-point number stored as its raw 16-bit value."""

    raw: int = 0

    def __post_init__(self) -> None:
        _check_raw(type(self).__name__, self.raw, 0, 0xFFFF)

    @classmethod
    def from_int(cls, value: int) -> FixedPointU8:
        """Build the fixed-point number equal to the integer ``value``."""
        return cls(value * 0x100)

    def value(self) -> int:
        """The integer part."""
        return self.raw >> 8


@dataclass(frozen=True)
class FixedPointI8:
    """Signed 8.8 fixed-point number stored as its raw 16-bit value."""

    raw: int = 0

    def __post_init__(self) -> None:
        _check_raw(type(self).__name__, self.raw, -0x8000, 0x7FFF)

    @classmethod
    def from_int(cls, value: int) -> FixedPointI8:
        """Build the fixed-point number equal to the integer ``value``."""
        return cls(value * 0x100)

    def value(self) -> int:
        """The integer part, truncated toward zero."""
        return int(self.raw / 0x100)


@dataclass(frozen=True)
class FixedPointU16:
    """Unsigned 16.16 fixed-point number stored as its raw 32-bit value."""

    raw: int = 0

    def __post_init__(self) -> None:
        _check_raw(type(self).__name__, self.raw, 0, 0xFFFFFFFF)

    @classmethod
    def from_int(cls, value: int) -> FixedPointU16:
        """Build the fixed-point number equal to the integer ``value``."""
        return cls(value * 0x10000)

    def value(self) -> int:
        """The integer part."""
        return self.raw >> 16


@dataclass(frozen=True)
class FourCC:
    """A four-byte code such as a box type or a brand."""

    value: bytes = b"\x00\x00\x00\x00"

    def __post_init__(self) -> None:
        data = bytes(self.value)
        if len(data) != 4:
            raise InvalidDataError("expected exactly four bytes")
        object.__setattr__(self, "value", data)

    @classmethod
    def from_str(cls, text: str) -> FourCC:
        """Parse a code from a string whose UTF-8 form is four bytes."""
        data = text.encode("utf-8")
        if len(data) != 4:
            raise InvalidDataError("expected exactly four bytes in string")
        return cls(data)

    @classmethod
    def from_int(cls, number: int) -> FourCC:
        """Build a code from its big-endian 32-bit number."""
        if not 0 <= number <= 0xFFFFFFFF:
            raise InvalidDataError("fourcc number out of 32-bit range")
        return cls(number.to_bytes(4, "big"))

    def __int__(self) -> int:
        return int.from_bytes(self.value, "big")

    def __str__(self) -> str:
        return self.value.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"{self} / 0x{int(self):08X}"


_TRACK_TYPE_NAMES = {"vide": "Video", "soun": "Audio", "sbtl": "Subtitle"}


class TrackType(Enum):
    """Kind of media a track carries, keyed by its handler code."""

    VIDEO = "vide"
    AUDIO = "soun"
    SUBTITLE = "sbtl"

    @classmethod
    def from_handler(cls, handler: str | FourCC) -> TrackType:
        """Look up the track type for a handler code given as text or FourCC."""
        key = handler.value.decode("latin-1") if isinstance(handler, FourCC) else handler
        try:
            return cls(key)
        except ValueError:
            raise InvalidDataError("unsupported handler type") from None

    def fourcc(self) -> FourCC:
        """The handler code of this track type."""
        return FourCC(self.value.encode("ascii"))

    def __str__(self) -> str:
        return _TRACK_TYPE_NAMES[self.value]


class MediaType(Enum):
    """Codec family of a track."""

    H264 = "h264"
    H265 = "h265"
    VP9 = "vp9"
    AAC = "aac"
    TTXT = "ttxt"

    @classmethod
    def parse(cls, text: str) -> MediaType:
        """Parse a media type from its short name."""
        try:
            return cls(text)
        except ValueError:
            raise InvalidDataError("unsupported media type") from None

    def __str__(self) -> str:
        return self.value


class AvcProfile(Enum):
    """H.264 profile of a video track."""

    AVC_CONSTRAINED_BASELINE = "Constrained Baseline"
    AVC_BASELINE = "Baseline"
    AVC_MAIN = "Main"
    AVC_EXTENDED = "Extended"
    AVC_HIGH = "High"

    @classmethod
    def from_indication(cls, profile: int, compatibility: int) -> AvcProfile:
        """Decode the profile from the avcC profile indication and compatibility bytes."""
        # Mask and shift as the container format reader has always done.
        constraint_set1 = (compatibility & 0x40) >> 7
        if profile == 66:
            return cls.AVC_CONSTRAINED_BASELINE if constraint_set1 == 1 else cls.AVC_BASELINE
        by_profile = {77: cls.AVC_MAIN, 88: cls.AVC_EXTENDED, 100: cls.AVC_HIGH}
        try:
            return by_profile[profile]
        except KeyError:
            raise InvalidDataError("unsupported avc profile") from None

    def __str__(self) -> str:
        return self.value


_MP4_TO_UNIX_EPOCH = 2082844800


def creation_time(value: int) -> int:
    """Convert a time in seconds since 1904-01-01 to seconds since 1970-01-01."""
    if value >= _MP4_TO_UNIX_EPOCH:
        return value - _MP4_TO_UNIX_EPOCH
    return value