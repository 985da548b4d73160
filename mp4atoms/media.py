"""Audio codec enumerations, track media configurations, samples and metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

from mp4atoms.types import InvalidDataError


class AudioObjectType(IntEnum):
    """MPEG-4 audio object type as carried in the decoder-specific info."""

    AAC_MAIN = 1
    AAC_LOW_COMPLEXITY = 2
    AAC_SCALABLE_SAMPLE_RATE = 3
    AAC_LONG_TERM_PREDICTION = 4
    SPECTRAL_BAND_REPLICATION = 5
    AAC_SCALABLE = 6
    TWIN_VQ = 7
    CODE_EXCITED_LINEAR_PREDICTION = 8
    HARMONIC_VECTOR_EXCITATION_CODING = 9
    TEXT_TO_SPEECH_INTERFACE = 12
    MAIN_SYNTHETIC = 13
    WAVETABLE_SYNTHESIS = 14
    GENERAL_MIDI = 15
    ALGORITHMIC_SYNTHESIS = 16
    ERROR_RESILIENT_AAC_LOW_COMPLEXITY = 17
    ERROR_RESILIENT_AAC_LONG_TERM_PREDICTION = 19
    ERROR_RESILIENT_AAC_SCALABLE = 20
    ERROR_RESILIENT_AAC_TWIN_VQ = 21
    ERROR_RESILIENT_AAC_BIT_SLICED_ARITHMETIC_CODING = 22
    ERROR_RESILIENT_AAC_LOW_DELAY = 23
    ERROR_RESILIENT_CODE_EXCITED_LINEAR_PREDICTION = 24
    ERROR_RESILIENT_HARMONIC_VECTOR_EXCITATION_CODING = 25
    ERROR_RESILIENT_HARMONIC_INDIVIDUAL_LINES_NOISE = 26
    ERROR_RESILIENT_PARAMETRIC = 27
    SINUSOIDAL_CODING = 28
    PARAMETRIC_STEREO = 29
    MPEG_SURROUND = 30
    MPEG_LAYER1 = 32
    MPEG_LAYER2 = 33
    MPEG_LAYER3 = 34
    DIRECT_STREAM_TRANSFER = 35
    AUDIO_LOSSLESS_CODING = 36
    SCALABLE_LOSSLESS_CODING = 37
    SCALABLE_LOSSLESS_CODING_NONE_CORE = 38
    ERROR_RESILIENT_AAC_ENHANCED_LOW_DELAY = 39
    SYMBOLIC_MUSIC_REPRESENTATION_SIMPLE = 40
    SYMBOLIC_MUSIC_REPRESENTATION_MAIN = 41
    UNIFIED_SPEECH_AUDIO_CODING = 42
    SPATIAL_AUDIO_OBJECT_CODING = 43
    LOW_DELAY_MPEG_SURROUND = 44
    SPATIAL_AUDIO_OBJECT_CODING_DIALOGUE_ENHANCEMENT = 45
    AUDIO_SYNC = 46

    @classmethod
    def from_value(cls, value: int) -> AudioObjectType:
        """Look up the object type for its numeric code."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidDataError("invalid audio object type") from None

    def __str__(self) -> str:
        return _AUDIO_OBJECT_LABELS[self]


_AUDIO_OBJECT_LABELS = {
    AudioObjectType.AAC_MAIN: "AAC Main",
    AudioObjectType.AAC_LOW_COMPLEXITY: "LC",
    AudioObjectType.AAC_SCALABLE_SAMPLE_RATE: "SSR",
    AudioObjectType.AAC_LONG_TERM_PREDICTION: "LTP",
    AudioObjectType.SPECTRAL_BAND_REPLICATION: "SBR",
    AudioObjectType.AAC_SCALABLE: "Scalable",
    AudioObjectType.TWIN_VQ: "TwinVQ",
    AudioObjectType.CODE_EXCITED_LINEAR_PREDICTION: "CELP",
    AudioObjectType.HARMONIC_VECTOR_EXCITATION_CODING: "HVXC",
    AudioObjectType.TEXT_TO_SPEECH_INTERFACE: "TTSI",
    AudioObjectType.MAIN_SYNTHETIC: "Main Synthetic",
    AudioObjectType.WAVETABLE_SYNTHESIS: "Wavetable Synthesis",
    AudioObjectType.GENERAL_MIDI: "General MIDI",
    AudioObjectType.ALGORITHMIC_SYNTHESIS: "Algorithmic Synthesis",
    AudioObjectType.ERROR_RESILIENT_AAC_LOW_COMPLEXITY: "ER AAC LC",
    AudioObjectType.ERROR_RESILIENT_AAC_LONG_TERM_PREDICTION: "ER AAC LTP",
    AudioObjectType.ERROR_RESILIENT_AAC_SCALABLE: "ER AAC scalable",
    AudioObjectType.ERROR_RESILIENT_AAC_TWIN_VQ: "ER AAC TwinVQ",
    AudioObjectType.ERROR_RESILIENT_AAC_BIT_SLICED_ARITHMETIC_CODING: "ER AAC BSAC",
    AudioObjectType.ERROR_RESILIENT_AAC_LOW_DELAY: "ER AAC LD",
    AudioObjectType.ERROR_RESILIENT_CODE_EXCITED_LINEAR_PREDICTION: "ER CELP",
    AudioObjectType.ERROR_RESILIENT_HARMONIC_VECTOR_EXCITATION_CODING: "ER HVXC",
    AudioObjectType.ERROR_RESILIENT_HARMONIC_INDIVIDUAL_LINES_NOISE: "ER HILN",
    AudioObjectType.ERROR_RESILIENT_PARAMETRIC: "ER Parametric",
    AudioObjectType.SINUSOIDAL_CODING: "SSC",
    AudioObjectType.PARAMETRIC_STEREO: "Parametric Stereo",
    AudioObjectType.MPEG_SURROUND: "MPEG surround",
    AudioObjectType.MPEG_LAYER1: "MPEG Layer 1",
    AudioObjectType.MPEG_LAYER2: "MPEG Layer 2",
    AudioObjectType.MPEG_LAYER3: "MPEG Layer 3",
    AudioObjectType.DIRECT_STREAM_TRANSFER: "DST",
    AudioObjectType.AUDIO_LOSSLESS_CODING: "ALS",
    AudioObjectType.SCALABLE_LOSSLESS_CODING: "SLS",
    AudioObjectType.SCALABLE_LOSSLESS_CODING_NONE_CORE: "SLS Non-core",
    AudioObjectType.ERROR_RESILIENT_AAC_ENHANCED_LOW_DELAY: "ER AAC ELD",
    AudioObjectType.SYMBOLIC_MUSIC_REPRESENTATION_SIMPLE: "SMR Simple",
    AudioObjectType.SYMBOLIC_MUSIC_REPRESENTATION_MAIN: "SMR Main",
    AudioObjectType.UNIFIED_SPEECH_AUDIO_CODING: "USAC",
    AudioObjectType.SPATIAL_AUDIO_OBJECT_CODING: "SAOC",
    AudioObjectType.LOW_DELAY_MPEG_SURROUND: "LD MPEG Surround",
    AudioObjectType.SPATIAL_AUDIO_OBJECT_CODING_DIALOGUE_ENHANCEMENT: "SAOC-DE",
    AudioObjectType.AUDIO_SYNC: "Audio Sync",
}


class SampleFreqIndex(IntEnum):
    """AAC sampling frequency index."""

    FREQ_96000 = 0x0
    FREQ_88200 = 0x1
    FREQ_64000 = 0x2
    FREQ_48000 = 0x3
    FREQ_44100 = 0x4
    FREQ_32000 = 0x5
    FREQ_24000 = 0x6
    FREQ_22050 = 0x7
    FREQ_16000 = 0x8
    FREQ_12000 = 0x9
    FREQ_11025 = 0xA
    FREQ_8000 = 0xB
    FREQ_7350 = 0xC

    @classmethod
    def from_value(cls, value: int) -> SampleFreqIndex:
        """Look up the index for its numeric code."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidDataError("invalid sampling frequency index") from None

    def freq(self) -> int:
        """The sampling frequency in hertz."""
        return int(self.name.removeprefix("FREQ_"))


class ChannelConfig(IntEnum):
    """AAC channel configuration."""

    MONO = 0x1
    STEREO = 0x2
    THREE = 0x3
    FOUR = 0x4
    FIVE = 0x5
    FIVE_ONE = 0x6
    SEVEN_ONE = 0x7

    @classmethod
    def from_value(cls, value: int) -> ChannelConfig:
        """Look up the configuration for its numeric code."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidDataError("invalid channel configuration") from None

    def __str__(self) -> str:
        return self.name.lower().replace("_", ".")


@dataclass
class Av1Config:
    """Parameters of an AV1 video track."""

    width: int = 0
    height: int = 0
    sequence_header: bytes = b""


@dataclass
class AvcConfig:
    """Parameters of an H.264 video track."""

    width: int = 0
    height: int = 0
    seq_param_set: bytes = b""
    pic_param_set: bytes = b""


@dataclass
class HevcConfig:
    """Parameters of an H.265 video track."""

    width: int = 0
    height: int = 0


@dataclass
class Vp9Config:
    """Parameters of a VP9 video track."""

    width: int = 0
    height: int = 0


@dataclass
class AacConfig:
    """Parameters of an AAC audio track."""

    bitrate: int = 0
    profile: AudioObjectType = AudioObjectType.AAC_LOW_COMPLEXITY
    freq_index: SampleFreqIndex = SampleFreqIndex.FREQ_48000
    chan_conf: ChannelConfig = ChannelConfig.STEREO


@dataclass
class TtxtConfig:
    """Parameters of a timed-text track; it has none."""


@dataclass(eq=False)
class Mp4Sample:
    """One media sample with its timing.

    Two samples compare equal when their timing, sync flag and payload
    length match; the payload bytes themselves are not compared.
    """

    start_time: int = 0
    duration: int = 0
    rendering_offset: int = 0
    is_sync: bool = False
    bytes: bytes = field(default=b"", repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mp4Sample):
            return NotImplemented
        return (
            self.start_time == other.start_time
            and self.duration == other.duration
            and self.rendering_offset == other.rendering_offset
            and self.is_sync == other.is_sync
            and len(self.bytes) == len(other.bytes)
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return (
            f"start_time {self.start_time}, duration {self.duration}, "
            f"rendering_offset {self.rendering_offset}, "
            f"is_sync {str(self.is_sync).lower()}, length {len(self.bytes)}"
        )


class DataType(IntEnum):
    """Type indicator of a metadata value."""

    BINARY = 0x000000
    TEXT = 0x000001
    IMAGE = 0x00000D
    TEMPO_CPIL = 0x000015

    @classmethod
    def from_value(cls, value: int) -> DataType:
        """Look up the data type for its numeric code."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidDataError("invalid data type") from None


class MetadataKey(Enum):
    """Metadata entries a file may describe."""

    TITLE = "title"
    YEAR = "year"
    POSTER = "poster"
    SUMMARY = "summary"


@dataclass
class Metadata:
    """Descriptive metadata of a movie, keyed by :class:`MetadataKey`.

    Entries that are missing read as ``None``. Text entries may be stored
    as ``str`` or as UTF-8 ``bytes``; bytes are decoded leniently.
    """

    entries: dict[MetadataKey, object] = field(default_factory=dict)

    def _text(self, key: MetadataKey) -> str | None:
        value = self.entries.get(key)
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8", errors="replace")
        return value if isinstance(value, str) else None

    def title(self) -> str | None:
        """The video's title."""
        return self._text(MetadataKey.TITLE)

    def year(self) -> int | None:
        """The video's release year."""
        value = self.entries.get(MetadataKey.YEAR)
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, (str, bytes)):
            try:
                return int(value)
            except ValueError:
                return None
        return None

    def poster(self) -> bytes | None:
        """The video's poster (cover art)."""
        value = self.entries.get(MetadataKey.POSTER)
        return bytes(value) if isinstance(value, (bytes, bytearray)) else None

    def summary(self) -> str | None:
        """The video's summary."""
        return self._text(MetadataKey.SUMMARY)