# mp4atoms

A small pure-Python library for reading and writing individual boxes
("atoms") of ISO base media files such as MP4. Each box class can write
itself to a binary stream and read itself back from one, giving an equal
value.

## Boxes

| Box    | Class                     | Holds                                          |
|--------|---------------------------|------------------------------------------------|
| `trex` | `mp4atoms.trex.TrexBox`   | per-track sample defaults for fragments        |
| `trun` | `mp4atoms.trun.TrunBox`   | per-sample durations, sizes, flags and offsets |
| `vmhd` | `mp4atoms.vmhd.VmhdBox`   | video graphics mode and `RgbColor`             |
| `tx3g` | `mp4atoms.tx3g.Tx3gBox`   | timed-text sample entry with `RgbaColor`       |
| `vp09` | `mp4atoms.vp09.Vp09Box`   | VP9 sample entry, containing a `vpcC` box      |
| `vpcC` | `mp4atoms.vpcc.VpccBox`   | VP8/VP9 decoder configuration                  |

Every box subclasses `mp4atoms.boxio.Mp4Box` and offers `box_type()`,
`box_size()`, `summary()`, `to_json()`, the class method
`read_box(stream, size)` and `write_box(stream)`, which returns the number of
bytes in the box. `read_box` expects the box header to have been read already
and leaves the stream at the end of the box. `TrunBox.to_json()` leaves out
the per-sample lists.

## Supporting modules

- `mp4atoms.boxio` – `BoxType`, `BoxHeader` (with `read` and `write`,
  including 64-bit sizes), and the helpers `read_header_ext`,
  `write_header_ext`, `box_start`, `skip_bytes_to` and `skip_box`.
- `mp4atoms.types` – `FourCC`, the fixed-point numbers `FixedPointU8`,
  `FixedPointI8` and `FixedPointU16`, `TrackType`, `MediaType`, `AvcProfile`,
  `creation_time` (1904-epoch seconds to Unix seconds) and the errors
  `Mp4Error` and `InvalidDataError`.
- `mp4atoms.media` – `AudioObjectType`, `SampleFreqIndex`, `ChannelConfig`,
  `DataType`, `MetadataKey`, the codec settings `Av1Config`, `AvcConfig`,
  `HevcConfig`, `Vp9Config`, `AacConfig`, `TtxtConfig`, plus `Mp4Sample` and
  `Metadata` (a dictionary of entries keyed by `MetadataKey`).

The package uses only the standard library and needs Python 3.10 or later.

## Installing

```
pip install .
```

## Writing and reading a box

```python
import io

from mp4atoms.boxio import BoxHeader, BoxType
from mp4atoms.trex import TrexBox

src = TrexBox(track_id=1, default_sample_description_index=1,
              default_sample_duration=1000, default_sample_flags=65536)

buf = io.BytesIO()
src.write_box(buf)
assert len(buf.getvalue()) == src.box_size()

buf.seek(0)
header = BoxHeader.read(buf)
assert header.name is BoxType.TREX
dst = TrexBox.read_box(buf, header.size)
assert dst == src
print(dst.summary())   # track_id=1 default_sample_duration=1000
```

## A VP9 sample entry from a configuration

```python
from mp4atoms.media import Vp9Config
from mp4atoms.vp09 import Vp09Box

entry = Vp09Box.from_config(Vp9Config(width=1920, height=1080))
print(entry.box_size())   # 106
```

## Four-character codes

```python
from mp4atoms.types import FourCC

brand = FourCC.from_str("isom")
print(int(brand), str(brand))
```

## Errors

Input that breaks the format or holds an unsupported value raises
`mp4atoms.types.InvalidDataError`; data that ends too early raises its base
class `mp4atoms.types.Mp4Error`. `InvalidDataError` is also a `ValueError`.

## What it does not do

This is a library of single box codecs. It does not parse or build whole
files: there is no reader that walks a file's box tree, lists its tracks or
extracts samples, no writer that assembles `ftyp`, `mdat` and `moov` boxes,
and no command-line tool. Boxes other than those listed above are known only
by their `BoxType` and can be skipped with `skip_box`, not decoded.
`Metadata` holds values you give it; nothing in the package reads them from a
file.

## Running the tests

```
pip install .[test]
pytest
```