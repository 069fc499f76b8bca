# atracdenc

Pure-Python building blocks for ATRAC audio coding. No third-party
libraries are needed.

## Modules

- `atracdenc.bitstream`: `BitStream`, a byte buffer written and read as
  most-significant-bit-first fields of up to 23 bits, and `make_sign`, which
  reads the low bits of a value as a two's complement number.
- `atracdenc.fft`: `FFT`, a planned mixed-radix complex FFT (radix 2, 3, 4, 5
  and a generic radix, unnormalised, forward or inverse), plus `factorize`
  and `next_fast_size`.
- `atracdenc.mdct`: `MDCT` (`n` samples in, `n // 2` coefficients out),
  `IMDCT` (`n // 2` coefficients in, `n` samples out), `DCT4x16` (a 16-point
  transform taken from a 32-point inverse MDCT) and `calc_eps`, the error
  tolerated for a value of a given magnitude in single precision.
- `atracdenc.oma`: reading and writing OMA (`EA3`) containers holding ATRAC3
  and ATRAC3plus frames: `OmaFile`, `OmaInfo`, `OmaCodec`, `ChannelFormat`,
  `OmaError`, `parse_header` and `build_header`.
- `atracdenc.omatools`: the `omainfo` and `omacp` commands.
- `atracdenc.util`: `swap_array`, `invert_spectrum`, `first_set_bit`,
  `div8_ceil`, `median`, `energy`, `to_int`, `swap32`, `swap16` and
  `relation_to_idx`.
- `atracdenc.help`: `help_text()`, the usage text of an ATRAC encoder/decoder
  command.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

Show codec, bit rate, channel format and frame size of one or more OMA files
(exit status 1 if any file could not be opened):

```
omainfo song.oma other.oma
```

Copy an OMA file frame by frame into a new file with the same header
parameters:

```
omacp in.oma out.oma
```

## Library use

Bit streams are written and read most-significant bit first, up to 23 bits
per call; reading past the end raises `EOFError`, a width outside 0..23
raises `ValueError`:

```python
from atracdenc.bitstream import BitStream, make_sign

bs = BitStream(b"")
bs.write(5, 3)
bs.write(make_sign(-7, 4), 4)
assert bs.size_in_bits() == 7
assert bs.read(3) == 5
assert make_sign(bs.read(4), 4) == -7
```

Gain-control level indices for a relation between two signal levels:

```python
from atracdenc.util import relation_to_idx

relation_to_idx(1)     # 4
relation_to_idx(2)     # 3
relation_to_idx(0.5)   # 5
relation_to_idx(16)    # 0
```

A forward and inverse MDCT:

```python
from atracdenc.mdct import MDCT, IMDCT

forward = MDCT(64, 0.5)
inverse = IMDCT(64, 128)
spectrum = forward([float(i) for i in range(64)])   # 32 coefficients
samples = inverse(spectrum)                         # 64 samples
```

With `scale == n` both transforms equal the plain cosine sums; other scales
multiply the result by `scale / n`.

OMA containers:

```python
from atracdenc.oma import OmaFile, OmaInfo, OmaCodec, ChannelFormat

info = OmaInfo(OmaCodec.ATRAC3, 384, 44100, ChannelFormat.STEREO)
with OmaFile("out.oma", "w", info) as oma:
    oma.write_frame(bytes(384))

with OmaFile("out.oma") as oma:
    print(oma.info.codec_name(), oma.info.bitrate())
    for frame in oma:
        ...
```

`OmaFile` reads (`mode="r"`) or writes (`mode="w"`, with an `OmaInfo`) one
frame at a time; iterating stops at the end of the file and a trailing
partial frame is not returned. Problems with the header raise `OmaError`,
whose `code` is one of `OmaError.FORMAT`, `OmaError.ENCRYPTED`,
`OmaError.VALUE` and the like. Encrypted containers are not supported.

## What this package does not do

It holds the parts an ATRAC codec is built from, not the codec itself. There
is no command that encodes WAV audio to ATRAC1 or ATRAC3 or decodes it back,
no handling of WAV or AEA files, and no ATRAC bit allocation, quantisation or
filter banks. `help_text()` returns usage text for such a command, but the
package installs no command that uses it.