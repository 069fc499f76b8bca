"""Reading and writing of OMA (EA3) containers holding ATRAC3 and ATRAC3plus frames."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO

HEADER_SIZE = 96
_MAGIC = b"EA3"
_PARAMS_OFFSET = 32
_SAMPLE_RATES = (32000, 44100, 48000, 88200, 96000)
_MAX_FRAME_UNITS = 0x3FF


class OmaCodec(IntEnum):
    """Codec identifiers stored in the container header."""

    ATRAC3 = 0
    ATRAC3PLUS = 1
    MP3 = 2
    LPCM = 3
    WMA = 5


class ChannelFormat(IntEnum):
    """Channel layouts a container can describe."""

    MONO = 0
    STEREO = 1
    STEREO_JS = 2
    CHANNELS_3 = 3
    CHANNELS_4 = 4
    CHANNELS_6 = 5
    CHANNELS_7 = 6
    CHANNELS_8 = 7


# Channel layouts in the order of the ATRAC3plus channel id (id 1 is the first).
_PLUS_CHANNELS = (
    ChannelFormat.MONO,
    ChannelFormat.STEREO,
    ChannelFormat.CHANNELS_3,
    ChannelFormat.CHANNELS_4,
    ChannelFormat.CHANNELS_6,
    ChannelFormat.CHANNELS_7,
    ChannelFormat.CHANNELS_8,
)

_CODEC_NAMES = {
    OmaCodec.ATRAC3: "ATRAC3",
    OmaCodec.ATRAC3PLUS: "ATRAC3PLUS",
    OmaCodec.MP3: "MPEG1LAYER3",
    OmaCodec.LPCM: "LPCM",
    OmaCodec.WMA: "OMAC_ID_WMA",
}


class OmaError(Exception):
    """A container could not be read or written; ``code`` tells why."""

    IO = -1
    PERMISSION = -2
    FORMAT = -3
    ENCRYPTED = -4
    VALUE = -5
    EOF = -6

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class OmaInfo:
    """Stream parameters described by a container header."""

    codec: OmaCodec
    framesize: int
    samplerate: int
    channel_format: ChannelFormat

    def bitrate(self) -> int:
        """Return the bit rate in bits per second."""
        if self.codec == OmaCodec.ATRAC3:
            return self.samplerate * self.framesize * 8 // 1024
        if self.codec == OmaCodec.ATRAC3PLUS:
            return self.samplerate * self.framesize * 8 // 2048
        raise ValueError(f"bit rate is unknown for codec {self.codec!r}")

    def codec_name(self) -> str:
        """Return the codec's name, or an empty string for an unknown codec."""
        try:
            return _CODEC_NAMES[OmaCodec(int(self.codec))]
        except ValueError:
            return ""


def _samplerate_index(samplerate: int) -> int:
    if samplerate <= 0 or samplerate not in _SAMPLE_RATES:
        raise OmaError(f"unsupported sample rate {samplerate}", OmaError.VALUE)
    return _SAMPLE_RATES.index(samplerate)


def _samplerate_from_index(index: int) -> int:
    if index >= len(_SAMPLE_RATES):
        raise OmaError("wrong sample rate in header", OmaError.FORMAT)
    return _SAMPLE_RATES[index]


def _read_atrac3(params: int) -> OmaInfo:
    joint_stereo = (params >> 17) & 0x1
    return OmaInfo(
        codec=OmaCodec.ATRAC3,
        framesize=(params & _MAX_FRAME_UNITS) * 8,
        samplerate=_samplerate_from_index((params >> 13) & 0x7),
        channel_format=ChannelFormat.STEREO_JS if joint_stereo else ChannelFormat.STEREO,
    )


def _read_atrac3plus(params: int) -> OmaInfo:
    channel_id = (params >> 10) & 0x7
    if channel_id == 0:
        raise OmaError("wrong channel id in header", OmaError.FORMAT)
    return OmaInfo(
        codec=OmaCodec.ATRAC3PLUS,
        framesize=(params & _MAX_FRAME_UNITS) * 8 + 8,
        samplerate=_samplerate_from_index((params >> 13) & 0x7),
        channel_format=_PLUS_CHANNELS[channel_id - 1],
    )


def _atrac3_params(info: OmaInfo) -> int:
    if info.channel_format not in (ChannelFormat.STEREO, ChannelFormat.STEREO_JS):
        raise OmaError("ATRAC3 needs a stereo channel format", OmaError.VALUE)
    joint_stereo = 1 if info.channel_format == ChannelFormat.STEREO_JS else 0
    index = _samplerate_index(info.samplerate)
    units = info.framesize // 8
    if not 0 <= units <= _MAX_FRAME_UNITS:
        raise OmaError(f"frame size {info.framesize} out of range", OmaError.VALUE)
    return (OmaCodec.ATRAC3 << 24) | (joint_stereo << 17) | (index << 13) | units


def _atrac3plus_params(info: OmaInfo) -> int:
    index = _samplerate_index(info.samplerate)
    units = (info.framesize - 8) // 8
    if not 0 <= units <= _MAX_FRAME_UNITS:
        raise OmaError(f"frame size {info.framesize} out of range", OmaError.VALUE)
    try:
        channel_id = _PLUS_CHANNELS.index(ChannelFormat(info.channel_format)) + 1
    except ValueError:
        raise OmaError("unsupported channel format for ATRAC3plus", OmaError.VALUE) from None
    return (OmaCodec.ATRAC3PLUS << 24) | (index << 13) | (channel_id << 10) | units


def parse_header(data: bytes) -> OmaInfo:
    """Decode a container header into stream parameters."""
    if len(data) < HEADER_SIZE:
        raise OmaError("truncated header", OmaError.FORMAT)
    if data[:3] != _MAGIC or data[4] != 0 or data[5] != HEADER_SIZE:
        raise OmaError("not an EA3 header", OmaError.FORMAT)
    if data[6] != 0xFF or data[7] != 0xFF:
        raise OmaError("encrypted content is not supported", OmaError.ENCRYPTED)
    params = int.from_bytes(data[_PARAMS_OFFSET + 1:_PARAMS_OFFSET + 4], "big")
    codec_id = data[_PARAMS_OFFSET]
    if codec_id == OmaCodec.ATRAC3:
        return _read_atrac3(params)
    if codec_id == OmaCodec.ATRAC3PLUS:
        return _read_atrac3plus(params)
    raise OmaError(f"unsupported codec {codec_id}", OmaError.FORMAT)


def build_header(info: OmaInfo) -> bytes:
    """Encode stream parameters as a container header."""
    if info.codec == OmaCodec.ATRAC3:
        params = _atrac3_params(info)
    elif info.codec == OmaCodec.ATRAC3PLUS:
        params = _atrac3plus_params(info)
    else:
        raise OmaError(f"cannot write codec {info.codec!r}", OmaError.VALUE)
    header = bytearray(HEADER_SIZE)
    header[0:3] = _MAGIC
    header[3] = 1
    header[5] = HEADER_SIZE
    header[6] = 0xFF
    header[7] = 0xFF
    header[_PARAMS_OFFSET:_PARAMS_OFFSET + 4] = params.to_bytes(4, "big")
    return bytes(header)


class OmaFile:
    """An open container, read (``mode="r"``) or written (``mode="w"``) frame by frame."""

    def __init__(self, path, mode: str = "r", info: OmaInfo | None = None) -> None:
        self._file: BinaryIO
        if mode == "r":
            self._file = open(path, "rb")
            try:
                self.info = parse_header(self._file.read(HEADER_SIZE))
            except BaseException:
                self._file.close()
                raise
        elif mode == "w":
            if info is None:
                raise OmaError("stream parameters are needed to write", OmaError.VALUE)
            header = build_header(info)
            self.info = dataclasses.replace(info)
            self._file = open(path, "wb")
            try:
                self._file.write(header)
            except BaseException:
                self._file.close()
                raise
        else:
            raise ValueError(f"mode must be 'r' or 'w', got {mode!r}")
        self.mode = mode

    def read_frame(self) -> bytes | None:
        """Return the next whole frame, or None at the end of the stream."""
        size = self.info.framesize
        if size <= 0:
            raise OmaError("frame size in header is zero", OmaError.FORMAT)
        data = self._file.read(size)
        if len(data) == size:
            return data
        return None

    def write_frame(self, frame: bytes) -> None:
        """Append one frame; it must be exactly one frame size long."""
        if len(frame) != self.info.framesize:
            raise ValueError(f"frame must be {self.info.framesize} bytes, got {len(frame)}")
        self._file.write(frame)

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()

    def __enter__(self) -> OmaFile:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __iter__(self) -> Iterator[bytes]:
        while (frame := self.read_frame()) is not None:
            yield frame