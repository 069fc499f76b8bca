import pytest

from atracdenc.oma import (
    HEADER_SIZE,
    ChannelFormat,
    OmaCodec,
    OmaError,
    OmaFile,
    OmaInfo,
    build_header,
    parse_header,
)

LP2 = OmaInfo(OmaCodec.ATRAC3, 384, 44100, ChannelFormat.STEREO)


def test_header_fixed_fields():
    header = build_header(LP2)
    assert len(header) == HEADER_SIZE
    assert header[:8] == b"EA3\x01\x00\x60\xff\xff"


def test_header_params_bytes():
    header = build_header(LP2)
    assert header[32:36] == bytes([0x00, 0x00, 0x20, 0x30])


@pytest.mark.parametrize("fmt", [ChannelFormat.STEREO, ChannelFormat.STEREO_JS])
@pytest.mark.parametrize("rate", [32000, 44100, 48000, 88200, 96000])
def test_atrac3_round_trip(fmt, rate):
    info = OmaInfo(OmaCodec.ATRAC3, 192, rate, fmt)
    assert parse_header(build_header(info)) == info


@pytest.mark.parametrize("fmt", [
    ChannelFormat.MONO, ChannelFormat.STEREO, ChannelFormat.CHANNELS_3,
    ChannelFormat.CHANNELS_4, ChannelFormat.CHANNELS_6, ChannelFormat.CHANNELS_7,
    ChannelFormat.CHANNELS_8,
])
def test_atrac3plus_round_trip(fmt):
    info = OmaInfo(OmaCodec.ATRAC3PLUS, 1488, 44100, fmt)
    assert parse_header(build_header(info)) == info


def test_bad_magic():
    header = bytearray(build_header(LP2))
    header[0:3] = b"XYZ"
    with pytest.raises(OmaError) as exc:
        parse_header(bytes(header))
    assert exc.value.code == OmaError.FORMAT


def test_encrypted():
    header = bytearray(build_header(LP2))
    header[6] = 0
    with pytest.raises(OmaError) as exc:
        parse_header(bytes(header))
    assert exc.value.code == OmaError.ENCRYPTED


def test_unsupported_codec():
    header = bytearray(build_header(LP2))
    header[32] = OmaCodec.MP3
    with pytest.raises(OmaError) as exc:
        parse_header(bytes(header))
    assert exc.value.code == OmaError.FORMAT


def test_truncated_header():
    with pytest.raises(OmaError) as exc:
        parse_header(build_header(LP2)[:50])
    assert exc.value.code == OmaError.FORMAT


def test_plus_channel_id_zero():
    info = OmaInfo(OmaCodec.ATRAC3PLUS, 1488, 44100, ChannelFormat.STEREO)
    header = bytearray(build_header(info))
    header[34] &= ~0x1C & 0xFF
    with pytest.raises(OmaError) as exc:
        parse_header(bytes(header))
    assert exc.value.code == OmaError.FORMAT


def test_bad_samplerate_index_in_header():
    header = bytearray(build_header(LP2))
    header[34] |= 0xE0
    with pytest.raises(OmaError) as exc:
        parse_header(bytes(header))
    assert exc.value.code == OmaError.FORMAT


def test_atrac3_mono_rejected():
    with pytest.raises(OmaError) as exc:
        build_header(OmaInfo(OmaCodec.ATRAC3, 384, 44100, ChannelFormat.MONO))
    assert exc.value.code == OmaError.VALUE


@pytest.mark.parametrize("rate", [0, -1, 22050])
def test_bad_samplerate_rejected(rate):
    with pytest.raises(OmaError) as exc:
        build_header(OmaInfo(OmaCodec.ATRAC3, 384, rate, ChannelFormat.STEREO))
    assert exc.value.code == OmaError.VALUE


def test_frame_too_large_rejected():
    with pytest.raises(OmaError):
        build_header(OmaInfo(OmaCodec.ATRAC3, 8 * 1024, 44100, ChannelFormat.STEREO))


def test_other_codec_not_writable():
    with pytest.raises(OmaError):
        build_header(OmaInfo(OmaCodec.LPCM, 384, 44100, ChannelFormat.STEREO))


def test_codec_names():
    assert LP2.codec_name() == "ATRAC3"
    assert OmaInfo(OmaCodec.ATRAC3PLUS, 8, 44100, ChannelFormat.MONO).codec_name() == "ATRAC3PLUS"
    assert OmaInfo(OmaCodec.WMA, 8, 44100, ChannelFormat.MONO).codec_name() == "OMAC_ID_WMA"
    assert OmaInfo(OmaCodec.MP3, 8, 44100, ChannelFormat.MONO).codec_name() == "MPEG1LAYER3"


def test_bitrate_atrac3():
    assert LP2.bitrate() == 132300


def test_bitrate_plus_is_half():
    plus = OmaInfo(OmaCodec.ATRAC3PLUS, 384, 44100, ChannelFormat.STEREO)
    assert plus.bitrate() * 2 == LP2.bitrate()


def test_bitrate_unknown_codec():
    with pytest.raises(ValueError):
        OmaInfo(OmaCodec.MP3, 384, 44100, ChannelFormat.STEREO).bitrate()


def test_file_round_trip(tmp_path):
    path = tmp_path / "a.oma"
    frames = [bytes([i]) * LP2.framesize for i in range(5)]
    with OmaFile(path, "w", LP2) as out:
        for frame in frames:
            out.write_frame(frame)
    assert path.stat().st_size == HEADER_SIZE + 5 * LP2.framesize
    with OmaFile(path, "r") as inp:
        assert inp.info == LP2
        assert list(inp) == frames


def test_partial_trailing_frame_dropped(tmp_path):
    path = tmp_path / "a.oma"
    with OmaFile(path, "w", LP2) as out:
        out.write_frame(b"\x01" * LP2.framesize)
    with open(path, "ab") as raw:
        raw.write(b"\x02" * 10)
    with OmaFile(path) as inp:
        assert inp.read_frame() == b"\x01" * LP2.framesize
        assert inp.read_frame() is None


def test_write_without_info(tmp_path):
    with pytest.raises(OmaError) as exc:
        OmaFile(tmp_path / "a.oma", "w")
    assert exc.value.code == OmaError.VALUE


def test_write_wrong_frame_length(tmp_path):
    with OmaFile(tmp_path / "a.oma", "w", LP2) as out:
        with pytest.raises(ValueError):
            out.write_frame(b"\x00" * 10)


def test_read_non_oma_file(tmp_path):
    path = tmp_path / "x.oma"
    path.write_bytes(b"\x00" * 200)
    with pytest.raises(OmaError) as exc:
        OmaFile(path, "r")
    assert exc.value.code == OmaError.FORMAT


def test_bad_mode(tmp_path):
    with pytest.raises(ValueError):
        OmaFile(tmp_path / "a.oma", "x", LP2)