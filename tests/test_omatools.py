import pytest

from atracdenc.oma import ChannelFormat, OmaCodec, OmaFile, OmaInfo
from atracdenc.omatools import omacp_main, omainfo_main

INFO = OmaInfo(OmaCodec.ATRAC3, 384, 44100, ChannelFormat.STEREO_JS)


@pytest.fixture
def oma_path(tmp_path):
    path = tmp_path / "in.oma"
    with OmaFile(path, "w", INFO) as out:
        for i in range(3):
            out.write_frame(bytes([i + 1]) * INFO.framesize)
    return path


def test_omainfo_prints_details(oma_path, capsys):
    assert omainfo_main([str(oma_path)]) == 0
    out = capsys.readouterr().out
    assert "codec: ATRAC3," in out
    assert f"bitrate: {INFO.bitrate()}," in out
    assert "channelformat: 2 framesz: 384" in out
    assert out.startswith(str(oma_path))


def test_omainfo_no_args(capsys):
    assert omainfo_main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_omainfo_missing_file(tmp_path, capsys):
    missing = tmp_path / "missing.oma"
    assert omainfo_main([str(missing)]) == 1
    assert f"Can't open {missing}" in capsys.readouterr().err


def test_omacp_copies(oma_path, tmp_path, capsys):
    dst = tmp_path / "out.oma"
    assert omacp_main([str(oma_path), str(dst)]) == 0
    assert dst.read_bytes() == oma_path.read_bytes()
    assert "codec: ATRAC3," in capsys.readouterr().out


def test_omacp_wrong_args(capsys):
    assert omacp_main(["only-one"]) == 1
    assert "usage" in capsys.readouterr().out


def test_omacp_bad_input(tmp_path, capsys):
    src = tmp_path / "bad.oma"
    src.write_bytes(b"\x00" * 100)
    assert omacp_main([str(src), str(tmp_path / "o.oma")]) == 1
    assert "err: -3" in capsys.readouterr().err