"""Command-line tools to inspect and copy OMA containers."""

from __future__ import annotations

import sys

from atracdenc.oma import OmaError, OmaFile


def _error_code(exc: Exception) -> int:
    return exc.code if isinstance(exc, OmaError) else OmaError.IO


def omainfo_main(argv=None) -> int:
    """Print codec, bit rate, channel format and frame size of each named file."""
    paths = sys.argv[1:] if argv is None else list(argv)
    if not paths:
        print("usage: \n\t omainfo [filename]")
        return 1
    status = 0
    for path in paths:
        try:
            with OmaFile(path, "r") as oma:
                info = oma.info
        except (OSError, OmaError):
            print(f"Can't open {path}", file=sys.stderr)
            status = 1
            continue
        print(
            f"{path} codec: {info.codec_name()}, bitrate: {info.bitrate()}, "
            f"channelformat: {int(info.channel_format)} framesz: {info.framesize}"
        )
    return status


def omacp_main(argv=None) -> int:
    """Copy the frames of one container into a new container."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("usage: \n\t omacp [in] [out]")
        return 1
    src, dst = args
    try:
        infile = OmaFile(src, "r")
    except (OSError, OmaError) as exc:
        print(f"Can't open {src} to read, err: {_error_code(exc)}", file=sys.stderr)
        return 1
    with infile:
        info = infile.info
        print(
            f"codec: {info.codec_name()}, bitrate: {info.bitrate()}, "
            f"channel format: {int(info.channel_format)}"
        )
        try:
            outfile = OmaFile(dst, "w", info)
        except (OSError, OmaError) as exc:
            print(f"Can't open {dst} to write, err: {_error_code(exc)}", file=sys.stderr)
            return 1
        with outfile:
            try:
                for frame in infile:
                    outfile.write_frame(frame)
            except OSError:
                print("write error", file=sys.stderr)
                return 1
    return 0