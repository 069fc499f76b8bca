"""Forward and inverse MDCT built on a quarter-length complex FFT."""

from __future__ import annotations

import math
from collections.abc import Iterable

from atracdenc.fft import FFT

# Signal-to-noise ratio, in dB, expected from single precision arithmetic.
_FLOAT_SNR_DB = -114.0


def calc_eps(magnitude: float) -> float:
    """Return the tolerated error for a value of the given magnitude."""
    return magnitude * 10.0 ** (_FLOAT_SNR_DB / 20.0)


class _Transform:
    """Shared pre- and post-twiddle tables and the FFT plan."""

    def __init__(self, n: int, scale: float) -> None:
        if n < 8 or n % 8:
            raise ValueError(f"transform length must be a positive multiple of 8, got {n}")
        if scale < 0:
            raise ValueError(f"scale must not be negative, got {scale}")
        self.n = n
        factor = math.sqrt(scale / n)
        alpha = 2.0 * math.pi / (8.0 * n)
        omega = 2.0 * math.pi / n
        self._twiddles = [
            (factor * math.cos(omega * i + alpha), factor * math.sin(omega * i + alpha))
            for i in range(n // 4)
        ]
        self._fft = FFT(n // 4)

    @staticmethod
    def _samples(values: Iterable[float], expected: int) -> list[float]:
        samples = [float(v) for v in values]
        if len(samples) != expected:
            raise ValueError(f"expected {expected} values, got {len(samples)}")
        return samples


class MDCT(_Transform):
    """Modified discrete cosine transform: ``n`` samples in, ``n // 2`` coefficients out.

    With ``scale == n`` the result equals the plain sum
    ``X[k] = sum x[t] * cos(pi/M * (t + 0.5 + M/2) * (k + 0.5))`` with ``M = n // 2``;
    in general it is that sum multiplied by ``scale / n``.
    """

    def __init__(self, n: int, scale: float = 1.0) -> None:
        super().__init__(n, scale)

    def __call__(self, values: Iterable[float]) -> list[float]:
        n = self.n
        x = self._samples(values, n)
        n2, n4 = n // 2, n // 4
        n34, n54 = 3 * n4, 5 * n4

        fft_in = []
        for k, (c, s) in enumerate(self._twiddles):
            idx = 2 * k
            if idx < n4:
                r0 = x[n34 - 1 - idx] + x[n34 + idx]
                i0 = x[n4 + idx] - x[n4 - 1 - idx]
            else:
                r0 = x[n34 - 1 - idx] - x[idx - n4]
                i0 = x[n4 + idx] + x[n54 - 1 - idx]
            fft_in.append(complex(r0 * c + i0 * s, i0 * c - r0 * s))

        result = [0.0] * n2
        for k, (z, (c, s)) in enumerate(zip(self._fft(fft_in), self._twiddles)):
            idx = 2 * k
            result[idx] = -z.real * c - z.imag * s
            result[n2 - 1 - idx] = -z.real * s + z.imag * c
        return result


class IMDCT(_Transform):
    """Inverse MDCT: ``n // 2`` coefficients in, ``n`` samples out.

    With the default ``scale == n`` the result equals the plain sum
    ``y[t] = sum X[k] * cos(pi/M * (t + 0.5 + M/2) * (k + 0.5))`` with ``M = n // 2``;
    in general it is that sum multiplied by ``scale / n``.
    """

    def __init__(self, n: int, scale: float | None = None) -> None:
        super().__init__(n, (n if scale is None else scale) / 2.0)

    def __call__(self, values: Iterable[float]) -> list[float]:
        n = self.n
        n2, n4 = n // 2, n // 4
        n34, n54 = 3 * n4, 5 * n4
        x = self._samples(values, n2)

        fft_in = []
        for k, (c, s) in enumerate(self._twiddles):
            idx = 2 * k
            r0 = x[idx]
            i0 = x[n2 - 1 - idx]
            fft_in.append(complex(-2.0 * (i0 * s + r0 * c), -2.0 * (i0 * c - r0 * s)))

        result = [0.0] * n
        for k, (z, (c, s)) in enumerate(zip(self._fft(fft_in), self._twiddles)):
            idx = 2 * k
            r1 = z.real * c + z.imag * s
            i1 = z.real * s - z.imag * c
            result[n34 - 1 - idx] = r1
            result[n4 + idx] = i1
            if idx < n4:
                result[n34 + idx] = r1
                result[n4 - 1 - idx] = -i1
            else:
                result[idx - n4] = -r1
                result[n54 - 1 - idx] = i1
        return result


class DCT4x16:
    """A 16-point DCT-IV style transform taken from the middle of a 32-point IMDCT."""

    _SIZE = 16

    def __init__(self, scale: float = 1.0) -> None:
        self._imdct = IMDCT(2 * self._SIZE, 2 * self._SIZE * scale)

    def __call__(self, values: Iterable[float]) -> list[float]:
        samples = [float(v) for v in values]
        if len(samples) != self._SIZE:
            raise ValueError(f"expected {self._SIZE} values, got {len(samples)}")
        full = self._imdct(samples)
        half = self._SIZE // 2
        return [-v for v in full[half:half + self._SIZE]]