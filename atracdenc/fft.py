"""Mixed-radix complex FFT (radix 2, 3, 4, 5 and a generic radix)."""

from __future__ import annotations

import math
from collections.abc import Iterable

_MAX_FACTORS = 32


def factorize(n: int) -> list[tuple[int, int]]:
    """Split ``n`` into FFT stages.

    Returns ``(radix, remaining_length)`` pairs: powers of 4 come first, then
    powers of 2, then the remaining odd primes. The product of each radix with
    its remaining length equals the previous stage's remaining length.
    """
    if n < 1:
        raise ValueError(f"FFT length must be positive, got {n}")
    stages: list[tuple[int, int]] = []
    floor_sqrt = math.floor(math.sqrt(n))
    p = 4
    while True:
        while n % p:
            if p == 4:
                p = 2
            elif p == 2:
                p = 3
            else:
                p += 2
            if p > floor_sqrt:
                p = n
        n //= p
        stages.append((p, n))
        if n <= 1:
            break
    if len(stages) > _MAX_FACTORS:
        raise ValueError("FFT length has too many factors")
    return stages


def next_fast_size(n: int) -> int:
    """Return the smallest length >= ``n`` whose only prime factors are 2, 3 and 5."""
    if n < 1:
        raise ValueError(f"size must be positive, got {n}")
    while True:
        m = n
        for factor in (2, 3, 5):
            while m % factor == 0:
                m //= factor
        if m <= 1:
            return n
        n += 1


class FFT:
    """A planned complex FFT of a fixed length.

    The forward transform uses the kernel ``exp(-2*pi*i*k*n/N)``, the inverse
    ``exp(+2*pi*i*k*n/N)``. Neither is normalised.
    """

    def __init__(self, nfft: int, inverse: bool = False) -> None:
        if nfft < 1:
            raise ValueError(f"FFT length must be positive, got {nfft}")
        self.nfft = nfft
        self.inverse = bool(inverse)
        sign = 1.0 if self.inverse else -1.0
        self._twiddles = [
            complex(math.cos(sign * 2 * math.pi * i / nfft), math.sin(sign * 2 * math.pi * i / nfft))
            for i in range(nfft)
        ]
        self._stages = factorize(nfft)

    def __call__(self, data: Iterable[complex]) -> list[complex]:
        """Transform ``nfft`` complex samples and return the spectrum."""
        source = [complex(x) for x in data]
        if len(source) != self.nfft:
            raise ValueError(f"expected {self.nfft} samples, got {len(source)}")
        out = [0j] * self.nfft
        self._work(out, 0, source, 0, 1, 0)
        return out

    def _work(self, out: list[complex], out_off: int, src: list[complex],
              src_off: int, fstride: int, level: int) -> None:
        p, m = self._stages[level]
        if m == 1:
            for k in range(p):
                out[out_off + k] = src[src_off + k * fstride]
        else:
            for k in range(p):
                self._work(out, out_off + k * m, src, src_off + k * fstride, fstride * p, level + 1)

        if p == 2:
            self._butterfly2(out, out_off, fstride, m)
        elif p == 3:
            self._butterfly3(out, out_off, fstride, m)
        elif p == 4:
            self._butterfly4(out, out_off, fstride, m)
        elif p == 5:
            self._butterfly5(out, out_off, fstride, m)
        else:
            self._butterfly_generic(out, out_off, fstride, m, p)

    def _butterfly2(self, f: list[complex], off: int, fstride: int, m: int) -> None:
        tw = self._twiddles
        for k in range(m):
            a = off + k
            b = a + m
            t = f[b] * tw[k * fstride]
            f[b] = f[a] - t
            f[a] += t

    def _butterfly3(self, f: list[complex], off: int, fstride: int, m: int) -> None:
        tw = self._twiddles
        epi3 = tw[fstride * m].imag
        for k in range(m):
            i0 = off + k
            i1 = i0 + m
            i2 = i1 + m
            s1 = f[i1] * tw[k * fstride]
            s2 = f[i2] * tw[2 * k * fstride]
            s3 = s1 + s2
            s0 = (s1 - s2) * epi3
            mid = f[i0] - s3 * 0.5
            f[i0] += s3
            f[i2] = mid - 1j * s0
            f[i1] = mid + 1j * s0

    def _butterfly4(self, f: list[complex], off: int, fstride: int, m: int) -> None:
        tw = self._twiddles
        for k in range(m):
            i0 = off + k
            i1 = i0 + m
            i2 = i1 + m
            i3 = i2 + m
            s0 = f[i1] * tw[k * fstride]
            s1 = f[i2] * tw[2 * k * fstride]
            s2 = f[i3] * tw[3 * k * fstride]
            s5 = f[i0] - s1
            f[i0] += s1
            s3 = s0 + s2
            s4 = s0 - s2
            f[i2] = f[i0] - s3
            f[i0] += s3
            if self.inverse:
                f[i1] = s5 + 1j * s4
                f[i3] = s5 - 1j * s4
            else:
                f[i1] = s5 - 1j * s4
                f[i3] = s5 + 1j * s4

    def _butterfly5(self, f: list[complex], off: int, fstride: int, m: int) -> None:
        tw = self._twiddles
        ya = tw[fstride * m]
        yb = tw[fstride * 2 * m]
        for u in range(m):
            i0 = off + u
            i1 = i0 + m
            i2 = i1 + m
            i3 = i2 + m
            i4 = i3 + m
            s0 = f[i0]
            s1 = f[i1] * tw[u * fstride]
            s2 = f[i2] * tw[2 * u * fstride]
            s3 = f[i3] * tw[3 * u * fstride]
            s4 = f[i4] * tw[4 * u * fstride]

            s7 = s1 + s4
            s10 = s1 - s4
            s8 = s2 + s3
            s9 = s2 - s3

            f[i0] = s0 + s7 + s8

            s5 = s0 + s7 * ya.real + s8 * yb.real
            s6 = -1j * (s10 * ya.imag + s9 * yb.imag)
            f[i1] = s5 - s6
            f[i4] = s5 + s6

            s11 = s0 + s7 * yb.real + s8 * ya.real
            s12 = 1j * (s10 * yb.imag - s9 * ya.imag)
            f[i2] = s11 + s12
            f[i3] = s11 - s12

    def _butterfly_generic(self, f: list[complex], off: int, fstride: int, m: int, p: int) -> None:
        tw = self._twiddles
        n = self.nfft
        for u in range(m):
            scratch = [f[off + u + q * m] for q in range(p)]
            for q1 in range(p):
                k = u + q1 * m
                acc = scratch[0]
                twidx = 0
                for q in range(1, p):
                    twidx += fstride * k
                    if twidx >= n:
                        twidx -= n
                    acc += scratch[q] * tw[twidx]
                f[off + k] = acc