"""Bit streams, FFT, MDCT, OMA container support and helpers for ATRAC audio coding."""

__version__ = "0.1.0"