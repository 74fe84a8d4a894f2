"""Encoding of input texts into integer symbol codes.

Every symbol is shifted up by one so that code 0 is free for the terminator.
The terminator is out of band: no input character can collide with it.
"""
from typing import Sequence, Union

import numpy as np

from .models import InvalidInput

TERMINATOR = 0

Text = Union[str, bytes, bytearray, Sequence[int], np.ndarray]


def encode_text(text: Text, terminator: bool = True) -> np.ndarray:
    """Return the int64 symbol codes of `text`, optionally followed by the terminator.

    Accepts str (code = ord(c) + 1), bytes (code = byte + 1) or a one-dimensional
    sequence of non-negative integers (code = value + 1).
    """
    if isinstance(text, str):
        codes = np.fromiter((ord(c) for c in text), dtype=np.int64, count=len(text))
    elif isinstance(text, (bytes, bytearray)):
        codes = np.frombuffer(bytes(text), dtype=np.uint8).astype(np.int64)
    else:
        try:
            codes = np.asarray(text, dtype=np.int64)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Unsupported text type: {type(text).__name__}") from e
        if codes.ndim != 1:
            raise InvalidInput("Integer texts must be one-dimensional")
        if codes.size and int(codes.min()) < 0:
            raise InvalidInput("Integer symbol codes must be non-negative")
    codes = codes + 1
    if terminator:
        codes = np.append(codes, np.int64(TERMINATOR))
    return codes


def compress_codes(codes: np.ndarray) -> np.ndarray:
    """Map codes to dense ranks 0..sigma-1 preserving order."""
    if codes.size == 0:
        return codes.astype(np.int64, copy=True)
    _, inverse = np.unique(codes, return_inverse=True)
    return inverse.astype(np.int64, copy=False).reshape(-1)
