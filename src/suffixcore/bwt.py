import numpy as np
from typing import List, Set, Tuple

from .models import InvalidInput
from .suffix_array import build_suffix_array

DEFAULT_SENTINEL = '$'


def _check_sentinel(sentinel: str) -> None:
    if not isinstance(sentinel, str) or len(sentinel) != 1:
        raise InvalidInput(f"Sentinel must be a single character, got {sentinel!r}")


def _encode_transform(transform: str, sentinel: str) -> np.ndarray:
    """Symbol codes of a transform, with the sentinel mapped below every other character."""
    if not isinstance(transform, str):
        raise InvalidInput(f"Transform must be a str, got {type(transform).__name__}")
    _check_sentinel(sentinel)
    if transform.count(sentinel) != 1:
        raise InvalidInput(f"Transform must contain the sentinel {sentinel!r} exactly once")
    codes = np.fromiter((ord(c) + 1 for c in transform), dtype=np.int64, count=len(transform))
    codes[transform.index(sentinel)] = 0
    return codes


def first_column_tables(codes: np.ndarray) -> Tuple[dict, np.ndarray]:
    """First-last correspondence tables for a transform.

    Returns:
        (first_column_start, occurrence): first_column_start[c] is the row where
        symbol c's block starts in the sorted first column; occurrence[i] is the
        number of times codes[i] occurs in codes[0:i].
    """
    totals: dict = {}
    occurrence = np.zeros(codes.size, dtype=np.int64)
    for i, code in enumerate(codes.tolist()):
        seen = totals.get(code, 0)
        occurrence[i] = seen
        totals[code] = seen + 1

    first_column_start = {}
    cumulative = 0
    for code in sorted(totals):
        first_column_start[code] = cumulative
        cumulative += totals[code]
    return first_column_start, occurrence


def _last_to_first(codes: np.ndarray) -> np.ndarray:
    """Row in the first column holding the same character occurrence as each last-column row."""
    first_column_start, occurrence = first_column_tables(codes)
    starts = np.array([first_column_start[c] for c in codes.tolist()], dtype=np.int64)
    return starts + occurrence


def bwt_transform(text: str, suffix_array=None, sentinel: str = DEFAULT_SENTINEL) -> str:
    """Burrows-Wheeler transform of `text` terminated by `sentinel`.

    The transform is the last column of the sorted rotations of text + sentinel,
    so it is one character longer than the text.

    Args:
        text: input text; must not contain the sentinel
        suffix_array: suffix array of `text`, computed when omitted
        sentinel: character standing for the terminator
    """
    if not isinstance(text, str):
        raise InvalidInput(f"BWT input must be a str, got {type(text).__name__}")
    _check_sentinel(sentinel)
    if sentinel in text:
        raise InvalidInput(f"Text contains the reserved sentinel {sentinel!r}")
    if suffix_array is None:
        suffix_array = build_suffix_array(text)
    sa = np.asarray(suffix_array, dtype=np.int64)
    n = len(text)
    if sa.size != n:
        raise InvalidInput(f"Suffix array has {sa.size} entries for a text of length {n}")

    # the terminator rotation sorts first
    rows = np.concatenate((np.array([n], dtype=np.int64), sa))
    augmented = text + sentinel
    prev_idx = (rows - 1) % (n + 1)
    return ''.join(augmented[i] for i in prev_idx.tolist())


def bwt_invert(transform: str, sentinel: str = DEFAULT_SENTINEL) -> str:
    """Rebuild the text from its transform without the suffix array.

    Starts from row 0 (the rotation beginning with the terminator, whose last
    character is the text's last character) and follows the last-to-first
    mapping, filling the text from the back.
    """
    codes = _encode_transform(transform, sentinel)
    lf = _last_to_first(codes).tolist()
    n = len(transform) - 1
    result = [''] * n
    row = 0
    for i in range(n - 1, -1, -1):
        result[i] = transform[row]
        row = lf[row]
    return ''.join(result)


def bwt_invert_slow(transform: str, sentinel: str = DEFAULT_SENTINEL) -> str:
    """Reference inversion by rebuilding every sorted rotation column by column.

    O(n^3 log n); for cross-checking bwt_invert only.
    """
    codes = _encode_transform(transform, sentinel).tolist()
    m = len(codes)
    rotations: List[tuple] = [()] * m
    for _ in range(m):
        rotations = sorted((codes[i],) + rotations[i] for i in range(m))
    for rotation in rotations:
        if rotation[-1] == 0:
            return ''.join(chr(c - 1) for c in rotation[:-1])
    raise InvalidInput("Transform has no rotation ending with the sentinel")


class BWTMatcher:
    """Substring search over a Burrows-Wheeler transform.

    Keeps the transform, the suffix array rows and the last-to-first mapping;
    the text itself is never consulted.
    """

    def __init__(self, transform: str, suffix_array, sentinel: str = DEFAULT_SENTINEL):
        """
        Args:
            transform: output of bwt_transform
            suffix_array: suffix array of the original text (length len(transform) - 1)
            sentinel: the transform's terminator character
        """
        codes = _encode_transform(transform, sentinel)
        sa = np.asarray(suffix_array, dtype=np.int64)
        n = len(transform) - 1
        if sa.size != n:
            raise InvalidInput(f"Suffix array has {sa.size} entries for a transform of length {len(transform)}")

        self.transform = transform
        self.sentinel = sentinel
        self.n = n
        self.rows = np.concatenate((np.array([n], dtype=np.int64), sa))
        self.first_column_start, self.occurrence = first_column_tables(codes)
        self._codes = codes.tolist()

    @classmethod
    def from_text(cls, text: str, sentinel: str = DEFAULT_SENTINEL) -> "BWTMatcher":
        sa = build_suffix_array(text)
        return cls(bwt_transform(text, sa, sentinel), sa, sentinel)

    def _first_column_index(self, row: int) -> int:
        return self.first_column_start[self._codes[row]] + int(self.occurrence[row])

    def match_range(self, pattern: str) -> Tuple[int, int]:
        """Rows of the sorted rotations that start with `pattern`.

        Returns:
            Inclusive (bottom, top); top < bottom when there is no match.
        """
        if not isinstance(pattern, str):
            raise InvalidInput(f"Pattern must be a str, got {type(pattern).__name__}")
        if self.sentinel in pattern:
            raise InvalidInput(f"Pattern contains the reserved sentinel {self.sentinel!r}")
        if not pattern:
            return (0, -1)

        transform = self.transform
        bottom, top = 0, len(transform) - 1
        for char in reversed(pattern):
            while top >= bottom and transform[top] != char:
                top -= 1
            while bottom <= top and transform[bottom] != char:
                bottom += 1
            if top < bottom:
                return (0, -1)
            top = self._first_column_index(top)
            bottom = self._first_column_index(bottom)
        return (bottom, top)

    def count(self, pattern: str) -> int:
        bottom, top = self.match_range(pattern)
        return max(0, top - bottom + 1)

    def find(self, pattern: str) -> Set[int]:
        bottom, top = self.match_range(pattern)
        if top < bottom:
            return set()
        return set(self.rows[bottom:top + 1].tolist())

    def locate(self, pattern: str) -> List[int]:
        """Sorted start positions of `pattern`."""
        return sorted(self.find(pattern))


def bwt_find(text: str, pattern: str, sentinel: str = DEFAULT_SENTINEL) -> Set[int]:
    """Start positions of `pattern` in `text`, searched over the text's transform.

    An empty pattern or a pattern that does not occur gives an empty set.
    """
    if not isinstance(pattern, str):
        raise InvalidInput(f"Pattern must be a str, got {type(pattern).__name__}")
    _check_sentinel(sentinel)
    if sentinel in pattern:
        raise InvalidInput(f"Pattern contains the reserved sentinel {sentinel!r}")
    return BWTMatcher.from_text(text, sentinel).find(pattern)
