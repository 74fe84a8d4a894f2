import numpy as np
from typing import Tuple

from .alphabet import Text, compress_codes, encode_text
from .models import InvalidInput
from .rank_sort import counting_sort, dense_ranks

METHODS = ("doubling", "lexsort")


def _initial_shifts(codes: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Sort single-character shifts and rank them densely.

    The terminator has the smallest code, so its shift alone gets rank 0.
    """
    keys = compress_codes(codes)
    starts = np.arange(codes.size, dtype=np.int64)
    starts, keys = counting_sort(starts, keys)
    return starts, dense_ranks(keys)


def _doubling_round(starts: np.ndarray, ranks: np.ndarray,
                    length: int) -> Tuple[np.ndarray, np.ndarray]:
    """Extend the comparison length of sorted shifts from `length` to 2 * `length`.

    Args:
        starts: shift starts sorted by their first `length` characters
        ranks: dense ranks aligned with `starts`
        length: current comparison length

    Returns:
        New (starts, ranks) buffers; the inputs are left untouched.
    """
    m = starts.size
    rank_of = np.empty(m, dtype=np.int64)
    rank_of[starts] = ranks

    # Moving every start back by `length` turns the sorted order into an
    # order by second half; the stable sort by first half completes the pair.
    shifted = (starts - length) % m
    new_starts, first_half = counting_sort(shifted, rank_of[shifted])
    second_half = rank_of[(new_starts + length) % m]
    return new_starts, dense_ranks(first_half, second_half)


def _lexsort_round(starts: np.ndarray, ranks: np.ndarray,
                   length: int) -> Tuple[np.ndarray, np.ndarray]:
    """Same step as `_doubling_round`, ordering the rank pairs with one np.lexsort."""
    m = starts.size
    rank_of = np.empty(m, dtype=np.int64)
    rank_of[starts] = ranks
    second_of = rank_of[(np.arange(m, dtype=np.int64) + length) % m]
    new_starts = np.lexsort((second_of, rank_of)).astype(np.int64, copy=False)
    return new_starts, dense_ranks(rank_of[new_starts], second_of[new_starts])


_ROUNDS = {"doubling": _doubling_round, "lexsort": _lexsort_round}


def _prefix_doubling(codes: np.ndarray, method: str) -> np.ndarray:
    step = _ROUNDS[method]
    m = codes.size
    starts, ranks = _initial_shifts(codes)
    length = 1
    while ranks[-1] != m - 1 and length < m:
        starts, ranks = step(starts, ranks, length)
        length <<= 1
    if starts[0] != m - 1:
        raise InvalidInput("Terminator shift did not sort first")
    return starts[1:]


def build_suffix_array(text: Text, method: str = "doubling") -> np.ndarray:
    """Build the suffix array of `text`.

    Args:
        text: str, bytes or a sequence of non-negative integer codes
        method: "doubling" (counting-sort prefix doubling) or "lexsort"
            (vectorized prefix doubling)

    Returns:
        int64 array of suffix start positions in ascending lexicographic order.
    """
    if method not in METHODS:
        raise InvalidInput(f"Unknown suffix array method {method!r}; expected one of {METHODS}")
    return _prefix_doubling(encode_text(text), method)


def inverse_suffix_array(suffix_array: np.ndarray) -> np.ndarray:
    """Rank of every suffix by start index, validating that the input is a permutation."""
    sa = np.asarray(suffix_array, dtype=np.int64)
    n = sa.size
    if n and (int(sa.min()) < 0 or int(sa.max()) >= n):
        raise InvalidInput("Suffix array entries out of range")
    rank = np.full(n, -1, dtype=np.int64)
    rank[sa] = np.arange(n, dtype=np.int64)
    if n and int(rank.min()) < 0:
        raise InvalidInput("Suffix array is not a permutation")
    return rank
