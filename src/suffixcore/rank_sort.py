import numpy as np
from typing import Optional, Tuple


def counting_sort(starts: np.ndarray, ranks: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Stable counting sort of cyclic-shift records by rank.

    Record k is (starts[k], ranks[k]). Ranks must be non-negative; equal ranks
    keep their input order, which the doubling rounds rely on.

    Returns:
        (starts, ranks) reordered into non-decreasing rank order.
    """
    size = int(ranks.size)
    if size == 0:
        return starts.copy(), ranks.copy()

    count = np.bincount(ranks, minlength=int(ranks.max()) + 1)
    # end offset of each rank's block
    block_end = np.cumsum(count).tolist()

    rank_list = ranks.tolist()
    start_list = starts.tolist()
    sorted_starts = [0] * size
    sorted_ranks = [0] * size
    for k in range(size - 1, -1, -1):
        r = rank_list[k]
        block_end[r] -= 1
        sorted_starts[block_end[r]] = start_list[k]
        sorted_ranks[block_end[r]] = r

    return np.array(sorted_starts, dtype=np.int64), np.array(sorted_ranks, dtype=np.int64)


def dense_ranks(first: np.ndarray, second: Optional[np.ndarray] = None) -> np.ndarray:
    """Assign dense ranks to records already sorted by (first, second).

    A record opens a new class when either key differs from its predecessor.
    """
    n = int(first.size)
    if n == 0:
        return np.zeros(0, dtype=np.int64)
    change = np.zeros(n, dtype=np.int64)
    differs = first[1:] != first[:-1]
    if second is not None:
        differs |= second[1:] != second[:-1]
    change[1:] = differs
    return np.cumsum(change, dtype=np.int64)
