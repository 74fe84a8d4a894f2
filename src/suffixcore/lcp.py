import numpy as np

from .alphabet import Text, encode_text
from .models import InvalidInput
from .suffix_array import inverse_suffix_array


def _kasai(codes: list, sa: list, rank: list) -> np.ndarray:
    n = len(codes)
    lcp = np.zeros(max(n - 1, 0), dtype=np.int64)
    h = 0
    for i in range(n):
        r = rank[i]
        if r > 0:
            j = sa[r - 1]
            while i + h < n and j + h < n and codes[i + h] == codes[j + h]:
                h += 1
            lcp[r - 1] = h
            # suffix i + 1 shares at least h - 1 characters with its predecessor
            if h > 0:
                h -= 1
    return lcp


def build_lcp_array(text: Text, suffix_array) -> np.ndarray:
    """Longest common prefixes of lexicographically adjacent suffixes (Kasai et al.).

    Start indices are visited in text order, not suffix array order, so the
    matched-character count carries over and total work stays linear.

    Args:
        text: the indexed text (str, bytes or integer codes)
        suffix_array: its suffix array

    Returns:
        int64 array of length n - 1; entry i is the LCP of suffixes
        suffix_array[i] and suffix_array[i + 1].
    """
    codes = encode_text(text, terminator=False)
    sa = np.asarray(suffix_array, dtype=np.int64)
    if sa.ndim != 1 or sa.size != codes.size:
        raise InvalidInput(f"Suffix array has {sa.size} entries for a text of length {codes.size}")
    rank = inverse_suffix_array(sa)
    return _kasai(codes.tolist(), sa.tolist(), rank.tolist())
