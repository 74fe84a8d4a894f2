from collections import deque
from typing import List, Sequence, Set

import numpy as np

from .alphabet import Text
from .lcp import build_lcp_array
from .models import InvalidInput, RepeatedSubstrings
from .suffix_array import build_suffix_array


def longest_repeated_substrings(text: Text, suffix_array=None, lcp_array=None) -> RepeatedSubstrings:
    """Longest substrings that occur at least twice in `text`.

    Their length is the largest LCP value. Each maximal run of that value in
    the LCP array covers the occurrences of one distinct substring.

    Args:
        text: the indexed text
        suffix_array: suffix array of `text`, computed when omitted
        lcp_array: LCP array of `text`, computed when omitted

    Returns:
        RepeatedSubstrings with the common length, the substrings and the start
        positions of each; empty when no substring repeats.
    """
    sa = build_suffix_array(text) if suffix_array is None else np.asarray(suffix_array, dtype=np.int64)
    lcp = build_lcp_array(text, sa) if lcp_array is None else np.asarray(lcp_array, dtype=np.int64)
    length = int(lcp.max()) if lcp.size else 0
    if length == 0:
        return RepeatedSubstrings(0, [], [])

    sa_list = sa.tolist()
    lcp_list = lcp.tolist()
    starts: List[List[int]] = []
    for i, value in enumerate(lcp_list):
        if value != length:
            continue
        if i == 0 or lcp_list[i - 1] != length:
            starts.append([sa_list[i]])
        starts[-1].append(sa_list[i + 1])

    substrings = [text[group[0]:group[0] + length] for group in starts]
    return RepeatedSubstrings(length, substrings, starts)


def longest_common_substrings(strings: Sequence[str], min_strings: int = 2) -> Set[str]:
    """Longest substrings shared by at least `min_strings` of `strings`.

    The strings are joined with distinct separator codes smaller than every
    character, so no common prefix runs across a separator. A window slides
    over the suffix array of the joined text; whenever it covers suffixes from
    at least `min_strings` strings, the minimum LCP inside it is the length of a
    common substring.
    """
    strings = list(strings)
    k = len(strings)
    if not all(isinstance(s, str) for s in strings):
        raise InvalidInput("Common substrings are computed over str inputs only")
    if k == 0 or not 1 <= min_strings <= k:
        raise InvalidInput(f"min_strings must be between 1 and {k}, got {min_strings}")

    if min_strings == 1:
        longest = max(len(s) for s in strings)
        return {s for s in strings if len(s) == longest and longest > 0}

    codes: List[int] = []
    owner: List[int] = []
    offsets: List[int] = []
    for color, s in enumerate(strings):
        offsets.append(len(codes))
        codes.extend(ord(c) + k for c in s)
        codes.append(color)  # separator, unique per string
        owner.extend([color] * (len(s) + 1))

    sa = build_suffix_array(codes).tolist()
    lcp = build_lcp_array(codes, sa).tolist()
    colors = [owner[p] for p in sa]

    result: Set[str] = set()
    best = 0
    seen = [0] * k
    distinct = 0
    window: deque = deque()  # lcp indices with increasing values; front is the window minimum

    # the first k suffixes start with separators
    lo = k
    for hi in range(k, len(sa)):
        color = colors[hi]
        seen[color] += 1
        if seen[color] == 1:
            distinct += 1
        if hi > k:
            j = hi - 1
            while window and lcp[window[-1]] >= lcp[j]:
                window.pop()
            window.append(j)

        while distinct >= min_strings and (seen[colors[lo]] > 1 or distinct > min_strings):
            seen[colors[lo]] -= 1
            if seen[colors[lo]] == 0:
                distinct -= 1
            lo += 1
            while window and window[0] < lo:
                window.popleft()

        if distinct < min_strings or not window:
            continue
        length = lcp[window[0]]
        if length == 0 or length < best:
            continue
        if length > best:
            best = length
            result = set()
        start = sa[lo]
        color = owner[start]
        offset = start - offsets[color]
        result.add(strings[color][offset:offset + length])
    return result
