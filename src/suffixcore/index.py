import time
from typing import List, Optional, Set

import numpy as np

from .alphabet import Text
from .applications import longest_repeated_substrings
from .bwt import DEFAULT_SENTINEL, BWTMatcher, bwt_transform
from .lcp import build_lcp_array
from .models import RepeatedSubstrings
from .suffix_array import build_suffix_array
from .suffix_tree import SuffixTree


class SuffixIndex:
    """Suffix array of one static text plus the structures derived from it.

    The suffix array is built eagerly; the LCP array, suffix tree, transform and
    matcher are built on first use and cached. Nothing is updated in place: a
    new text needs a new index.
    """

    def __init__(self, text: Text, sentinel: str = DEFAULT_SENTINEL,
                 method: str = "doubling", show_progress: bool = False,
                 label: str = "text"):
        """
        Args:
            text: text to index (str for BWT operations; bytes or integer codes otherwise)
            sentinel: character standing for the terminator in the transform
            method: suffix array construction method ("doubling" or "lexsort")
            show_progress: print build stages and timings
            label: name shown in progress messages (e.g. a FASTA record id)
        """
        self.text = text
        self.n = len(text)
        self.sentinel = sentinel
        self.show_progress = show_progress
        self.label = label

        self._lcp_array: Optional[np.ndarray] = None
        self._suffix_tree: Optional[SuffixTree] = None
        self._transform: Optional[str] = None
        self._matcher: Optional[BWTMatcher] = None

        t0 = time.time()
        self.suffix_array = build_suffix_array(text, method=method)
        self._report("Suffix array", t0)

    def _report(self, stage: str, t0: float) -> None:
        if self.show_progress:
            print(f"  [{self.label}] {stage} built in {time.time() - t0:.2f}s ({self.n:,} symbols)", flush=True)

    @property
    def lcp_array(self) -> np.ndarray:
        if self._lcp_array is None:
            t0 = time.time()
            self._lcp_array = build_lcp_array(self.text, self.suffix_array)
            self._report("LCP array", t0)
        return self._lcp_array

    @property
    def suffix_tree(self) -> SuffixTree:
        if self._suffix_tree is None:
            lcp = self.lcp_array
            t0 = time.time()
            self._suffix_tree = SuffixTree(self.text, self.suffix_array, lcp)
            self._report("Suffix tree", t0)
        return self._suffix_tree

    @property
    def transform(self) -> str:
        if self._transform is None:
            t0 = time.time()
            self._transform = bwt_transform(self.text, self.suffix_array, self.sentinel)
            self._report("BWT", t0)
        return self._transform

    @property
    def matcher(self) -> BWTMatcher:
        if self._matcher is None:
            transform = self.transform
            t0 = time.time()
            self._matcher = BWTMatcher(transform, self.suffix_array, self.sentinel)
            self._report("First-column tables", t0)
        return self._matcher

    def find(self, pattern: str) -> Set[int]:
        return self.matcher.find(pattern)

    def count(self, pattern: str) -> int:
        return self.matcher.count(pattern)

    def locate(self, pattern: str) -> List[int]:
        return self.matcher.locate(pattern)

    def longest_repeats(self) -> RepeatedSubstrings:
        return longest_repeated_substrings(self.text, self.suffix_array, self.lcp_array)

    def clear(self):
        """Release the derived structures so the GC can reclaim them."""
        self.suffix_array = np.array([], dtype=np.int64)
        self._lcp_array = None
        self._suffix_tree = None
        self._transform = None
        self._matcher = None
        self.text = ""
        self.n = 0
