from .applications import longest_common_substrings, longest_repeated_substrings
from .bwt import BWTMatcher, bwt_find, bwt_invert, bwt_invert_slow, bwt_transform
from .index import SuffixIndex
from .lcp import build_lcp_array
from .models import Edge, InvalidInput, RepeatedSubstrings, SuffixTreeNode
from .suffix_array import build_suffix_array
from .suffix_tree import SuffixTree, build_suffix_tree

__version__ = "0.1.0"
