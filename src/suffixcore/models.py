from dataclasses import dataclass, field
from typing import Dict, Hashable, List, NamedTuple, Optional


class InvalidInput(ValueError):
    """Raised for malformed arguments (wrong types, reserved sentinel, inconsistent arrays)."""


class Edge(NamedTuple):
    """Suffix tree edge. The label is text[start:start + length]; it is never copied."""
    start: int
    length: int
    child: int


@dataclass
class SuffixTreeNode:
    """Node of a suffix tree arena, keyed by integer node id."""
    children: Dict[Hashable, Edge] = field(default_factory=dict)
    suffix_index: Optional[int] = None  # start of the suffix ending here, if any

    @property
    def is_suffix(self) -> bool:
        return self.suffix_index is not None

    @property
    def is_leaf(self) -> bool:
        return not self.children


@dataclass
class RepeatedSubstrings:
    """Longest substrings occurring at least twice in a text."""
    length: int
    substrings: List[str]
    starts: List[List[int]]  # start positions per substring, in suffix array order

    def __len__(self) -> int:
        return len(self.substrings)
