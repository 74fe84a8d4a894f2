"""Suffix tree construction from a suffix array and its LCP array.

Suffixes are inserted in suffix array order. The path of the previously
inserted suffix is kept on an explicit stack of (node id, depth) pairs, where
depth counts characters from the root. Each new suffix diverges from the
previous one at depth LCP, so the builder only ever walks up that path, splits
the last edge it left, and hangs a new leaf there.
"""
from typing import Dict, Iterator, List, Optional, Set, Tuple

import numpy as np

from .alphabet import Text
from .models import Edge, InvalidInput, SuffixTreeNode


class SuffixTree:
    """Path-compressed trie of all suffixes of a text, stored as a node arena."""

    ROOT = 0

    def __init__(self, text: Text, suffix_array, lcp_array):
        if isinstance(text, np.ndarray):
            text = text.tolist()
        self.text = text
        self.n = len(text)
        self.nodes: List[SuffixTreeNode] = [SuffixTreeNode()]

        sa = np.asarray(suffix_array, dtype=np.int64).tolist()
        lcp = np.asarray(lcp_array, dtype=np.int64).tolist()
        if len(sa) != self.n:
            raise InvalidInput(f"Suffix array has {len(sa)} entries for a text of length {self.n}")
        if len(lcp) != max(self.n - 1, 0):
            raise InvalidInput(f"LCP array has {len(lcp)} entries, expected {max(self.n - 1, 0)}")
        self._build(sa, lcp)

    def _new_node(self, suffix_index: Optional[int] = None) -> int:
        self.nodes.append(SuffixTreeNode(suffix_index=suffix_index))
        return len(self.nodes) - 1

    def _build(self, sa: List[int], lcp: List[int]) -> None:
        n = self.n
        text = self.text
        stack: List[Tuple[int, int]] = [(self.ROOT, 0)]

        for r, start in enumerate(sa):
            if r == 0:
                target = 0
            else:
                target = lcp[r - 1]
                prev = sa[r - 1]
                if not 0 <= target <= n - max(prev, start):
                    raise InvalidInput(f"LCP value {target} out of range at rank {r}")

            while stack[-1][1] > target:
                stack.pop()
            node, depth = stack[-1]

            if depth < target:
                # split the edge the previous suffix took out of `node`
                key = text[sa[r - 1] + depth]
                edge = self.nodes[node].children[key]
                head = target - depth
                middle = self._new_node()
                self.nodes[node].children[key] = Edge(edge.start, head, middle)
                self.nodes[middle].children[text[edge.start + head]] = Edge(
                    edge.start + head, edge.length - head, edge.child)
                stack.append((middle, target))
                node, depth = middle, target

            edge_start = start + depth
            length = n - edge_start
            if length <= 0:
                raise InvalidInput(f"Suffix {start} is exhausted by its common prefix; duplicate suffix?")
            key = text[edge_start]
            if key in self.nodes[node].children:
                raise InvalidInput(f"Suffix {start} diverges on an existing edge; LCP array inconsistent")
            leaf = self._new_node(suffix_index=start)
            self.nodes[node].children[key] = Edge(edge_start, length, leaf)
            stack.append((leaf, n - start))

    @property
    def root(self) -> SuffixTreeNode:
        return self.nodes[self.ROOT]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def leaf_count(self) -> int:
        return sum(1 for node in self.nodes if node.is_leaf)

    def edge_label(self, edge: Edge):
        return self.text[edge.start:edge.start + edge.length]

    def iter_edges(self, node_id: int = ROOT) -> Iterator[Tuple[int, int, Edge]]:
        """Depth-first (lexicographic) walk yielding (parent id, depth, edge)."""
        pending = [(node_id, 0, edge) for edge in reversed(list(self.nodes[node_id].children.values()))]
        while pending:
            parent, depth, edge = pending.pop()
            yield parent, depth, edge
            children = self.nodes[edge.child].children.values()
            pending.extend((edge.child, depth + 1, e) for e in reversed(list(children)))

    def suffix_termini(self) -> Dict[int, int]:
        """Map suffix start index -> id of the node where that suffix ends."""
        return {node.suffix_index: node_id for node_id, node in enumerate(self.nodes)
                if node.suffix_index is not None}

    def _descend(self, pattern) -> Optional[Tuple[int, int]]:
        """Follow `pattern` from the root.

        Returns:
            (node id, characters left on the edge into it) for the node at or
            just below the end of the pattern, or None when the pattern leaves
            the tree.
        """
        node_id = self.ROOT
        i = 0
        m = len(pattern)
        while i < m:
            edge = self.nodes[node_id].children.get(pattern[i])
            if edge is None:
                return None
            span = min(edge.length, m - i)
            for k in range(1, span):
                if self.text[edge.start + k] != pattern[i + k]:
                    return None
            i += span
            node_id = edge.child
            if i == m:
                return node_id, edge.length - span
        return node_id, 0

    def contains(self, pattern) -> bool:
        return bool(pattern) and self._descend(pattern) is not None

    def find(self, pattern) -> Set[int]:
        """Start positions of every occurrence of `pattern` in the text."""
        if not pattern:
            return set()
        found = self._descend(pattern)
        if found is None:
            return set()
        below = found[0]
        positions = set()
        pending = [below]
        while pending:
            node = self.nodes[pending.pop()]
            if node.suffix_index is not None:
                positions.add(node.suffix_index)
            pending.extend(edge.child for edge in node.children.values())
        return positions

    def locate_suffix(self, start: int) -> int:
        """Walk the path spelled by text[start:] and return the node it ends at."""
        if not 0 <= start < self.n:
            raise InvalidInput(f"Suffix start {start} out of range for length {self.n}")
        found = self._descend(self.text[start:])
        if found is None or found[1] != 0:
            raise InvalidInput(f"Suffix {start} does not end on a node")
        return found[0]

    def render(self) -> List[str]:
        """Indented edge labels, one per line, marking suffix termini."""
        lines = []
        for _, depth, edge in self.iter_edges():
            label = self.edge_label(edge)
            if not isinstance(label, str):
                label = repr(label)
            line = "  " * depth + label
            terminus = self.nodes[edge.child].suffix_index
            if terminus is not None:
                line += f"   <--- {terminus}"
            lines.append(line)
        return lines


def build_suffix_tree(text: Text, suffix_array, lcp_array) -> SuffixTree:
    """Build the suffix tree of `text` from its suffix array and LCP array."""
    return SuffixTree(text, suffix_array, lcp_array)
