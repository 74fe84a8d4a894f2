import contextlib
import io
import os
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from suffixcore import SuffixIndex


class SuffixIndexTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.index = SuffixIndex("mississippi")

    def test_structures(self):
        self.assertEqual(self.index.suffix_array.tolist(), [10, 7, 4, 1, 0, 9, 8, 6, 3, 5, 2])
        self.assertEqual(self.index.lcp_array.tolist(), [1, 1, 4, 0, 0, 1, 0, 2, 1, 3])
        self.assertEqual(self.index.transform, "ipssm$pissii")
        self.assertEqual(len(self.index.suffix_tree.suffix_termini()), 11)

    def test_derived_structures_are_cached(self):
        self.assertIs(self.index.lcp_array, self.index.lcp_array)
        self.assertIs(self.index.matcher, self.index.matcher)

    def test_queries(self):
        self.assertEqual(self.index.find("ssi"), {2, 5})
        self.assertEqual(self.index.count("ss"), 2)
        self.assertEqual(self.index.locate("pp"), [8])
        self.assertEqual(self.index.suffix_tree.find("ssi"), self.index.find("ssi"))

    def test_longest_repeats(self):
        repeats = self.index.longest_repeats()
        self.assertEqual(repeats.length, 4)
        self.assertEqual(repeats.substrings, ["issi"])
        self.assertEqual(set(repeats.starts[0]), {1, 4})

    def test_lexsort_method(self):
        index = SuffixIndex("mississippi", method="lexsort")
        self.assertEqual(index.suffix_array.tolist(), self.index.suffix_array.tolist())

    def test_progress_output(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            index = SuffixIndex("banana", show_progress=True, label="chr1")
            index.find("ana")
        output = buf.getvalue()
        self.assertIn("[chr1] Suffix array built", output)
        self.assertIn("[chr1] BWT built", output)
        self.assertIn("[chr1] First-column tables built", output)

    def test_silent_by_default(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            SuffixIndex("banana").find("ana")
        self.assertEqual(buf.getvalue(), "")

    def test_clear(self):
        index = SuffixIndex("banana")
        self.assertEqual(index.find("ana"), {1, 3})
        index.clear()
        self.assertEqual(index.suffix_array.size, 0)
        self.assertEqual(index.find("ana"), set())


if __name__ == "__main__":
    unittest.main()
