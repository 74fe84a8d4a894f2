import os
import random
import sys
import unittest

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from suffixcore import InvalidInput, longest_common_substrings, longest_repeated_substrings


def brute_force_common(strings, min_strings):
    """Longest substrings that occur in at least `min_strings` of `strings`."""
    owners = {}
    for color, s in enumerate(strings):
        for i in range(len(s)):
            for j in range(i + 1, len(s) + 1):
                owners.setdefault(s[i:j], set()).add(color)
    shared = [sub for sub, colors in owners.items() if len(colors) >= min_strings]
    if not shared:
        return set()
    longest = max(len(sub) for sub in shared)
    return {sub for sub in shared if len(sub) == longest}


class LongestRepeatedSubstringTests(unittest.TestCase):
    def _as_dict(self, text):
        repeats = longest_repeated_substrings(text)
        return repeats.length, {s: set(starts) for s, starts in zip(repeats.substrings, repeats.starts)}

    def test_examples(self):
        self.assertEqual(self._as_dict("ABRACADABRA"), (4, {"ABRA": {0, 7}}))
        self.assertEqual(self._as_dict("ABCXABCYABC"), (3, {"ABC": {0, 4, 8}}))
        self.assertEqual(self._as_dict("AAAAA"), (4, {"AAAA": {0, 1}}))
        self.assertEqual(self._as_dict("AZAZA"), (3, {"AZA": {0, 2}}))

    def test_several_substrings_of_equal_length(self):
        length, found = self._as_dict("abxcdyabzcd")
        self.assertEqual(length, 2)
        self.assertEqual(found, {"ab": {0, 6}, "cd": {3, 9}})

    def test_nothing_repeats(self):
        repeats = longest_repeated_substrings("ABCDE")
        self.assertEqual(repeats.length, 0)
        self.assertEqual(len(repeats), 0)
        self.assertEqual(longest_repeated_substrings("").substrings, [])


class LongestCommonSubstringTests(unittest.TestCase):
    def test_examples(self):
        self.assertEqual(longest_common_substrings(["ababaaab", "aaabab", "baba"], 2),
                         {"aaab", "abab", "baba"})
        self.assertEqual(longest_common_substrings(["anananana", "anana", "bana"], 3), {"ana"})
        self.assertEqual(longest_common_substrings(["anaba", "anaxaba"], 2), {"aba", "ana"})
        self.assertEqual(longest_common_substrings(["anananana", "bana"], 2), {"ana"})
        self.assertEqual(longest_common_substrings(["abc", "abc"], 2), {"abc"})

    def test_no_common_substring(self):
        self.assertEqual(longest_common_substrings(["abc", "xyz"], 2), set())
        self.assertEqual(longest_common_substrings(["abc", ""], 2), set())

    def test_single_string_threshold(self):
        self.assertEqual(longest_common_substrings(["ab", "xyz", "pqr"], 1), {"xyz", "pqr"})

    def test_matches_brute_force(self):
        rng = random.Random(11)
        for _ in range(150):
            k = rng.randint(2, 4)
            strings = ["".join(rng.choice("abc") for _ in range(rng.randint(0, 12))) for _ in range(k)]
            min_strings = rng.randint(2, k)
            with self.subTest(strings=strings, min_strings=min_strings):
                self.assertEqual(longest_common_substrings(strings, min_strings),
                                 brute_force_common(strings, min_strings))

    def test_invalid_threshold(self):
        with self.assertRaises(InvalidInput):
            longest_common_substrings(["abc", "abd"], 3)
        with self.assertRaises(InvalidInput):
            longest_common_substrings(["abc", "abd"], 0)
        with self.assertRaises(InvalidInput):
            longest_common_substrings([], 2)
        with self.assertRaises(InvalidInput):
            longest_common_substrings(["abc", b"abc"], 2)


if __name__ == "__main__":
    unittest.main()
