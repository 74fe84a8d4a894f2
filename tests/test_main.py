import contextlib
import io
import os
import sys
import tempfile
import unittest

# Add src to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from suffixcore.main import main, parse_fasta

FASTA = """>seq1 first record
ABRACAD
ABRA
>seq2
CADABRAX
"""


class CommandLineTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.tmpdir = tempfile.TemporaryDirectory()
        cls.fasta_path = os.path.join(cls.tmpdir.name, "records.fa")
        with open(cls.fasta_path, "w") as f:
            f.write(FASTA)

    @classmethod
    def tearDownClass(cls):
        cls.tmpdir.cleanup()

    def _run(self, *argv):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            main(list(argv))
        return buf.getvalue().splitlines()

    def test_parse_fasta(self):
        records = list(parse_fasta(self.fasta_path))
        self.assertEqual(records, [("seq1", "ABRACADABRA"), ("seq2", "CADABRAX")])

    def test_suffix_array_and_lcp(self):
        self.assertEqual(self._run("sa", "--text", "banana"), ["text\t5 3 1 0 4 2"])
        self.assertEqual(self._run("lcp", "--text", "banana"), ["text\t1 3 0 0 2"])

    def test_transform_and_inversion(self):
        self.assertEqual(self._run("bwt", "--text", "banana"), ["text\tannb$aa"])
        self.assertEqual(self._run("invert", "--text", "annb$aa"), ["text\tbanana"])
        self.assertEqual(self._run("bwt", "--text", "banana", "--sentinel", "#"), ["text\tannb#aa"])

    def test_find_over_fasta_records(self):
        lines = self._run("find", "--fasta", self.fasta_path, "--pattern", "ABRA")
        self.assertEqual(lines, ["seq1\tABRA\t2\t0 7", "seq2\tABRA\t1\t3"])

    def test_tree(self):
        lines = self._run("tree", "--text", "aab")
        self.assertEqual(lines, [">text", "a", "  ab   <--- 0", "  b   <--- 1", "b   <--- 2"])

    def test_repeats_and_common(self):
        self.assertEqual(self._run("repeats", "--text", "ABRACADABRA"), ["text\t4\tABRA\t0 7"])
        self.assertEqual(self._run("common", "--fasta", self.fasta_path), ["CADABRA"])

    def test_output_file(self):
        out_path = os.path.join(self.tmpdir.name, "sa.txt")
        lines = self._run("sa", "--text", "aaaa", "--output", out_path)
        self.assertEqual(lines, [f"Results written to {out_path}"])
        with open(out_path) as f:
            self.assertEqual(f.read(), "text\t3 2 1 0\n")

    def test_invalid_input_exits_with_error(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            with self.assertRaises(SystemExit) as ctx:
                main(["bwt", "--text", "a$b"])
        self.assertEqual(ctx.exception.code, 1)
        self.assertTrue(buf.getvalue().startswith("Error: "))

    def test_missing_fasta_file(self):
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            with self.assertRaises(SystemExit) as ctx:
                main(["sa", "--fasta", os.path.join(self.tmpdir.name, "missing.fa")])
        self.assertEqual(ctx.exception.code, 1)

    def test_find_requires_pattern(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                main(["find", "--text", "banana"])
        self.assertEqual(ctx.exception.code, 2)


if __name__ == "__main__":
    unittest.main()
