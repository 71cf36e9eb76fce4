"""
Tests for the char-markov command-line interface.
"""

import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from char_markov.cli import main


CORPUS = (
    "the cat sat on the mat. the dog sat on the log. "
    "the cat and the dog sat together on the mat. "
)


class TestCli(unittest.TestCase):
    """Tests for char_markov.cli.main."""

    def setUp(self):
        """Write a small corpus to a temporary directory."""
        self._tmp = tempfile.TemporaryDirectory()
        self.corpus_path = os.path.join(self._tmp.name, "corpus.txt")
        with open(self.corpus_path, "w", encoding="utf-8") as f:
            f.write(CORPUS)

    def tearDown(self):
        self._tmp.cleanup()

    def _run(self, argv):
        out = io.StringIO()
        err = io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = main(argv)
        return rc, out.getvalue()

    def test_generate_fixed(self):
        """Test fixed mode prints text that starts with the seed."""
        rc, output = self._run(["3", "the", "40", "fixed", self.corpus_path])
        self.assertEqual(rc, 0)

        text = output.rstrip("\n")
        self.assertTrue(text.startswith("the"))
        self.assertGreaterEqual(len(text), 40)
        self.assertTrue(text.endswith(" "))

    def test_fixed_mode_is_reproducible(self):
        """Test fixed mode prints the same text on every run."""
        argv = ["2", "th", "80", "fixed", self.corpus_path, "--seed", "7"]
        _, first = self._run(argv)
        _, second = self._run(argv)
        self.assertEqual(first, second)

    def test_random_mode(self):
        """Test random mode generates from the seed text."""
        rc, output = self._run(["3", "the", "30", "random", self.corpus_path])
        self.assertEqual(rc, 0)
        self.assertTrue(output.startswith("the"))

    def test_short_initial_text(self):
        """Test initial text shorter than the window is echoed."""
        rc, output = self._run(["4", "ca", "30", "fixed", self.corpus_path])
        self.assertEqual(rc, 0)
        self.assertEqual(output, "ca\n")

    def test_show_model(self):
        """Test the model table is printed before the generated text."""
        rc, output = self._run(["3", "the", "20", "fixed", self.corpus_path, "--show-model"])
        self.assertEqual(rc, 0)

        header = output.splitlines()[0]
        for column in ["context", "character", "count", "p", "cp"]:
            self.assertIn(column, header)

    def test_max_steps(self):
        """Test the step bound ends a run without spaces."""
        with open(self.corpus_path, "w", encoding="utf-8") as f:
            f.write("zzzzzz")
        rc, output = self._run(["1", "z", "5", "fixed", self.corpus_path, "--max-steps", "8"])
        self.assertEqual(rc, 0)
        self.assertEqual(output, "z" * 9 + "\n")

    def test_csv_corpus(self):
        """Test training on a CSV column and a missing column."""
        csv_path = os.path.join(self._tmp.name, "corpus.csv")
        with open(csv_path, "w", encoding="utf-8") as f:
            f.write("id,text\n1,the cat sat\n2,the dog sat\n")

        rc, output = self._run(["3", "the", "10", "fixed", csv_path, "--csv-column", "text"])
        self.assertEqual(rc, 0)
        self.assertTrue(output.startswith("the"))

        rc, _ = self._run(["3", "the", "10", "fixed", csv_path, "--csv-column", "body"])
        self.assertEqual(rc, 1)

    def test_normalize_whitespace(self):
        """Test whitespace normalization before training."""
        with open(self.corpus_path, "w", encoding="utf-8") as f:
            f.write("ab\n\nab\tab   ab ")
        rc, output = self._run(["2", "ab", "3", "fixed", self.corpus_path, "--normalize-whitespace"])
        self.assertEqual(rc, 0)
        self.assertEqual(output, "ab \n")

    def test_negative_seed(self):
        """Test a negative fixed-mode seed generates reproducibly."""
        argv = ["3", "the", "40", "fixed", self.corpus_path, "--seed", "-5"]
        rc, first = self._run(argv)
        self.assertEqual(rc, 0)
        self.assertTrue(first.startswith("the"))

        _, second = self._run(argv)
        self.assertEqual(first, second)

    def test_missing_corpus(self):
        """Test an unreadable corpus exits with status 1."""
        missing = os.path.join(self._tmp.name, "missing.txt")
        rc, output = self._run(["3", "the", "10", "fixed", missing])
        self.assertEqual(rc, 1)
        self.assertEqual(output, "")

    def test_invalid_window_length(self):
        """Test a non-positive window length is an argument error."""
        with self.assertRaises(SystemExit) as ctx:
            self._run(["0", "the", "10", "fixed", self.corpus_path])
        self.assertEqual(ctx.exception.code, 2)

    def test_invalid_mode(self):
        """Test an unknown mode is an argument error."""
        with self.assertRaises(SystemExit):
            self._run(["3", "the", "10", "sometimes", self.corpus_path])


if __name__ == '__main__':
    unittest.main()
