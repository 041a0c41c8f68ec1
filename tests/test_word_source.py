from __future__ import annotations

import shutil
import unittest
import uuid
from pathlib import Path
from unittest.mock import patch

from credgen.core.error_dialect import SourceUnavailable
from credgen.core.models import WORD_LIST_ENV
from credgen.core.word_source import (
    WordSource,
    load_word_lines,
    open_word_source,
    resolve_word_list_path,
    secure_sample,
)


class WordSourceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.case_root = (Path(".tmp_test_word_source") / uuid.uuid4().hex).resolve()
        self.case_root.mkdir(parents=True, exist_ok=True)

    def tearDown(self) -> None:
        shutil.rmtree(self.case_root.parent, ignore_errors=True)

    def _write(self, name: str, text: str) -> Path:
        path = self.case_root / name
        path.write_text(text, encoding="utf-8", newline="\n")
        return path

    def test_secure_sample_draws_distinct_items(self) -> None:
        seq = [f"w{i}" for i in range(100)]
        for _ in range(50):
            out = secure_sample(seq, 30)
            self.assertEqual(len(out), 30)
            self.assertEqual(len(set(out)), 30)
            self.assertTrue(set(out).issubset(seq))

    def test_secure_sample_oversized_request_returns_every_item(self) -> None:
        seq = ["a", "b", "c", "d"]
        out = secure_sample(seq, 20)
        self.assertEqual(sorted(out), seq)

    def test_secure_sample_zero_is_empty(self) -> None:
        self.assertEqual(secure_sample(["a"], 0), [])

    def test_secure_sample_does_not_mutate_input(self) -> None:
        seq = ["a", "b", "c", "d", "e"]
        secure_sample(seq, 3)
        self.assertEqual(seq, ["a", "b", "c", "d", "e"])

    def test_explicit_path_wins(self) -> None:
        path = resolve_word_list_path("/some/list.txt", environ={WORD_LIST_ENV: "/other.txt"})
        self.assertEqual(path, Path("/some/list.txt"))

    def test_environment_override(self) -> None:
        path = resolve_word_list_path("", environ={WORD_LIST_ENV: "/env/words"})
        self.assertEqual(path, Path("/env/words"))

    def test_fallback_uses_first_existing_file(self) -> None:
        present = self._write("words", "alpha\n")
        path = resolve_word_list_path(
            "",
            environ={},
            fallbacks=(str(self.case_root / "missing"), str(present)),
        )
        self.assertEqual(path, present)

    def test_no_word_list_anywhere_raises(self) -> None:
        with self.assertRaisesRegex(SourceUnavailable, WORD_LIST_ENV):
            resolve_word_list_path("", environ={}, fallbacks=(str(self.case_root / "missing"),))

    def test_missing_file_raises(self) -> None:
        with self.assertRaisesRegex(SourceUnavailable, "not found") as ctx:
            load_word_lines(self.case_root / "nope.txt")
        self.assertEqual(ctx.exception.code, "source_unavailable")

    def test_directory_is_rejected(self) -> None:
        with self.assertRaisesRegex(SourceUnavailable, "not a file"):
            load_word_lines(self.case_root)

    def test_oversized_file_is_rejected(self) -> None:
        path = self._write("big.txt", "alpha\nbeta\n")
        with patch("credgen.core.word_source.MAX_WORD_LIST_BYTES", 4):
            with self.assertRaisesRegex(SourceUnavailable, "too large"):
                load_word_lines(path)

    def test_load_strips_bom_and_keeps_raw_lines(self) -> None:
        path = self._write("bom.txt", "\ufeffalpha\n  beta gamma\n\n")
        self.assertEqual(load_word_lines(path), ("alpha", "  beta gamma", ""))

    def test_open_word_source_reads_file(self) -> None:
        path = self._write("words.txt", "alpha\nbeta\n")
        source = open_word_source(str(path))
        self.assertEqual(len(source), 2)
        self.assertEqual(source.path, path)
        self.assertEqual(sorted(source.sample(5)), ["alpha", "beta"])

    def test_from_lines_has_no_path(self) -> None:
        source = WordSource.from_lines(["x", "y"])
        self.assertIsNone(source.path)
        self.assertEqual(source.lines, ("x", "y"))


if __name__ == "__main__":
    unittest.main()
