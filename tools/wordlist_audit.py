#!/usr/bin/env python3
"""
Dictionary audit for passphrase generation.

Counts how many lines of a word list are eligible passphrase words and how
many stay distinct under each case mode, then reports whether a requested
word count can be satisfied at all.
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Sequence

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from credgen.core.models import CASE_MODES, DEFAULT_PASSPHRASE_WORDS
from credgen.core.passphrase_engine import eligible_token, oversample_size, unique_transformed
from credgen.core.word_source import resolve_word_list_path, load_word_lines


@dataclass(frozen=True)
class AuditReport:
    lines: int
    eligible: int
    distinct_by_case: Dict[str, int]


def audit_lines(lines: Sequence[str]) -> AuditReport:
    eligible = sum(1 for line in lines if eligible_token(line) is not None)
    distinct = {mode: len(unique_transformed(lines, mode)) for mode in CASE_MODES}
    return AuditReport(lines=len(lines), eligible=eligible, distinct_by_case=distinct)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Audit a dictionary file for passphrase generation.")
    parser.add_argument("--word-list", default="", help="Dictionary path (default: $CREDGEN_WORD_LIST or system list).")
    parser.add_argument(
        "--words",
        type=int,
        default=DEFAULT_PASSPHRASE_WORDS,
        help=f"Word count to check (default: {DEFAULT_PASSPHRASE_WORDS}).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        path = resolve_word_list_path(args.word_list)
        report = audit_lines(load_word_lines(path))
    except ValueError as exc:
        print(f"[audit] failed: {exc}", file=sys.stderr)
        return 1

    print(f"[audit] path={path}")
    print(f"[audit] lines={report.lines} eligible={report.eligible}")
    for mode, n in report.distinct_by_case.items():
        print(f"[audit] distinct[{mode}]={n}")
    print(f"[audit] oversample={oversample_size(args.words)} for words={args.words}")

    weakest = min(report.distinct_by_case.values())
    if weakest < args.words:
        print(f"[audit] insufficient: only {weakest} distinct word(s) under the strictest case mode", file=sys.stderr)
        return 1
    print("[audit] ok")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
