from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

# Allow running as `python tools/bench.py` without installing the package.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from credgen.core.credential_service import generate_credential
from credgen.core.models import MODE_API, MODE_SECRET, CaseMode, PassphraseRequest, TokenRequest
from credgen.core.word_source import open_word_source


def _bench_passphrases(rounds: int, words: int, word_list: str) -> None:
    t0 = time.perf_counter()
    source = open_word_source(word_list)
    load_dt = time.perf_counter() - t0

    req = PassphraseRequest(count=words, case_mode=CaseMode.LOWER)
    t0 = time.perf_counter()
    for _ in range(rounds):
        generate_credential(req, source=source)
    dt = time.perf_counter() - t0
    rate = (rounds / dt) if dt > 0 else 0.0
    print(
        f"[passphrases] rounds={rounds} words={words} lines={len(source)} "
        f"load_seconds={load_dt:.4f} seconds={dt:.4f} rate={rate:.1f}/s"
    )


def _bench_tokens(rounds: int, mode: str, length: int) -> None:
    req = TokenRequest(mode=mode, length=length)
    t0 = time.perf_counter()
    for _ in range(rounds):
        generate_credential(req)
    dt = time.perf_counter() - t0
    rate = (rounds / dt) if dt > 0 else 0.0
    print(f"[{mode}] rounds={rounds} length={length} seconds={dt:.4f} rate={rate:.1f}/s")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="credgen baseline benchmark (stdlib-only).")
    parser.add_argument("--passphrases", type=int, default=0, help="Number of passphrases to generate.")
    parser.add_argument("--words", type=int, default=4, help="Words per passphrase.")
    parser.add_argument("--word-list", type=str, default="", help="Dictionary path (default: resolved).")
    parser.add_argument("--tokens", type=int, default=0, help="Number of secret and api tokens to generate.")
    parser.add_argument("--length", type=int, default=32, help="Token length for token bench.")
    args = parser.parse_args(argv)

    if args.passphrases <= 0 and args.tokens <= 0:
        parser.error("Set --passphrases and/or --tokens to a value > 0")

    try:
        if args.passphrases > 0:
            _bench_passphrases(rounds=args.passphrases, words=args.words, word_list=args.word_list)
        if args.tokens > 0:
            _bench_tokens(rounds=args.tokens, mode=MODE_SECRET, length=args.length)
            _bench_tokens(rounds=args.tokens, mode=MODE_API, length=args.length)
    except ValueError as exc:
        print(f"[bench] failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
