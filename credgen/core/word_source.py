from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple

from credgen.core.error_dialect import SourceUnavailable
from credgen.core.models import DEFAULT_WORD_LIST_PATHS, WORD_LIST_ENV
from credgen.core.random_source import random_below

logger = logging.getLogger(__name__)

# System dictionaries are a few MiB; anything far larger is not a word list.
MAX_WORD_LIST_BYTES = 64 * 1024 * 1024


def secure_sample(seq: Sequence[str], k: int) -> List[str]:
    """
    Cryptographically secure sampling without replacement.
    When k covers the whole sequence, every line is returned in shuffled order.
    """
    if k <= 0:
        return []
    arr = list(seq)
    k = min(k, len(arr))
    # Fisher-Yates partial shuffle
    for i in range(k):
        j = i + random_below(len(arr) - i)
        arr[i], arr[j] = arr[j], arr[i]
    return arr[:k]


def resolve_word_list_path(
    explicit: str = "",
    *,
    environ: Optional[Mapping[str, str]] = None,
    fallbacks: Sequence[str] = DEFAULT_WORD_LIST_PATHS,
) -> Path:
    if explicit.strip():
        return Path(explicit).expanduser()
    env = os.environ if environ is None else environ
    override = env.get(WORD_LIST_ENV, "").strip()
    if override:
        logger.debug("Using word list from %s: %s", WORD_LIST_ENV, override)
        return Path(override).expanduser()
    for candidate in fallbacks:
        p = Path(candidate)
        if p.is_file():
            return p
    raise SourceUnavailable(
        f"no word list found (tried {', '.join(fallbacks)}); set {WORD_LIST_ENV} to a dictionary file"
    )


def load_word_lines(path: Path) -> Tuple[str, ...]:
    try:
        st = path.stat()
    except FileNotFoundError as exc:
        raise SourceUnavailable(f"word list not found: {path}") from exc
    except OSError as exc:
        raise SourceUnavailable(f"unable to stat word list '{path}': {exc}") from exc

    if not path.is_file():
        raise SourceUnavailable(f"word list path is not a file: {path}")
    if st.st_size > MAX_WORD_LIST_BYTES:
        raise SourceUnavailable(f"word list file too large: {path} ({st.st_size} bytes)")

    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceUnavailable(f"unable to read word list '{path}': {exc}") from exc

    lines = tuple(text.splitlines())
    # Tolerate UTF-8 BOM if present at file start.
    if lines and lines[0].startswith("\ufeff"):
        lines = (lines[0].lstrip("\ufeff"),) + lines[1:]
    logger.debug("Loaded %d line(s) from word list %s", len(lines), path)
    return lines


@dataclass(frozen=True)
class WordSource:
    path: Optional[Path]
    lines: Tuple[str, ...]

    @classmethod
    def from_path(cls, path: Path) -> "WordSource":
        return cls(path=path, lines=load_word_lines(path))

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "WordSource":
        return cls(path=None, lines=tuple(lines))

    def __len__(self) -> int:
        return len(self.lines)

    def sample(self, k: int) -> List[str]:
        return secure_sample(self.lines, k)


def open_word_source(explicit: str = "", *, environ: Optional[Mapping[str, str]] = None) -> WordSource:
    return WordSource.from_path(resolve_word_list_path(explicit, environ=environ))
