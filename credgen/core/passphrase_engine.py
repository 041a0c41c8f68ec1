"""
Passphrase generation: distinct dictionary words plus a two-digit suffix.

Words are drawn in one oversampled batch rather than one at a time with
retry-on-collision. The batch is filtered to purely alphabetic first tokens,
case-transformed, and deduplicated on the transformed form; the first `count`
survivors are used in the order they were drawn. A batch that cannot supply
`count` distinct words fails with ExhaustedSource. Callers can opt into a
bounded number of larger re-draws through `max_rounds`.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Dict, Iterable, List, Optional, Tuple

from credgen.core.error_dialect import ExhaustedSource, InvalidArguments
from credgen.core.models import (
    CASE_MODES,
    MODE_PASSPHRASE,
    PASSPHRASE_SEPARATOR,
    CaseMode,
    CredentialResult,
    PassphraseRequest,
)
from credgen.core.random_source import random_below
from credgen.core.word_source import WordSource, open_word_source

logger = logging.getLogger(__name__)

OVERSAMPLE_FACTOR = 3
OVERSAMPLE_FLOOR = 20
OVERSAMPLE_MAX_ROUNDS = 4
SUFFIX_RANGE = 100

_ELIGIBLE_RE = re.compile(r"[A-Za-z]+")


def resolve_case_mode(uppercase: bool, lowercase: bool) -> str:
    if uppercase and lowercase:
        raise InvalidArguments("cannot use --uppercase and --lowercase together")
    if uppercase:
        return CaseMode.CAPITALIZE
    if lowercase:
        return CaseMode.LOWER
    return CaseMode.NONE


def oversample_size(count: int) -> int:
    return max(OVERSAMPLE_FACTOR * count, OVERSAMPLE_FLOOR)


def eligible_token(line: str) -> Optional[str]:
    parts = line.split(None, 1)
    if not parts:
        return None
    token = parts[0]
    if not _ELIGIBLE_RE.fullmatch(token):
        return None
    return token


def apply_case(word: str, case_mode: str) -> str:
    if case_mode == CaseMode.CAPITALIZE:
        return word[:1].upper() + word[1:].lower()
    if case_mode == CaseMode.LOWER:
        return word.lower()
    return word


def unique_transformed(lines: Iterable[str], case_mode: str) -> List[str]:
    # dict keeps insertion order; first occurrence of a transformed word wins.
    seen: Dict[str, None] = {}
    for line in lines:
        token = eligible_token(line)
        if token is None:
            continue
        seen.setdefault(apply_case(token, case_mode), None)
    return list(seen)


def generate_words(
    count: int,
    case_mode: str,
    source: WordSource,
    *,
    max_rounds: int = 1,
) -> Tuple[str, ...]:
    if count < 0:
        raise InvalidArguments("word count must be >= 0")
    if case_mode not in CASE_MODES:
        raise InvalidArguments(f"unsupported case mode: {case_mode}")
    if max_rounds < 1 or max_rounds > OVERSAMPLE_MAX_ROUNDS:
        raise InvalidArguments(f"max_rounds must be within [1, {OVERSAMPLE_MAX_ROUNDS}]")
    if count == 0:
        return ()

    size = oversample_size(count)
    unique: List[str] = []
    for round_no in range(1, max_rounds + 1):
        batch = source.sample(size)
        unique = unique_transformed(batch, case_mode)
        logger.debug(
            "Round %d: sampled %d line(s), %d distinct eligible word(s)",
            round_no,
            len(batch),
            len(unique),
        )
        if len(unique) >= count:
            return tuple(unique[:count])
        if size >= len(source):
            break
        size *= 2

    raise ExhaustedSource(
        f"word list supplied only {len(unique)} distinct eligible word(s), {count} requested; "
        "reduce --length or use a larger dictionary"
    )


def random_suffix() -> str:
    return f"{random_below(SUFFIX_RANGE):02d}"


def assemble_passphrase(words: Tuple[str, ...], suffix: str, sep: str = PASSPHRASE_SEPARATOR) -> str:
    # Zero words still carries the separator before the suffix, e.g. "-07".
    return sep.join((*words, suffix)) if words else sep + suffix


def eligible_pool_size(source: WordSource, case_mode: str) -> int:
    return len(unique_transformed(source.lines, case_mode))


def estimate_passphrase_entropy_bits(count: int, pool_size: int) -> float:
    """Ordered draws without replacement from the eligible pool, plus the suffix."""
    if count <= 0 or pool_size <= 0:
        return math.log2(SUFFIX_RANGE)
    bits = sum(math.log2(pool_size - i) for i in range(min(count, pool_size)))
    return bits + math.log2(SUFFIX_RANGE)


def generate_passphrase(request: PassphraseRequest, source: Optional[WordSource] = None) -> CredentialResult:
    if request.case_mode not in CASE_MODES:
        raise InvalidArguments(f"unsupported case mode: {request.case_mode}")
    if request.count < 0:
        raise InvalidArguments("word count must be >= 0")
    if source is None:
        source = open_word_source(request.word_list)

    logger.debug("Generating passphrase with %d word(s), case mode %s", request.count, request.case_mode)
    words = generate_words(request.count, request.case_mode, source, max_rounds=request.max_rounds)
    value = assemble_passphrase(words, random_suffix())
    return CredentialResult(
        value=value,
        mode=MODE_PASSPHRASE,
        words=words,
        entropy_bits=estimate_passphrase_entropy_bits(len(words), eligible_pool_size(source, request.case_mode)),
    )
