from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


DEFAULT_PASSPHRASE_WORDS = 4
DEFAULT_SECRET_BYTES = 32
DEFAULT_API_TOKEN_LENGTH = 32

MAX_PASSPHRASE_WORDS = 64
MAX_TOKEN_BYTES = 4096

WORD_LIST_ENV = "CREDGEN_WORD_LIST"
DEFAULT_WORD_LIST_PATHS = ("/usr/share/dict/words", "/usr/dict/words")

PASSPHRASE_SEPARATOR = "-"
API_TOKEN_PREFIX = "sk-"


class CaseMode:
    NONE = "none"
    CAPITALIZE = "capitalize"
    LOWER = "lower"


CASE_MODES = (CaseMode.NONE, CaseMode.CAPITALIZE, CaseMode.LOWER)

MODE_PASSPHRASE = "passphrase"
MODE_SECRET = "secret"
MODE_API = "api"
MODE_TOKEN = "token"

TOKEN_MODES = (MODE_SECRET, MODE_API, MODE_TOKEN)


@dataclass(frozen=True)
class PassphraseRequest:
    count: int = DEFAULT_PASSPHRASE_WORDS
    case_mode: str = CaseMode.NONE
    # Empty means "resolve from the environment / system dictionary paths".
    word_list: str = ""
    max_rounds: int = 1


@dataclass(frozen=True)
class TokenRequest:
    mode: str = MODE_SECRET
    length: int = DEFAULT_SECRET_BYTES


@dataclass(frozen=True)
class CredentialResult:
    value: str
    mode: str
    words: Tuple[str, ...] = ()
    entropy_bits: float = 0.0
