#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import os
import re
import sys
from typing import Mapping, Optional, Union

from credgen.core.clipboard import select_clipboard_sink
from credgen.core.credential_service import generate_credential
from credgen.core.error_dialect import InvalidArguments, format_error_text
from credgen.core.models import (
    DEFAULT_API_TOKEN_LENGTH,
    DEFAULT_PASSPHRASE_WORDS,
    DEFAULT_SECRET_BYTES,
    MAX_PASSPHRASE_WORDS,
    MAX_TOKEN_BYTES,
    MODE_API,
    MODE_PASSPHRASE,
    MODE_SECRET,
    MODE_TOKEN,
    WORD_LIST_ENV,
    PassphraseRequest,
    TokenRequest,
)
from credgen.core.passphrase_engine import resolve_case_mode

logger = logging.getLogger("credgen")

COMMAND_ALIASES = {
    "pass": MODE_PASSPHRASE,
    "password": MODE_PASSPHRASE,
    "secret": MODE_SECRET,
    "api": MODE_API,
    "api_token": MODE_API,
    "tkn": MODE_TOKEN,
    "token": MODE_TOKEN,
}

_HELP_FLAGS = frozenset({"-h", "--help"})
_NUMERIC_RE = re.compile(r"[0-9]+")

_EPILOG = f"""\
Commands:
  pass, password        Generate a human-readable passphrase.
  secret                Generate a Base64 secret from random bytes.
  api, api_token        Generate an API token starting with 'sk-'.
  tkn, token            Generate a JWT-like token string (fixed format).

Length (-L) per command:
  pass   : number of words (default: {DEFAULT_PASSPHRASE_WORDS}, max: {MAX_PASSPHRASE_WORDS})
  secret : number of random bytes (default: {DEFAULT_SECRET_BYTES}, max: {MAX_TOKEN_BYTES})
  api    : number of characters after 'sk-' (default: {DEFAULT_API_TOKEN_LENGTH}, max: {MAX_TOKEN_BYTES})
  tkn    : ignored

Word list: ${WORD_LIST_ENV}, else /usr/share/dict/words.
Clipboard: the result is also copied with pbcopy, wl-copy, xclip, xsel or clip when available.
"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise InvalidArguments(message)


def build_parser() -> argparse.ArgumentParser:
    # The command is split off by split_command() before parsing.
    parser = _ArgumentParser(
        prog="gen",
        usage="%(prog)s {pass|password|secret|api|api_token|tkn|token} [OPTIONS]",
        description="Generates passphrases, Base64 secrets, API keys, or JWT-like tokens.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-u", "--uppercase", action="store_true", help="capitalize first letter of each word (pass only)")
    parser.add_argument("-l", "--lowercase", action="store_true", help="force words to lowercase (pass only)")
    parser.add_argument(
        "-L",
        "--length",
        nargs="?",
        const="",
        default=None,
        metavar="NUM",
        help="word count for pass, size for secret/api",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable verbose debug output on stderr")
    parser.add_argument("--no-clipboard", action="store_true", help="do not copy the result to the clipboard")
    parser.add_argument("-h", "--help", action="store_true", help="display this help message")
    return parser


def split_command(argv: list[str]) -> tuple[str, list[str]]:
    if argv and not argv[0].startswith("-"):
        return argv[0], argv[1:]
    return "", argv


def parse_args(argv: list[str], parser: Optional[argparse.ArgumentParser] = None) -> argparse.Namespace:
    parser = parser or build_parser()
    command, rest = split_command(argv)
    args, extras = parser.parse_known_args(rest)
    if extras:
        first = extras[0]
        kind = "option" if first.startswith("-") else "argument"
        raise InvalidArguments(f"unknown {kind}: {first}")
    args.mode = command
    return args


def parse_length(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    if not _NUMERIC_RE.fullmatch(raw):
        raise InvalidArguments("--length requires a numeric value")
    return int(raw)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
        force=True,
    )


def build_request(
    mode: str,
    args: argparse.Namespace,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Union[PassphraseRequest, TokenRequest]:
    env = os.environ if environ is None else environ
    length = parse_length(args.length)

    if mode == MODE_PASSPHRASE:
        case_mode = resolve_case_mode(args.uppercase, args.lowercase)
        count = DEFAULT_PASSPHRASE_WORDS if length is None else length
        if count > MAX_PASSPHRASE_WORDS:
            raise InvalidArguments(f"--length must be <= {MAX_PASSPHRASE_WORDS} words")
        logger.debug("Using passphrase length: %d word(s)", count)
        return PassphraseRequest(
            count=count,
            case_mode=case_mode,
            word_list=env.get(WORD_LIST_ENV, "").strip(),
        )

    if args.uppercase or args.lowercase:
        logger.debug("Ignoring case flags for %s command", mode)

    if mode == MODE_TOKEN:
        if length is not None:
            logger.debug("Ignoring --length flag for token command")
        return TokenRequest(mode=MODE_TOKEN, length=0)

    default = DEFAULT_SECRET_BYTES if mode == MODE_SECRET else DEFAULT_API_TOKEN_LENGTH
    size = default if length is None else length
    if size <= 0:
        raise InvalidArguments("--length must be > 0")
    if size > MAX_TOKEN_BYTES:
        raise InvalidArguments(f"--length must be <= {MAX_TOKEN_BYTES}")
    logger.debug("Using %s length: %d", mode, size)
    return TokenRequest(mode=mode, length=size)


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    if any(arg in _HELP_FLAGS for arg in argv):
        parser.print_help()
        return 0

    try:
        args = parse_args(argv, parser)
    except InvalidArguments as exc:
        print(format_error_text(exc), file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1

    configure_logging(args.verbose)
    logger.debug("Verbose mode enabled.")

    if not args.mode:
        parser.print_help(sys.stderr)
        return 1
    mode = COMMAND_ALIASES.get(args.mode.lower())
    if mode is None:
        print(format_error_text(InvalidArguments(f"unknown command: {args.mode!r}")), file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1
    logger.debug("Command: %s", mode)

    try:
        request = build_request(mode, args)
        result = generate_credential(request)
    except ValueError as exc:
        print(format_error_text(exc), file=sys.stderr)
        return 1

    print(result.value)
    sys.stdout.flush()
    if args.no_clipboard:
        logger.debug("Clipboard copy disabled.")
    else:
        select_clipboard_sink().try_send(result.value)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
