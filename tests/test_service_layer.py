from __future__ import annotations

import base64
import re
import unittest
from unittest.mock import patch

from credgen.core import generate_credential as lazy_generate_credential
from credgen.core.credential_service import generate_credential, generate_token
from credgen.core.error_dialect import (
    ExhaustedSource,
    InsufficientRandomness,
    InvalidArguments,
    SourceUnavailable,
    format_error_text,
)
from credgen.core.models import (
    MODE_API,
    MODE_SECRET,
    MODE_TOKEN,
    CaseMode,
    PassphraseRequest,
    TokenRequest,
)
from credgen.core.word_source import WordSource

_WORDS = [f"{a}{b}" for a in ("alpha", "bravo", "delta", "echo", "golf", "hotel", "india", "kilo")
          for b in ("ant", "bee", "cat", "dog", "eel", "fox", "gnu", "hen")]


class ServiceLayerTests(unittest.TestCase):
    def test_passphrase_dispatch(self) -> None:
        source = WordSource.from_lines(_WORDS)
        result = generate_credential(PassphraseRequest(count=5, case_mode=CaseMode.CAPITALIZE), source=source)
        self.assertRegex(result.value, r"^([A-Z][a-z]+-){5}[0-9]{2}$")
        self.assertEqual(result.mode, "passphrase")

    def test_lazy_package_entrypoint(self) -> None:
        result = lazy_generate_credential(TokenRequest(mode=MODE_SECRET, length=16))
        self.assertEqual(len(base64.b64decode(result.value)), 16)

    def test_secret_dispatch_and_entropy(self) -> None:
        result = generate_credential(TokenRequest(mode=MODE_SECRET, length=16))
        self.assertEqual(result.mode, MODE_SECRET)
        self.assertEqual(result.entropy_bits, 128.0)
        self.assertEqual(result.words, ())

    def test_api_dispatch(self) -> None:
        result = generate_credential(TokenRequest(mode=MODE_API, length=10))
        self.assertRegex(result.value, r"^sk-[A-Za-z0-9]{10}$")
        self.assertGreater(result.entropy_bits, 59.0)

    def test_token_dispatch_ignores_length(self) -> None:
        result = generate_token(TokenRequest(mode=MODE_TOKEN, length=0))
        self.assertEqual(result.value.count("."), 2)
        self.assertEqual(result.entropy_bits, 480.0)

    def test_unknown_token_mode(self) -> None:
        with self.assertRaisesRegex(InvalidArguments, "unsupported token mode"):
            generate_credential(TokenRequest(mode="jwt", length=8))

    def test_unknown_request_type(self) -> None:
        with self.assertRaisesRegex(InvalidArguments, "unsupported request type"):
            generate_credential("secret")  # type: ignore[arg-type]

    def test_csprng_failure_is_reported_as_insufficient_randomness(self) -> None:
        with patch(
            "credgen.core.credential_service.assert_csprng_ready",
            side_effect=OSError("OS CSPRNG failure requesting 1 byte(s): boom"),
        ):
            with self.assertRaises(InsufficientRandomness) as ctx:
                generate_credential(TokenRequest(mode=MODE_SECRET, length=8))
        self.assertEqual(
            format_error_text(ctx.exception),
            "insufficient_randomness: OS CSPRNG failure requesting 1 byte(s): boom",
        )

    def test_unreadable_word_list_fails_before_sampling(self) -> None:
        request = PassphraseRequest(count=4, word_list=".tmp_missing_word_list.txt")
        with patch("credgen.core.word_source.secure_sample") as sampler:
            with self.assertRaises(SourceUnavailable):
                generate_credential(request)
        sampler.assert_not_called()

    def test_format_error_text_for_plain_value_error(self) -> None:
        self.assertEqual(format_error_text(ValueError("bad")), "invalid_arguments: bad")
        self.assertEqual(format_error_text(ValueError("")), "invalid_arguments: invalid arguments")

    def test_error_codes(self) -> None:
        self.assertEqual(InvalidArguments("x", code="--").code, "invalid_arguments")
        self.assertEqual(format_error_text(ExhaustedSource("  too few  ")), "exhausted_source: too few")
        self.assertEqual(InvalidArguments("x").code, "invalid_arguments")
        self.assertEqual(SourceUnavailable("x").code, "source_unavailable")
        self.assertEqual(InvalidArguments("x", code="Bad Flag").code, "bad_flag")
        self.assertIsInstance(SourceUnavailable("x"), ValueError)
        self.assertTrue(re.fullmatch(r"[a-z_]+", InsufficientRandomness(" ").code))


if __name__ == "__main__":
    unittest.main()
