r"""
Random-byte token encodings.

Modes:
  - secret: standard Base64 (with padding) of N random bytes
  - api:    'sk-' + exactly N alphanumeric characters cut from URL-safe Base64
  - token:  JWT-shaped string of three URL-safe Base64 segments
"""
from __future__ import annotations

import base64
import logging
import math
import re

from credgen.core.error_dialect import InsufficientRandomness, InvalidArguments
from credgen.core.models import API_TOKEN_PREFIX
from credgen.core.random_source import secure_random_bytes

logger = logging.getLogger(__name__)

# Byte sizes of the header, payload and signature segments of a JWT-shaped token.
TOKEN_SEGMENT_BYTES = (12, 32, 16)

_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]")


# ---------------- Encodings ----------------

def encode_base64(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")


def encode_base64url(b: bytes) -> str:
    return base64.urlsafe_b64encode(b).decode("ascii").rstrip("=")


def strip_non_alnum(s: str) -> str:
    return _NON_ALNUM_RE.sub("", s)


# ---------------- Generators ----------------

def api_token_buffer_bytes(length: int) -> int:
    # Base64 yields 4 chars per 3 bytes; about 1/32 of them are '-' or '_'.
    return math.ceil(length * 3 / 4) + length // 16 + 12


def generate_secret(nbytes: int) -> str:
    if nbytes <= 0:
        raise InvalidArguments("secret length must be > 0 bytes")
    return encode_base64(secure_random_bytes(nbytes))


def generate_api_token(length: int) -> str:
    if length <= 0:
        raise InvalidArguments("api token length must be > 0")
    nbytes = api_token_buffer_bytes(length)
    logger.debug("Drawing %d random byte(s) for a %d-character api token", nbytes, length)
    chars = strip_non_alnum(encode_base64url(secure_random_bytes(nbytes)))
    if len(chars) < length:
        raise InsufficientRandomness(
            f"api token buffer produced {len(chars)} alphanumeric character(s), {length} required"
        )
    return API_TOKEN_PREFIX + chars[:length]


def generate_jwt_like_token() -> str:
    segments = [encode_base64url(secure_random_bytes(n)) for n in TOKEN_SEGMENT_BYTES]
    return ".".join(segments) + "="
