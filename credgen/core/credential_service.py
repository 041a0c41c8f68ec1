from __future__ import annotations

import logging
import math
from typing import Optional, Union

from credgen.core import passphrase_engine, token_engine
from credgen.core.error_dialect import InsufficientRandomness, InvalidArguments
from credgen.core.models import (
    MODE_API,
    MODE_SECRET,
    MODE_TOKEN,
    TOKEN_MODES,
    CredentialResult,
    PassphraseRequest,
    TokenRequest,
)
from credgen.core.random_source import assert_csprng_ready
from credgen.core.word_source import WordSource

logger = logging.getLogger(__name__)

_ALNUM_BITS = math.log2(62)


def _estimate_token_entropy_bits(request: TokenRequest) -> float:
    if request.mode == MODE_API:
        return request.length * _ALNUM_BITS
    if request.mode == MODE_TOKEN:
        return float(sum(token_engine.TOKEN_SEGMENT_BYTES) * 8)
    return float(request.length * 8)


def generate_token(request: TokenRequest) -> CredentialResult:
    if request.mode not in TOKEN_MODES:
        raise InvalidArguments(f"unsupported token mode: {request.mode}")

    if request.mode == MODE_SECRET:
        logger.debug("Generating secret from %d random byte(s)", request.length)
        value = token_engine.generate_secret(request.length)
    elif request.mode == MODE_API:
        value = token_engine.generate_api_token(request.length)
    else:
        logger.debug("Generating JWT-like token")
        value = token_engine.generate_jwt_like_token()

    return CredentialResult(
        value=value,
        mode=request.mode,
        entropy_bits=_estimate_token_entropy_bits(request),
    )


def generate_credential(
    request: Union[PassphraseRequest, TokenRequest],
    *,
    source: Optional[WordSource] = None,
) -> CredentialResult:
    try:
        assert_csprng_ready()
        if isinstance(request, PassphraseRequest):
            result = passphrase_engine.generate_passphrase(request, source)
        elif isinstance(request, TokenRequest):
            result = generate_token(request)
        else:
            raise InvalidArguments(f"unsupported request type: {type(request).__name__}")
    except OSError as exc:
        raise InsufficientRandomness(str(exc)) from exc
    logger.debug("Estimated entropy: %.1f bits", result.entropy_bits)
    return result
