"""Core generation engines, models, and service APIs for credgen."""

from __future__ import annotations


def generate_credential(request, **kwargs):
    from credgen.core.credential_service import generate_credential as _generate_credential

    return _generate_credential(request, **kwargs)


__all__ = ["generate_credential"]
