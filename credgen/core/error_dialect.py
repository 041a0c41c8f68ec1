from __future__ import annotations


class CredGenError(ValueError):
    """Base for every reportable failure; `code` is the stable machine-readable tag."""

    default_code = "invalid_arguments"

    def __init__(self, message: str, code: str = "") -> None:
        self.code = _normalize_code(code or self.default_code)
        self.message = message.strip() or "unspecified error"
        super().__init__(self.message)


class InvalidArguments(CredGenError):
    default_code = "invalid_arguments"


class SourceUnavailable(CredGenError):
    default_code = "source_unavailable"


class ExhaustedSource(CredGenError):
    default_code = "exhausted_source"


class InsufficientRandomness(CredGenError):
    default_code = "insufficient_randomness"


class ClipboardFailure(CredGenError):
    """Raised by clipboard sinks; callers downgrade it to a warning."""

    default_code = "clipboard_failure"


def _normalize_code(code: str) -> str:
    out = []
    for ch in code.strip().lower():
        if ch.isalnum() or ch == "_":
            out.append(ch)
        elif ch in ("-", " ", "."):
            out.append("_")
    return "".join(out).strip("_") or CredGenError.default_code


def format_error_text(exc: BaseException) -> str:
    """Render `code: message` for stderr; plain ValueErrors report as invalid_arguments."""
    if isinstance(exc, CredGenError):
        return f"{exc.code}: {exc.message}"
    message = str(exc).strip() or "invalid arguments"
    return f"{CredGenError.default_code}: {message}"
