from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Callable, Optional, Sequence, Tuple

from credgen.core.error_dialect import ClipboardFailure

logger = logging.getLogger(__name__)

CLIPBOARD_TIMEOUT_SECONDS = 1.0

# Probed in order; the first helper found on PATH wins.
CLIPBOARD_COMMANDS: Tuple[Tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


class ClipboardSink:
    name = "none"

    def send(self, text: str) -> None:
        raise NotImplementedError

    def try_send(self, text: str) -> bool:
        """Best effort: never raises, reports success as a bool."""
        try:
            self.send(text)
        except ClipboardFailure as exc:
            logger.warning("Clipboard copy failed (%s): %s", self.name, exc.message)
            return False
        logger.debug("Result copied to clipboard using %s.", self.name)
        return True


class NullClipboardSink(ClipboardSink):
    def __init__(self, reason: str = "no clipboard command found") -> None:
        self.reason = reason

    def send(self, text: str) -> None:
        raise ClipboardFailure(self.reason)

    def try_send(self, text: str) -> bool:
        logger.debug("Skipping clipboard copy: %s.", self.reason)
        return False


class CommandClipboardSink(ClipboardSink):
    def __init__(self, command: Sequence[str], *, timeout: float = CLIPBOARD_TIMEOUT_SECONDS) -> None:
        if not command:
            raise ValueError("clipboard command is empty")
        self.command = tuple(command)
        self.timeout = timeout
        self.name = " ".join(self.command)

    def send(self, text: str) -> None:
        try:
            result = subprocess.run(
                list(self.command),
                input=text,
                check=False,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="ignore",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise ClipboardFailure(f"timed out after {self.timeout:g}s") from exc
        except OSError as exc:
            raise ClipboardFailure(str(exc)) from exc
        if result.returncode != 0:
            detail = (result.stderr or result.stdout).strip() or f"exit status {result.returncode}"
            raise ClipboardFailure(detail)


def select_clipboard_sink(
    *,
    which: Callable[[str], Optional[str]] = shutil.which,
    timeout: float = CLIPBOARD_TIMEOUT_SECONDS,
) -> ClipboardSink:
    for command in CLIPBOARD_COMMANDS:
        if which(command[0]):
            return CommandClipboardSink(command, timeout=timeout)
    names = ", ".join(c[0] for c in CLIPBOARD_COMMANDS)
    return NullClipboardSink(f"no clipboard command ({names}) found")
