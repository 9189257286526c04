"""Pending-question buffer and dictation control."""

from __future__ import annotations

import logging
import subprocess
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class DictationUnavailableError(RuntimeError):
    """Raised when dictation is requested but no capability is configured."""


class InputCollector:
    """Holds the text the user is composing.

    While ``disabled`` is set (a request is in flight) edits and submit keys
    are ignored.
    """

    def __init__(self) -> None:
        self._text = ""
        self.disabled = False

    @property
    def text(self) -> str:
        return self._text

    @property
    def char_count(self) -> int:
        return len(self._text)

    def set_text(self, text: str) -> None:
        if not self.disabled:
            self._text = text

    def append(self, text: str) -> None:
        if not self.disabled:
            self._text += text

    def clear(self) -> None:
        self._text = ""

    def handle_key(self, key: str, shift: bool = False) -> bool:
        """Process one key press; returns True when the question should be sent.

        Enter submits, Shift+Enter inserts a newline, anything else is typed.
        """
        if self.disabled:
            return False
        if key == "Enter":
            if shift:
                self._text += "\n"
                return False
            return True
        self._text += key
        return False


class DictationCapability(Protocol):
    """Speech-to-text source driven by start/stop and reporting through callbacks."""

    on_start: Callable[[], None] | None
    on_result: Callable[[str], None] | None
    on_end: Callable[[], None] | None
    on_error: Callable[[str], None] | None

    def start(self) -> None: ...

    def stop(self) -> None: ...


class DictationController:
    """Connects a dictation capability to an :class:`InputCollector`.

    Each activation contributes at most one transcript, appended to the
    pending text.
    """

    def __init__(
        self,
        collector: InputCollector,
        capability: DictationCapability | None = None,
    ) -> None:
        self._collector = collector
        self._capability = capability
        self.recording = False
        self.listening = False
        self.last_error: str | None = None
        self._got_result = False

        if capability is not None:
            capability.on_start = self._handle_start
            capability.on_result = self._handle_result
            capability.on_end = self._handle_end
            capability.on_error = self._handle_error

    @property
    def supported(self) -> bool:
        return self._capability is not None

    def toggle(self) -> None:
        if self._capability is None:
            raise DictationUnavailableError("Speech recognition is not supported in this terminal.")

        if self.recording:
            self._capability.stop()
        else:
            self.recording = True
            self._got_result = False
            self.last_error = None
            self._capability.start()

    def _handle_start(self) -> None:
        self.listening = True

    def _handle_result(self, transcript: str) -> None:
        if self._got_result:
            return
        self._got_result = True
        self._collector.append(transcript)

    def _handle_end(self) -> None:
        self.listening = False
        self.recording = False

    def _handle_error(self, error: str) -> None:
        logger.error("Speech recognition error: %s", error)
        self.last_error = error
        self.listening = False
        self.recording = False


class CommandDictation:
    """Dictation backed by an external speech-to-text command.

    The command records from the microphone and prints the transcript on
    stdout. Callbacks fire from a background thread once it exits.
    """

    def __init__(self, command: list[str]) -> None:
        self._command = command
        self._process: subprocess.Popen[bytes] | None = None
        self._thread: threading.Thread | None = None
        self._stopped = False
        self.on_start: Callable[[], None] | None = None
        self.on_result: Callable[[str], None] | None = None
        self.on_end: Callable[[], None] | None = None
        self.on_error: Callable[[str], None] | None = None

    def start(self) -> None:
        self._stopped = False
        try:
            self._process = subprocess.Popen(
                self._command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            self._emit(self.on_error, str(exc))
            return

        self._emit(self.on_start)
        self._thread = threading.Thread(target=self._wait, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        if self._process is not None and self._process.poll() is None:
            self._stopped = True
            self._process.terminate()

    def wait(self, timeout: float | None = None) -> None:
        """Block until the current activation has finished."""
        if self._thread is not None:
            self._thread.join(timeout)

    def _wait(self) -> None:
        assert self._process is not None
        stdout, stderr = self._process.communicate()
        if self._process.returncode != 0 and not self._stopped:
            message = stderr.decode("utf-8", "replace").strip()
            self._emit(self.on_error, message or f"exit status {self._process.returncode}")
            return

        transcript = stdout.decode("utf-8", "replace").strip()
        if transcript:
            self._emit(self.on_result, transcript)
        self._emit(self.on_end)

    @staticmethod
    def _emit(callback: Callable[..., None] | None, *args: str) -> None:
        if callback is not None:
            callback(*args)
