"""System clipboard access for the copy command.

Uses pbcopy on macOS and wl-copy or xclip on Linux.
"""

from __future__ import annotations

import shutil
import subprocess
import sys


class ClipboardUnavailableError(RuntimeError):
    """Raised when no clipboard tool can be used."""


def clipboard_command(platform: str = sys.platform) -> list[str] | None:
    """Pick the clipboard command for this platform, or None."""
    if platform == "darwin":
        candidates = [["pbcopy"]]
    elif platform.startswith("linux"):
        candidates = [["wl-copy"], ["xclip", "-selection", "clipboard"]]
    elif platform.startswith("win"):
        candidates = [["clip"]]
    else:
        candidates = []

    for command in candidates:
        if shutil.which(command[0]):
            return command
    return None


def copy_to_clipboard(text: str) -> None:
    command = clipboard_command()
    if command is None:
        raise ClipboardUnavailableError("No clipboard tool found (install xclip or wl-copy).")

    try:
        subprocess.run(command, input=text.encode("utf-8"), check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ClipboardUnavailableError(f"Clipboard command failed: {exc}") from exc
