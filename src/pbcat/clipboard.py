# src/pbcat/clipboard.py
"""
Clipboard delivery.

The rendered payload is piped into the first clipboard program that accepts
it. Setting PBCAT_CLIPBOARD_FILE writes the payload to a file instead, which
keeps the tool usable in tests and automation without a real clipboard.
"""
import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, List, Mapping, Optional, Sequence

from pbcat.config import CLIPBOARD_FILE_ENV
from pbcat.errors import ClipboardToolError, ClipboardUnavailableError, translate_os_error
from pbcat.models import ClipboardTool


def preferred_clipboard_tools(platform: Optional[str] = None) -> List[ClipboardTool]:
    """Candidate clipboard programs for `platform`, most preferred first."""
    platform = sys.platform if platform is None else platform
    if platform == "darwin":
        return [ClipboardTool("pbcopy")]
    if platform.startswith("linux"):
        return [
            ClipboardTool("wl-copy"),
            ClipboardTool("xclip", ("-selection", "clipboard")),
            ClipboardTool("xsel", ("--clipboard", "--input")),
        ]
    if platform in ("win32", "cygwin"):
        return [ClipboardTool("clip")]
    return []


def attempt_copy(tool: ClipboardTool, payload: bytes) -> None:
    """
    Pipes `payload` into one clipboard program. Raises ClipboardToolError
    unless the whole payload was written and the program exited with 0.
    """
    try:
        proc = subprocess.Popen(
            list(tool.command),
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        raise ClipboardToolError(tool.program, e.strerror or str(e)) from e

    write_error = None
    try:
        proc.stdin.write(payload)
    except OSError as e:
        write_error = e
    finally:
        # Closing stdin signals end of input; it can fail too if the pipe broke
        try:
            proc.stdin.close()
        except OSError as e:
            write_error = write_error or e

    returncode = proc.wait()
    if write_error is not None:
        raise ClipboardToolError(tool.program, f"write failed ({write_error})") from write_error
    if returncode != 0:
        raise ClipboardToolError(tool.program, f"exited with status {returncode}")


def copy_to_clipboard(
    payload: bytes,
    tools: Optional[Sequence[ClipboardTool]] = None,
    on_failure: Optional[Callable[[ClipboardToolError], None]] = None,
) -> ClipboardTool:
    """
    Tries each candidate once, in order, and returns the one that succeeded.
    `on_failure` is called with each candidate's error before moving on.
    """
    candidates = preferred_clipboard_tools() if tools is None else list(tools)
    last_error: Optional[ClipboardToolError] = None

    for tool in candidates:
        try:
            attempt_copy(tool, payload)
        except ClipboardToolError as e:
            last_error = e
            if on_failure is not None:
                on_failure(e)
            continue
        return tool

    raise ClipboardUnavailableError([t.program for t in candidates], last_error)


def write_clipboard_file(payload: bytes, path: Path) -> None:
    try:
        with open(path, "wb") as f:
            f.write(payload)
    except OSError as e:
        raise translate_os_error(path, e) from e


def clipboard_override(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    env = os.environ if environ is None else environ
    value = env.get(CLIPBOARD_FILE_ENV)
    return Path(value) if value else None


def deliver(
    payload: bytes,
    tools: Optional[Sequence[ClipboardTool]] = None,
    environ: Optional[Mapping[str, str]] = None,
    on_failure: Optional[Callable[[ClipboardToolError], None]] = None,
) -> Optional[Path]:
    """
    Puts `payload` on the clipboard, or into the override file when one is
    configured. Returns the override path, or None for the real clipboard.
    """
    override = clipboard_override(environ)
    if override is not None:
        write_clipboard_file(payload, override)
        return override

    copy_to_clipboard(payload, tools, on_failure=on_failure)
    return None
