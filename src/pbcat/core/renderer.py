# src/pbcat/core/renderer.py
import io
from pathlib import Path
from typing import BinaryIO, Sequence

from pbcat.config import HEADER_PREFIX, HEADER_SUFFIX
from pbcat.errors import EncodingError, FileIOError, translate_os_error
from pbcat.models import RenderOptions


def format_header(path: Path) -> str:
    """Header line emitted before a file's body, e.g. '== /src/a.txt ==\\n'."""
    return f"{HEADER_PREFIX}{path}{HEADER_SUFFIX}\n"


def read_text(path: Path) -> str:
    """Reads a whole file as strict UTF-8."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise translate_os_error(path, e) from e
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(path) from e


def _write(sink: BinaryIO, data: bytes, sink_name: str) -> int:
    try:
        sink.write(data)
    except OSError as e:
        raise FileIOError(sink_name, f"write failed ({e})") from e
    return len(data)


def render(files: Sequence[Path], options: RenderOptions, sink: BinaryIO, sink_name: str = "<output>") -> int:
    """
    Writes every file in `files` to `sink`, with optional headers and
    separators, and returns the number of bytes written.

    The sink is borrowed: it is neither flushed nor closed here.
    """
    separator = options.separator.encode("utf-8") if options.separator else b""
    written = 0
    last = len(files) - 1

    for index, path in enumerate(files):
        body = read_text(path)
        if options.header:
            written += _write(sink, format_header(path).encode("utf-8"), sink_name)
        written += _write(sink, body.encode("utf-8"), sink_name)
        if separator and index != last:
            written += _write(sink, separator, sink_name)

    return written


def render_to_bytes(files: Sequence[Path], options: RenderOptions) -> bytes:
    """Runs a full render pass into memory."""
    buffer = io.BytesIO()
    render(files, options, buffer, sink_name="<buffer>")
    return buffer.getvalue()
