# src/pbcat/core/paths.py
import os
from pathlib import Path
from typing import Union

from pbcat.errors import translate_os_error


def canonicalize(path: Union[str, os.PathLike]) -> Path:
    """
    Returns the absolute, symlink-resolved form of `path`.
    The path must exist; failures carry the path exactly as given.
    """
    try:
        return Path(path).resolve(strict=True)
    except OSError as e:
        raise translate_os_error(os.fspath(path), e) from e
    except RuntimeError as e:
        # Raised by older interpreters on symlink loops
        raise translate_os_error(os.fspath(path), OSError(str(e))) from e
