# src/pbcat/core/resolver.py
import os
import stat
from pathlib import Path
from typing import Iterable, List, Optional, Set

from pbcat.core.paths import canonicalize
from pbcat.core.walker import DirectoryWalker
from pbcat.errors import InvalidInputError, NoFilesFoundError, translate_os_error
from pbcat.models import SortMode


class FileSetResolver:
    """
    Turns a list of file and directory arguments into an ordered list of
    unique canonical file paths. Each call to resolve() starts afresh.
    """

    def __init__(self, walker: Optional[DirectoryWalker] = None):
        self.walker = walker or DirectoryWalker()
        self.files: List[Path] = []
        self._seen: Set[Path] = set()

    def add_file(self, path) -> bool:
        """Adds `path` unless its canonical form is already present."""
        canonical = canonicalize(path)
        if canonical in self._seen:
            return False
        self._seen.add(canonical)
        self.files.append(canonical)
        return True

    def add_input(self, target) -> None:
        try:
            mode = os.stat(target).st_mode
        except OSError as e:
            raise translate_os_error(os.fspath(target), e) from e

        if stat.S_ISREG(mode):
            self.add_file(target)
        elif stat.S_ISDIR(mode):
            for path in self.walker.walk(target):
                self.add_file(path)
        else:
            raise InvalidInputError(os.fspath(target))

    def resolve(self, inputs: Iterable, sort: SortMode = SortMode.ARGS) -> List[Path]:
        """Resolves `inputs` from scratch; earlier calls leave nothing behind."""
        self.files = []
        self._seen = set()
        for target in inputs:
            self.add_input(target)

        if not self.files:
            raise NoFilesFoundError()

        if sort is SortMode.NAME:
            return sorted(self.files, key=str)
        return list(self.files)


def resolve_files(inputs: Iterable, sort: SortMode = SortMode.ARGS,
                  walker: Optional[DirectoryWalker] = None) -> List[Path]:
    return FileSetResolver(walker).resolve(inputs, sort)
