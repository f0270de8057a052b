# src/pbcat/core/walker.py
import os
from pathlib import Path
from typing import AbstractSet, Iterator, Mapping, Optional

from pbcat.config import DEFAULT_SKIP_DIRS
from pbcat.core.ignore import IgnoreStack, base_stack, push_directory_ignores
from pbcat.core.paths import canonicalize
from pbcat.errors import translate_os_error


class DirectoryWalker:
    """
    Recursively lists the regular files under a directory.

    Siblings are visited in name order and subdirectories are expanded where
    they sort, so the output is a pre-order traversal. Hidden entries, ignored
    entries and directories named in `skip_dirs` are left out; the root itself
    is never filtered. Symbolic links are neither followed nor reported.
    """

    def __init__(
        self,
        skip_dirs: AbstractSet[str] = DEFAULT_SKIP_DIRS,
        hidden: bool = False,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.skip_dirs = frozenset(skip_dirs)
        self.hidden = hidden
        self.environ = environ

    def walk(self, root) -> Iterator[Path]:
        root_path = canonicalize(root)
        stack = base_stack(root_path, self.environ)
        yield from self._walk_dir(root_path, stack)

    def _is_pruned_dir(self, name: str) -> bool:
        return name in self.skip_dirs

    def _walk_dir(self, directory: Path, stack: IgnoreStack) -> Iterator[Path]:
        stack = push_directory_ignores(stack, directory)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise translate_os_error(directory, e) from e

        for entry in entries:
            entry_path = directory / entry.name
            if not self.hidden and entry.name.startswith("."):
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file(follow_symlinks=False)
            except OSError as e:
                raise translate_os_error(entry_path, e) from e

            if is_dir:
                # Deny-listed names are pruned before ignore rules are consulted
                if self._is_pruned_dir(entry.name):
                    continue
                if stack.is_ignored(entry_path, is_dir=True):
                    continue
                yield from self._walk_dir(entry_path, stack)
            elif is_file:
                if stack.is_ignored(entry_path, is_dir=False):
                    continue
                yield entry_path


def walk_files(root, skip_dirs: AbstractSet[str] = DEFAULT_SKIP_DIRS, hidden: bool = False) -> Iterator[Path]:
    """Shortcut for DirectoryWalker(skip_dirs, hidden).walk(root)."""
    return DirectoryWalker(skip_dirs=skip_dirs, hidden=hidden).walk(root)
