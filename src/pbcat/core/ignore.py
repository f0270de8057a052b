# src/pbcat/core/ignore.py
import configparser
import os
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple

import pathspec

from pbcat.config import IGNORE_FILENAMES
from pbcat.errors import EncodingError, FileIOError, translate_os_error


class IgnoreLayer:
    """Patterns from one ignore source, anchored at the directory `base`."""

    def __init__(self, base: Path, spec: pathspec.PathSpec, source: Optional[Path] = None):
        self.base = base
        self.spec = spec
        self.source = source

    @classmethod
    def from_lines(cls, base: Path, lines: Iterable[str], source: Optional[Path] = None) -> "IgnoreLayer":
        try:
            spec = pathspec.PathSpec.from_lines("gitignore", lines)
        except ValueError as e:
            # GitIgnorePatternError subclasses ValueError
            raise FileIOError(source or base, f"invalid ignore pattern ({e})") from e
        return cls(base, spec, source)

    def check(self, path: Path, is_dir: bool = False) -> Optional[bool]:
        """
        Returns None when no pattern in this layer matches `path`, otherwise
        the verdict of the last matching pattern: True means ignored, False
        means re-included by a negated pattern.

        Only a match on `path` itself counts. A pattern naming one of its
        parent directories does not reach down to it; the walker prunes such
        directories before their contents are ever checked.
        """
        try:
            rel = path.relative_to(self.base).as_posix()
        except ValueError:
            return None
        if rel == ".":
            return None

        verdict = None
        for pattern in self.spec.patterns:
            if pattern.include is None:
                continue
            if _matches_itself(pattern, rel, is_dir):
                verdict = pattern.include
        return verdict

    def __repr__(self):
        return f"IgnoreLayer(base={str(self.base)!r}, source={str(self.source)!r})"


def _pattern_body(text: str) -> str:
    """The pattern text without its negation mark and trailing blanks."""
    if not text.endswith("\\ "):
        text = text.rstrip()
    if text.startswith("!"):
        text = text[1:]
    return text


def _matches_itself(pattern, rel: str, is_dir: bool) -> bool:
    # pathspec compiles patterns for prefix search, so "out/" also hits
    # "out/report.txt"; only a match covering the whole of `rel` is kept
    regex = pattern.regex
    if regex.pattern == ".":
        # "*" and "**"
        return True
    if regex.pattern == "/":
        # "*/" and "**/"
        return is_dir

    body = _pattern_body(pattern.pattern)
    if body == "/":
        return False
    if body.endswith("/") and not is_dir:
        return False
    if body.rstrip("/").endswith("/**"):
        # "cfg/**" matches everything inside cfg, never cfg itself
        match = regex.search(rel)
        return match is not None and match.end() < len(rel)

    candidate = rel + "/" if is_dir else rel
    return regex.fullmatch(candidate) is not None


class IgnoreStack:
    """
    Immutable stack of ignore layers, broadest first.
    The deepest layer with an opinion about a path decides.
    """

    def __init__(self, layers: Tuple[IgnoreLayer, ...] = ()):
        self.layers = layers

    def push(self, layer: Optional[IgnoreLayer]) -> "IgnoreStack":
        if layer is None:
            return self
        return IgnoreStack(self.layers + (layer,))

    def is_ignored(self, path: Path, is_dir: bool = False) -> bool:
        for layer in reversed(self.layers):
            verdict = layer.check(path, is_dir)
            if verdict is not None:
                return verdict
        return False

    def __len__(self):
        return len(self.layers)


def load_ignore_file(base: Path, path: Path) -> Optional[IgnoreLayer]:
    """Loads a gitignore-style file. Returns None if it does not exist."""
    try:
        if not path.is_file():
            return None
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except UnicodeDecodeError as e:
        raise EncodingError(path) from e
    except OSError as e:
        raise translate_os_error(path, e) from e
    return IgnoreLayer.from_lines(base, lines, source=path)


def push_directory_ignores(stack: IgnoreStack, directory: Path) -> IgnoreStack:
    """Pushes the per-directory ignore files found in `directory`."""
    for name in IGNORE_FILENAMES:
        stack = stack.push(load_ignore_file(directory, directory / name))
    return stack


def find_repo_root(start: Path) -> Optional[Path]:
    """Returns the nearest directory at or above `start` that holds a .git entry."""
    for candidate in (start, *start.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def _read_excludes_setting(config_file: Path) -> Optional[str]:
    parser = configparser.ConfigParser(strict=False, interpolation=None, allow_no_value=True)
    try:
        parser.read(config_file, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError):
        # Not every valid git config is valid INI; fall back to the default location
        return None
    if not parser.has_option("core", "excludesfile"):
        return None
    value = parser.get("core", "excludesfile")
    if not value:
        return None
    return value.strip().strip('"')


def global_excludes_file(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """
    Locates the user's global ignore file the way git does: core.excludesFile
    from the global config, else $XDG_CONFIG_HOME/git/ignore.
    """
    env = os.environ if environ is None else environ
    home = Path(env.get("HOME") or Path.home())

    config_file = Path(env["GIT_CONFIG_GLOBAL"]) if env.get("GIT_CONFIG_GLOBAL") else home / ".gitconfig"
    if config_file.is_file():
        setting = _read_excludes_setting(config_file)
        if setting:
            if setting.startswith("~"):
                setting = str(home) + setting[1:]
            return Path(setting)

    xdg = env.get("XDG_CONFIG_HOME")
    config_home = Path(xdg) if xdg else home / ".config"
    return config_home / "git" / "ignore"


def base_stack(root: Path, environ: Optional[Mapping[str, str]] = None) -> IgnoreStack:
    """
    Builds the rules that already apply when a walk enters `root`.

    Inside a git repository these are, broadest first: the global excludes
    file, .git/info/exclude, and the ignore files of every directory from the
    repository top down to the parent of `root`. Outside a repository the
    stack is empty and only ignore files found during the walk apply.
    """
    stack = IgnoreStack()
    repo = find_repo_root(root)
    if repo is None:
        return stack

    global_file = global_excludes_file(environ)
    if global_file is not None:
        stack = stack.push(load_ignore_file(repo, global_file))
    stack = stack.push(load_ignore_file(repo, repo / ".git" / "info" / "exclude"))

    ancestors: List[Path] = []
    current = root.parent if root != repo else None
    while current is not None:
        ancestors.append(current)
        if current == repo:
            break
        current = current.parent
    for directory in reversed(ancestors):
        stack = push_directory_ignores(stack, directory)
    return stack
