# src/pbcat/config.py

# Directory names that are never descended into, whatever the ignore files say.
DEFAULT_SKIP_DIRS = frozenset({
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "bower_components",
    "target",
    "build",
    "dist",
    "__pycache__",
    ".venv",
    "venv",
    ".tox",
    ".mypy_cache",
    ".pytest_cache",
    ".idea",
    ".vscode",
})

# Per-directory ignore files, lowest precedence first.
IGNORE_FILENAMES = (".gitignore", ".ignore")

# When set, rendered output is written to this file instead of the clipboard.
CLIPBOARD_FILE_ENV = "PBCAT_CLIPBOARD_FILE"

HEADER_PREFIX = "== "
HEADER_SUFFIX = " =="
