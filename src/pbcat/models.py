# src/pbcat/models.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class SortMode(Enum):
    ARGS = "args"
    NAME = "name"


@dataclass(frozen=True)
class RenderOptions:
    """Immutable settings for one render pass."""
    separator: Optional[str] = None
    header: bool = False
    sort: SortMode = SortMode.ARGS


@dataclass(frozen=True)
class ClipboardTool:
    """A clipboard program that reads the data to copy from stdin."""
    program: str
    args: Tuple[str, ...] = ()

    @property
    def command(self) -> Tuple[str, ...]:
        return (self.program,) + tuple(self.args)


@dataclass(frozen=True)
class CopySummary:
    files: int
    bytes: int
