"""Common types and data structures for rmate"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

STDIN_SENTINEL = "-"
UNTITLED_NAME = "untitled"


class TargetMode(Enum):
    """Where the content handed to the editor comes from"""
    FILE = "file"
    STDIN = "stdin"


@dataclass(frozen=True)
class TargetSelection:
    """What is being sent and how it is labelled on the editor side"""
    mode: TargetMode
    display_name: str
    resolved_path: Optional[str] = None

    def isStdin(self) -> bool:
        """Check if content is read from standard input"""
        return self.mode == TargetMode.STDIN
