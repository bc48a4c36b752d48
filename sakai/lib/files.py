"""Extraction of the file blocks the assistant emits for download."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath

FILE_BLOCK_PATTERN = re.compile(r"---BEGIN_FILE:\s*(.+?)\s*---(.*?)---END_FILE---", re.DOTALL)


@dataclass(frozen=True)
class FileBlock:
    name: str
    content: str

    @property
    def safe_name(self) -> str:
        """File name stripped of any directory component."""
        return PurePosixPath(self.name.replace("\\", "/")).name or "fichier.txt"


def extract_file_blocks(text: str) -> list[FileBlock]:
    """Return the ``---BEGIN_FILE: name---`` blocks of ``text`` in order."""
    return [
        FileBlock(name=match.group(1), content=match.group(2).strip("\n"))
        for match in FILE_BLOCK_PATTERN.finditer(text)
    ]
