import asyncio
from pathlib import Path
from typing import Protocol

from loguru import logger

from outcome_parser.errors import LineNotFoundError


class LineLocator(Protocol):
    async def line_number_containing(self, path: str, needle: str) -> int: ...


class FileSystem:
    """Reads report and source files for the parsers"""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    async def read_file(self, path: str | Path) -> str:
        """Return the whole content of a file"""
        return await asyncio.to_thread(Path(path).read_text, encoding=self.encoding)

    async def line_number_containing(self, path: str | Path, needle: str) -> int:
        """Return the zero-based index of the first line of a file containing needle"""
        return await asyncio.to_thread(self._scan, Path(path), needle)

    def _scan(self, path: Path, needle: str) -> int:
        with open(path, "r", encoding=self.encoding) as f:
            for index, line in enumerate(f):
                if needle in line:
                    return index

        logger.debug(
            "Line lookup missed",
            extra={"component": "FileSystem", "path": str(path), "needle": needle}
        )
        raise LineNotFoundError(str(path), needle)
