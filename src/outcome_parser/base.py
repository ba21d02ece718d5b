"""Common interface of the report parsers"""

from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger

from outcome_parser.filesystem import FileSystem
from outcome_parser.models import TestCase


class Parser(ABC):
    """Turns the raw output of a test runner into TestCase records"""

    name: str = ""

    def __init__(self, filesystem: FileSystem | None = None):
        self.filesystem = filesystem or FileSystem()

    @abstractmethod
    async def parse(self, content: str) -> list[TestCase]:
        """Parse report content and return its test cases in report order.

        Args:
            content: Raw report text.

        Returns:
            One TestCase per test found in the report.

        Raises:
            ParseError: The content does not follow the report format.
        """
        ...

    async def parse_file(self, path: str | Path) -> list[TestCase]:
        """Read a report from disk and parse it"""
        content = await self.filesystem.read_file(path)
        logger.debug(
            "Report file read",
            extra={"component": type(self).__name__, "path": str(path), "size": len(content)}
        )
        return await self.parse(content)
