from loguru import logger

from outcome_parser.base import Parser
from outcome_parser.errors import ParserConfigError
from outcome_parser.filesystem import FileSystem
from outcome_parser.junit import JUnitParser
from outcome_parser.settings import ParserSettings, get_settings
from outcome_parser.teamcity import TeamCityParser


class ParserFactory:
    """Builds report parsers by format name"""

    parsers: dict[str, type[Parser]] = {
        JUnitParser.name: JUnitParser,
        TeamCityParser.name: TeamCityParser,
    }

    def __init__(self, settings: ParserSettings | None = None, filesystem: FileSystem | None = None):
        self.settings = settings or get_settings()
        self.filesystem = filesystem or FileSystem(encoding=self.settings.encoding)

    def names(self) -> list[str]:
        return list(self.parsers)

    def create(self, name: str | None = None) -> Parser:
        name = (name or self.settings.default_parser).lower()
        if name not in self.parsers:
            logger.error(
                "Unknown parser requested",
                extra={"component": "ParserFactory", "parser": name, "available": self.names()}
            )
            raise ParserConfigError(f"Unknown parser {name!r}, expected one of {self.names()}")

        if self.parsers[name] is TeamCityParser:
            return TeamCityParser(
                path_separator=self.settings.path_separator,
                marker=self.settings.teamcity_marker,
                location_scheme=self.settings.location_scheme,
                filesystem=self.filesystem,
            )
        return self.parsers[name](filesystem=self.filesystem)
