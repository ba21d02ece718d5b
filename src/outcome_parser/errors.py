class OutcomeParserError(Exception):
    """Base class for every error raised by outcome_parser"""


class ParseError(OutcomeParserError, ValueError):
    """Input does not follow the grammar of its report format"""


class ParserConfigError(OutcomeParserError, LookupError):
    """Unknown parser name or output format"""


class LineNotFoundError(OutcomeParserError, LookupError):
    """No line of a source file contains the requested text"""

    def __init__(self, path: str, needle: str):
        super().__init__(f"{needle!r} not found in {path}")
        self.path = path
        self.needle = needle
