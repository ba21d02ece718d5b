"""
Decoding of TeamCity service message lines, e.g.

    ##teamcity[testFailed name='testFailed' message='Failed asserting that false is true.']
"""

import re
import shlex

from loguru import logger

from outcome_parser.errors import ParseError


def split_arguments(line: str) -> list[str]:
    """Split a line the way a POSIX shell splits a command line"""
    try:
        return shlex.split(line, posix=True)
    except ValueError as e:
        logger.error(
            "Malformed quoting in service message",
            extra={"component": "arguments", "line": line, "error": str(e)}
        )
        raise ParseError(f"Cannot split service message {line!r}: {e}") from e


def parse_service_message(line: str, marker: str = "##teamcity") -> dict[str, str]:
    """Decode one service message into its type and key/value options"""
    body = re.sub(rf"^{re.escape(marker)}\[|\]$", "", line.strip())
    body = body.replace("\\", "/")

    argv = split_arguments(body)
    if not argv:
        raise ParseError(f"Service message without a type: {line!r}")

    options = {"type": argv[0]}
    for arg in argv[1:]:
        key, _, value = arg.partition("=")
        options[key] = value

    return options
