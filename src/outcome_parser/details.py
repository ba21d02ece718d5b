import re
from collections.abc import Iterable

from outcome_parser.errors import ParseError
from outcome_parser.models import Detail

# Only trailing digits count as a line number, so "C:\path\file.php:12" keeps
# its drive letter in the file part.
DETAIL_PATTERN = re.compile(r"^(.*):(\d+)$")


def crlf2lf(text: str) -> str:
    return text.replace("\r\n", "\n")


def split_message(text: str, separator: str = "\n") -> list[str]:
    """Normalize line endings, split on the format's separator and trim each part"""
    return [line.strip() for line in crlf2lf(text).split(separator)]


def extract_details(lines: Iterable[str]) -> list[Detail]:
    """Collect the file:line references found at the end of the given lines.

    Line numbers are converted from one-based to zero-based. Lines without a
    trailing reference are ignored and source order is preserved.
    """
    details = []
    for line in lines:
        match = DETAIL_PATTERN.match(line.strip())
        if match:
            details.append(Detail(file=match.group(1), line=int(match.group(2)) - 1))
    return details


def parse_detail(text: str) -> Detail:
    """Strict variant of extract_details for text that must be a reference"""
    match = DETAIL_PATTERN.match(text.strip())
    if not match:
        raise ParseError(f"Expected a file:line reference, got {text!r}")
    return Detail(file=match.group(1), line=int(match.group(2)) - 1)
