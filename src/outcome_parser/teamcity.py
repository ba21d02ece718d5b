"""
Parser for TeamCity service messages as printed by `phpunit --teamcity`:

    ##teamcity[testStarted name='testFailed' locationHint='php_qn://tests/FooTest.php::\\FooTest::testFailed']
    ##teamcity[testFailed name='testFailed' message='Failed asserting that false is true.' details=' tests/FooTest.php:20|n ']
    ##teamcity[testFinished name='testFailed' duration='0']
"""

import asyncio
import re

from loguru import logger

from outcome_parser.arguments import parse_service_message
from outcome_parser.base import Parser
from outcome_parser.details import parse_detail, split_message
from outcome_parser.errors import ParseError
from outcome_parser.filesystem import FileSystem, LineLocator
from outcome_parser.models import Detail, Fault, TestCase, Type

# Events without a per-test payload
IGNORED_EVENTS = ("testCount", "testSuiteStarted", "testSuiteFinished")

TYPE_MAP = {
    "testPassed": Type.PASSED,
    "testFailed": Type.FAILURE,
    "testIgnored": Type.SKIPPED,
}


class TeamCityParser(Parser):
    name = "teamcity"

    def __init__(
        self,
        line_locator: LineLocator | None = None,
        path_separator: str = "/",
        marker: str = "##teamcity",
        location_scheme: str = "php_qn://",
        filesystem: FileSystem | None = None,
    ):
        super().__init__(filesystem)
        self.line_locator = line_locator or self.filesystem
        self.path_separator = path_separator
        self.marker = marker
        self.location_scheme = location_scheme

    async def parse(self, content: str) -> list[TestCase]:
        events = self._convert_to_arguments(content)
        groups = self._group_by_test(events)
        logger.debug(
            "Service messages grouped",
            extra={"component": "TeamCityParser", "events": len(events), "tests": len(groups)}
        )

        tasks = [asyncio.ensure_future(self._convert_to_test_case(group)) for group in groups]
        try:
            test_cases = await asyncio.gather(*tasks)
        except BaseException:
            # One failed lookup fails the parse, stop the others
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        logger.info(
            "TeamCity output parsed",
            extra={"component": "TeamCityParser", "test_cases": len(test_cases)}
        )
        return list(test_cases)

    def _convert_to_arguments(self, content: str) -> list[dict[str, str]]:
        events = []
        for line in re.split(r"\r|\n", content):
            if not line.startswith(self.marker):
                continue
            event = parse_service_message(line, self.marker)
            if event["type"] not in IGNORED_EVENTS:
                events.append(event)
        return events

    def _group_by_test(self, events: list[dict[str, str]]) -> list[list[dict[str, str]]]:
        """Split the event stream after every testFinished"""
        groups = []
        current: list[dict[str, str]] = []
        for event in events:
            current.append(event)
            if event["type"] == "testFinished":
                if len(current) == 2:
                    # No explicit event is emitted for passing tests
                    current.insert(1, {"type": "testPassed"})
                groups.append(current)
                current = []

        if current:
            raise ParseError(f"Test events without testFinished: {[event['type'] for event in current]}")

        return groups

    async def _convert_to_test_case(self, group: list[dict[str, str]]) -> TestCase:
        if len(group) != 3:
            raise ParseError(f"Unexpected test event group: {[event['type'] for event in group]}")

        start, error, finish = group
        file, class_name, name = self._parse_location_hint(start.get("locationHint"))

        type_ = TYPE_MAP.get(error["type"])
        if type_ is None:
            raise ParseError(f"Unexpected test event {error['type']!r} for {name!r}")

        try:
            time = float(finish.get("duration") or 0)
        except ValueError as e:
            raise ParseError(f"Invalid duration for {name!r}: {e}") from e

        test_case = {
            "name": name,
            "class": class_name,
            "classname": None,
            "file": file,
            "line": 0,
            "time": time,
        }

        if type_ is Type.PASSED:
            test_case["line"] = await self.line_locator.line_number_containing(file, f"function {name}")
            return TestCase(**test_case, type=type_)

        details = self._convert_to_details(error.get("details", error.get("message", "")))
        if details:
            test_case.update(file=details[0].file, line=details[0].line)

        return TestCase(
            **test_case,
            type=type_,
            fault=Fault(
                message=error.get("message", ""),
                details=[detail for detail in details if detail.file != test_case["file"]],
            ),
        )

    def _parse_location_hint(self, location_hint: str | None) -> tuple[str, str, str]:
        if not location_hint:
            raise ParseError("testStarted event without locationHint")

        hint = location_hint.strip()
        if hint.startswith(self.location_scheme):
            hint = hint[len(self.location_scheme):]
        parts = hint.replace("::/", "::", 1).split("::")

        if len(parts) != 3:
            logger.error(
                "Unexpected location hint",
                extra={"component": "TeamCityParser", "location_hint": location_hint}
            )
            raise ParseError(f"Expected file::class::method location hint, got {location_hint!r}")

        file, class_name, name = parts
        return self._rename_path(file), class_name, name

    def _convert_to_details(self, content: str) -> list[Detail]:
        details = []
        for line in split_message(content, "|n"):
            if not line:
                continue
            detail = parse_detail(line)
            details.append(Detail(file=self._rename_path(detail.file), line=detail.line))
        return details

    def _rename_path(self, path: str) -> str:
        return path.replace("/", self.path_separator)
