"""
Parser for JUnit XML reports:

    <testsuites>
      <testsuite>
        <testcase name="..." class="..." file="..." line="12" time="0.01">
          <failure type="...">message</failure>
        </testcase>
      </testsuite>
    </testsuites>
"""

import xml.etree.ElementTree as ET

from loguru import logger

from outcome_parser.base import Parser
from outcome_parser.details import crlf2lf, extract_details
from outcome_parser.errors import ParseError
from outcome_parser.models import Detail, Fault, TestCase, Type


class JUnitParser(Parser):
    name = "junit"

    async def parse(self, content: str) -> list[TestCase]:
        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            logger.error(
                "Invalid JUnit XML",
                extra={"component": "JUnitParser", "error": str(e)}
            )
            raise ParseError(f"Invalid JUnit XML: {e}") from e

        if root.tag not in ("testsuites", "testsuite"):
            raise ParseError(f"Unexpected JUnit root element <{root.tag}>")

        test_cases = self._parse_test_suite(root)
        logger.info(
            "JUnit report parsed",
            extra={"component": "JUnitParser", "test_cases": len(test_cases)}
        )
        return test_cases

    def _parse_test_suite(self, node: ET.Element) -> list[TestCase]:
        test_cases = []
        for child in node:
            if child.tag == "testsuite":
                test_cases.extend(self._parse_test_suite(child))
            elif child.tag == "testcase":
                test_cases.append(self._parse_test_case(child))
        return test_cases

    def _parse_test_case(self, node: ET.Element) -> TestCase:
        attrs = node.attrib
        try:
            line = int(attrs.get("line") or 1) - 1
            time = float(attrs.get("time") or 0)
        except ValueError as e:
            raise ParseError(f"Invalid line or time on testcase {attrs.get('name')!r}: {e}") from e

        test_case = {
            "name": attrs.get("name") or None,
            "class": attrs.get("class"),
            "classname": attrs.get("classname") or None,
            "file": attrs.get("file"),
            "line": line,
            "time": time,
        }

        fault = self._get_fault_node(node)
        if fault is None:
            return TestCase(**test_case, type=Type.PASSED)

        type_, fault_node = fault
        message = crlf2lf(fault_node.text or "")
        details = extract_details(message.split("\n"))

        for detail in details:
            message = message.replace(f"{detail.file}:{detail.line + 1}", "", 1).strip()

        nominal_file = test_case["file"]
        test_case.update(self._current_file(details, nominal_file, line))

        return TestCase(
            **test_case,
            type=type_,
            fault=Fault(
                type=fault_node.get("type") or "",
                message=message.strip(),
                details=[detail for detail in details if detail.file != nominal_file],
            ),
        )

    def _current_file(self, details: list[Detail], file: str | None, line: int) -> dict:
        """Location of the failure: the last reference into the test's own file wins"""
        own = [detail for detail in details if detail.file == file]
        if own:
            return {"file": own[-1].file, "line": own[-1].line}
        return {"file": file, "line": line}

    def _get_fault_node(self, node: ET.Element) -> tuple[Type, ET.Element] | None:
        error = node.find("error")
        if error is not None:
            return self._parse_error_type(error), error

        warning = node.find("warning")
        if warning is not None:
            return Type.WARNING, warning

        failure = node.find("failure")
        if failure is not None:
            return Type.FAILURE, failure

        if node.find("skipped") is not None or node.find("incomplete") is not None:
            # Marker elements carry no message, report them as a bare skip
            return Type.SKIPPED, ET.Element("skipped", {"type": Type.SKIPPED.value})

        return None

    def _parse_error_type(self, error: ET.Element) -> Type:
        error_type = (error.get("type") or "").lower()

        if Type.SKIPPED.value in error_type:
            return Type.SKIPPED
        if Type.INCOMPLETE.value in error_type:
            return Type.INCOMPLETE
        if Type.FAILED.value in error_type:
            return Type.FAILED
        return Type.ERROR
