"""Summary and serialized views of one parse result"""

import json
from collections.abc import Sequence
from typing import Any

import yaml
from loguru import logger

from outcome_parser.errors import ParserConfigError
from outcome_parser.models import TYPE_KEYS, TestCase
from outcome_parser.settings import get_settings

REPORT_FORMATS = ("json", "yaml")


def summarize(test_cases: Sequence[TestCase]) -> dict[str, int]:
    """Count test cases per severity group"""
    summary = {"tests": len(test_cases)}
    summary.update({key.value: 0 for key in TYPE_KEYS})
    for test_case in test_cases:
        summary[test_case.group.value] += 1
    return summary


def to_dicts(test_cases: Sequence[TestCase]) -> list[dict[str, Any]]:
    return [test_case.model_dump(mode="json", by_alias=True, exclude_none=True) for test_case in test_cases]


def render(test_cases: Sequence[TestCase], fmt: str | None = None) -> str:
    """Serialize test cases with their summary as a json or yaml document"""
    fmt = (fmt or get_settings().report_format).lower()
    if fmt not in REPORT_FORMATS:
        raise ParserConfigError(f"Unknown report format {fmt!r}, expected one of {list(REPORT_FORMATS)}")

    report = {
        "summary": summarize(test_cases),
        "tests": to_dicts(test_cases),
    }
    logger.debug(
        "Rendering test cases",
        extra={"component": "report", "format": fmt, "total_tests": len(test_cases)}
    )

    if fmt == "yaml":
        return yaml.dump(report, default_flow_style=False, allow_unicode=True, sort_keys=False)
    return json.dumps(report, indent=2, ensure_ascii=False)
