"""Tests for summaries and rendered output"""
import asyncio
import json

import pytest
import yaml

from outcome_parser.errors import ParserConfigError
from outcome_parser.junit import JUnitParser
from outcome_parser.report import render, summarize


@pytest.fixture
def test_cases(junit_report):
    return asyncio.run(JUnitParser().parse(junit_report))


def test_summarize(test_cases):
    assert summarize(test_cases) == {
        "tests": 8,
        "passed": 1,
        "error": 3,
        "incomplete": 1,
        "skipped": 3,
    }


def test_summarize_empty():
    assert summarize([]) == {"tests": 0, "passed": 0, "error": 0, "incomplete": 0, "skipped": 0}


def test_render_json(test_cases):
    report = json.loads(render(test_cases))
    assert report["summary"]["tests"] == 8
    passed = report["tests"][0]
    assert passed["class"] == "PHPUnitTest"
    assert passed["type"] == "passed"
    assert "fault" not in passed
    assert report["tests"][1]["fault"]["type"] == "PHPUnit_Framework_ExpectationFailedException"


def test_render_yaml(test_cases):
    report = yaml.safe_load(render(test_cases, "YAML"))
    assert report["summary"]["skipped"] == 3
    assert report["tests"][5]["fault"]["details"] == [
        {"file": r"C:\Users\recca\github\tester-phpunit\src\Receiver.php", "line": 84},
    ]


def test_render_unknown_format(test_cases):
    with pytest.raises(ParserConfigError):
        render(test_cases, "xml")


def test_render_uses_configured_format(test_cases, monkeypatch):
    monkeypatch.setenv("OUTCOME_PARSER__REPORT_FORMAT", "yaml")
    report = yaml.safe_load(render(test_cases))
    assert report["summary"]["tests"] == 8
    assert render(test_cases).startswith("summary:")


def test_render_defaults_to_json(test_cases, monkeypatch):
    monkeypatch.delenv("OUTCOME_PARSER__REPORT_FORMAT", raising=False)
    assert json.loads(render(test_cases))["summary"]["tests"] == 8
