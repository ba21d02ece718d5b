"""Shared fixtures for the parser tests"""
import asyncio
from pathlib import Path

import pytest


FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeLocator:
    """In-memory line locator that records the lookups it serves"""

    def __init__(self, lines=None, delays=None):
        self.lines = lines or {}
        self.delays = delays or {}
        self.calls = []

    async def line_number_containing(self, path, needle):
        self.calls.append((path, needle))
        await asyncio.sleep(self.delays.get(needle, 0))
        return self.lines.get(needle, 0)


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def junit_report():
    return (FIXTURES_DIR / "junit.xml").read_text(encoding="utf-8")


@pytest.fixture
def teamcity_output():
    return (FIXTURES_DIR / "teamcity.txt").read_text(encoding="utf-8")


@pytest.fixture
def locator():
    return FakeLocator({"function testPassed": 13})
