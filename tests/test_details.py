"""Tests for file:line reference extraction"""
import pytest

from outcome_parser.details import extract_details, parse_detail, split_message
from outcome_parser.errors import ParseError
from outcome_parser.models import Detail


def test_extract_details_is_zero_based_and_ordered():
    lines = split_message("Failed asserting that false is true.\r\n\r\nfoo.php:20\r\nbar.php:3\r\n")
    assert extract_details(lines) == [Detail(file="foo.php", line=19), Detail(file="bar.php", line=2)]


def test_extract_details_without_references():
    assert extract_details(["Skipped Test", "", "line 12 of something"]) == []


def test_extract_details_keeps_windows_drive_letter():
    details = extract_details([r"  C:\Users\recca\tests\FooTest.php:45  "])
    assert details == [Detail(file=r"C:\Users\recca\tests\FooTest.php", line=44)]


def test_only_trailing_digits_are_a_line_number():
    assert extract_details(["foo.php:20 in closure"]) == []
    assert extract_details(["foo.php:20:7"]) == [Detail(file="foo.php:20", line=6)]


def test_split_message_with_service_message_separator():
    assert split_message(" a.php:5|nb.php:9|n ", "|n") == ["a.php:5", "b.php:9", ""]


def test_parse_detail():
    assert parse_detail(" a.php:5 ") == Detail(file="a.php", line=4)


def test_parse_detail_rejects_free_text():
    with pytest.raises(ParseError):
        parse_detail("Failed asserting that false is true.")
