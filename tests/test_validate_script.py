"""
Validate script tests - exit codes for parse failures and content issues.
"""

import json

import pytest

from scripts.validate_book import validate


CLEAN_BOOK = {
    "default_buttons": {"green": {"text": "Next", "action": "NextPage"}},
    "pages": [
        {"name": "one"},
        {"name": "two", "is_final": True},
    ],
}

# Last page advances past the end
BOOK_WITH_ISSUES = {
    "default_buttons": {"green": {"text": "Next", "action": "NextPage"}},
    "pages": [{"name": "one"}, {"name": "two"}],
}


@pytest.fixture
def write_book(tmp_path):
    def _write(data, name="book.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


class TestValidate:
    def test_clean_book(self, write_book):
        path = write_book(CLEAN_BOOK)
        assert validate(path) == 0
        assert validate(path, strict=True) == 0

    def test_missing_file(self, tmp_path):
        assert validate(tmp_path / "missing.json") == 1

    def test_parse_failure(self, tmp_path):
        path = tmp_path / "book.json"
        path.write_text("{broken", encoding="utf-8")
        assert validate(path) == 1

    def test_validation_failure_logs_details(self, write_book, caplog):
        path = write_book({"pages": [{"lines": [{"size": 10}]}]})
        with caplog.at_level("ERROR"):
            assert validate(path) == 1
        assert "pages.0.lines.0" in caplog.text

    def test_issues_pass_without_strict(self, write_book):
        assert validate(write_book(BOOK_WITH_ISSUES)) == 0

    def test_issues_fail_with_strict(self, write_book):
        assert validate(write_book(BOOK_WITH_ISSUES), strict=True) == 1
