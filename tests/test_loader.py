"""
Loader tests - parsing content files, parse failures, polling, and lint.
"""

import json
import os
from pathlib import Path

import pytest

from vnbook.reader import (
    BookLoader,
    ContentParseError,
    format_for_path,
    lint_book,
    load_book,
    parse_book,
)
from vnbook.schemas import Book, JumpToPage, NextPage, TextAlign


SAMPLE_BOOK = Path(__file__).parent.parent / "data" / "book.json"

MINIMAL = {
    "default_buttons": {"green": {"text": "Next", "action": "NextPage"}},
    "pages": [
        {"name": "one", "lines": [{"text": "Hello"}]},
        {"name": "two", "is_final": True, "lines": [{"text": "Bye"}]},
    ],
}

YAML_BOOK = """
line_spacing: 12
default_buttons:
  green:
    text: Next
    action: NextPage
pages:
  - name: one
    content_alignment: start
    lines:
      - text: Hello
        color: "#ff0000"
  - name: two
    buttons:
      red:
        text: Back
        action:
          JumpToPage: one
"""


class TestParseBook:
    def test_parse_json(self):
        book = parse_book(json.dumps(MINIMAL))
        assert len(book.pages) == 2
        assert book.pages[1].is_final
        assert book.line_spacing == 30.0

    def test_parse_bytes(self):
        book = parse_book(json.dumps(MINIMAL).encode("utf-8"))
        assert book.pages[0].name == "one"

    def test_parse_yaml(self):
        book = parse_book(YAML_BOOK, fmt="yaml")
        assert book.line_spacing == 12
        assert book.pages[0].content_alignment == TextAlign.START
        assert book.pages[0].lines[0].color.r == 1.0
        assert book.pages[1].buttons["red"].action == JumpToPage(target="one")

    def test_yml_alias(self):
        assert parse_book(YAML_BOOK, fmt="yml").pages[0].name == "one"

    def test_missing_optional_fields_use_defaults(self):
        book = parse_book('{"pages": [{"lines": []}]}')
        assert book.default_buttons == {}
        assert book.pages[0].is_final is False
        assert book.pages[0].buttons is None

    def test_invalid_json(self):
        with pytest.raises(ContentParseError) as exc_info:
            parse_book('{"pages": [', source="broken.json")
        assert "broken.json" in str(exc_info.value)

    def test_invalid_yaml(self):
        with pytest.raises(ContentParseError):
            parse_book("pages: [unclosed", fmt="yaml")

    def test_invalid_utf8(self):
        with pytest.raises(ContentParseError):
            parse_book(b"\xff\xfe\x00")

    def test_root_must_be_object(self):
        with pytest.raises(ContentParseError):
            parse_book("[1, 2, 3]")
        with pytest.raises(ContentParseError):
            parse_book("", fmt="yaml")

    def test_unsupported_format(self):
        with pytest.raises(ContentParseError):
            parse_book("{}", fmt="toml")

    def test_validation_errors_have_details(self):
        bad = {"pages": [{"lines": [{"size": 10}]}, {"buttons": {"a": {"text": "x", "action": "Fly"}}}]}
        with pytest.raises(ContentParseError) as exc_info:
            parse_book(json.dumps(bad))
        locations = [loc for loc, _ in exc_info.value.details]
        assert any(loc.startswith("pages.0.lines.0") for loc in locations)
        assert any(loc.startswith("pages.1.buttons.a.action") for loc in locations)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_book("not json")


class TestLoadBook:
    def test_load_sample_book(self):
        book = load_book(SAMPLE_BOOK)
        assert book.pages[0].name == "intro"
        assert book.page_index("walk_away") == len(book.pages) - 1
        assert lint_book(book) == []

    def test_load_yaml_file(self, tmp_path):
        path = tmp_path / "book.yaml"
        path.write_text(YAML_BOOK, encoding="utf-8")
        assert len(load_book(path).pages) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_book(tmp_path / "nope.json")

    def test_lint_issues_are_logged(self, tmp_path, caplog):
        data = {"pages": [{"name": "a", "buttons": {"go": {"text": "Go", "action": {"JumpToPage": "zz"}}}}]}
        path = tmp_path / "book.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        with caplog.at_level("WARNING"):
            load_book(path)
        assert "unresolved_jump" in caplog.text

    def test_format_for_path(self):
        assert format_for_path(Path("a.yaml")) == "yaml"
        assert format_for_path(Path("a.YML")) == "yaml"
        assert format_for_path(Path("a.json")) == "json"
        assert format_for_path(Path("a.txt")) == "json"


class TestBookLoader:
    def test_poll_before_file_exists(self, tmp_path):
        loader = BookLoader(tmp_path / "book.json")
        assert loader.poll() is None
        assert not loader.loaded

    def test_poll_returns_book_once(self, tmp_path):
        path = tmp_path / "book.json"
        path.write_text(json.dumps(MINIMAL), encoding="utf-8")
        loader = BookLoader(path)

        book = loader.poll()
        assert isinstance(book, Book)
        assert loader.loaded
        assert loader.poll() is None

    def test_reload_on_change(self, tmp_path):
        path = tmp_path / "book.json"
        path.write_text(json.dumps(MINIMAL), encoding="utf-8")
        loader = BookLoader(path, reload=True)
        assert loader.poll() is not None
        assert loader.poll() is None

        changed = dict(MINIMAL, line_spacing=5)
        path.write_text(json.dumps(changed), encoding="utf-8")
        stat = path.stat()
        os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

        book = loader.poll()
        assert book is not None
        assert book.line_spacing == 5

    def test_parse_failure_propagates(self, tmp_path):
        path = tmp_path / "book.json"
        path.write_text("{broken", encoding="utf-8")
        loader = BookLoader(path)
        with pytest.raises(ContentParseError):
            loader.poll()
        assert not loader.loaded


class TestLintBook:
    def kinds(self, book: Book) -> list[str]:
        return [issue.kind for issue in lint_book(book)]

    def test_clean_book(self):
        assert lint_book(parse_book(json.dumps(MINIMAL))) == []

    def test_empty_book(self):
        assert self.kinds(Book()) == ["empty_book"]

    def test_duplicate_names(self):
        book = Book.model_validate({
            "default_buttons": {"g": {"text": "Next", "action": "NextPage"}},
            "pages": [{"name": "x"}, {"name": "x", "is_final": True}],
        })
        issues = lint_book(book)
        assert [i.kind for i in issues] == ["duplicate_name"]
        assert issues[0].page_index == 0

    def test_unresolved_jump_in_page_and_defaults(self):
        book = Book.model_validate({
            "default_buttons": {"g": {"text": "Go", "action": {"JumpToPage": "ghost"}}},
            "pages": [
                {"buttons": {"r": {"text": "Go", "action": {"JumpToPage": "phantom"}},
                             "g": {"text": "Next", "action": "NextPage"}}},
                {"is_final": True},
            ],
        })
        kinds = self.kinds(book)
        assert kinds.count("unresolved_jump") == 2

    def test_past_end(self):
        book = Book.model_validate({
            "default_buttons": {"g": {"text": "Next", "action": "NextPage"}},
            "pages": [{}, {}],
        })
        issues = lint_book(book)
        assert [i.kind for i in issues] == ["past_end"]
        assert issues[0].page_index == 1

    def test_no_buttons(self):
        book = Book.model_validate({"pages": [{"is_final": True}]})
        assert self.kinds(book) == ["no_buttons"]

    def test_unreachable(self):
        book = Book.model_validate({
            "default_buttons": {"g": {"text": "Next", "action": "NextPage"}},
            "pages": [
                {"buttons": {"g": {"text": "Skip", "action": {"JumpToPage": "end"}}}},
                {"name": "orphan"},
                {"name": "end", "is_final": True},
            ],
        })
        issues = lint_book(book)
        assert [(i.kind, i.page_index) for i in issues] == [("unreachable", 1)]

    def test_final_page_does_not_lead_onward(self):
        book = Book.model_validate({
            "default_buttons": {"g": {"text": "Next", "action": "NextPage"}},
            "pages": [{"is_final": True}, {"is_final": True}],
        })
        assert self.kinds(book) == ["unreachable"]

    def test_issue_str(self):
        book = Book.model_validate({"pages": [{"is_final": True}]})
        assert str(lint_book(book)[0]) == "[no_buttons] page 0: page has no buttons and cannot be left"

    def test_next_page_action_type(self):
        book = parse_book(json.dumps(MINIMAL))
        assert book.default_buttons["green"].action == NextPage()
