"""Test error messages, position accuracy, and context snippets."""

import pytest

from taml.errors import (
    InvalidTagError,
    MalformedTagError,
    MaxDepthExceededError,
    MismatchedTagError,
    TamlParseError,
    UnclosedTagError,
    UnexpectedCharacterError,
    UnexpectedEndOfInputError,
    calculate_position,
    create_error_at_position,
)
from taml.tokenizer import tokenize


class TestCalculatePosition:
    def test_single_line(self):
        source = "hello world"
        assert calculate_position(source, 0).line == 1
        assert calculate_position(source, 0).column == 1
        assert calculate_position(source, 5).column == 6
        assert calculate_position(source, 11).column == 12

    def test_multiple_lines(self):
        source = "line 1\nline 2\nline 3"
        assert (calculate_position(source, 6).line, calculate_position(source, 6).column) == (1, 7)
        assert (calculate_position(source, 7).line, calculate_position(source, 7).column) == (2, 1)
        assert calculate_position(source, 10).column == 4
        assert calculate_position(source, 14).line == 3

    def test_empty_source(self):
        pos = calculate_position("", 0)
        assert (pos.line, pos.column) == (1, 1)

    def test_beyond_source_length(self):
        pos = calculate_position("short", 100)
        assert (pos.line, pos.column) == (1, 6)
        assert pos.offset == 100

    def test_leading_newlines(self):
        source = "\n\nhello\n\nworld\n"
        assert calculate_position(source, 1).line == 2
        assert calculate_position(source, 2).line == 3
        assert calculate_position(source, 7).column == 6
        assert calculate_position(source, 8).line == 4

    def test_crlf_counts_cr_as_column(self):
        source = "hello\tworld\r\ntest"
        assert calculate_position(source, 6).column == 7
        pos = calculate_position(source, 13)
        assert (pos.line, pos.column) == (2, 1)


class TestErrorFields:
    def test_invalid_tag(self):
        err = InvalidTagError("foo", 10, 2, 5, "source")
        assert err.tag_name == "foo"
        assert (err.position, err.line, err.column) == (10, 2, 5)
        assert "Invalid tag name 'foo' at line 2, column 5" in err.message
        assert "37 valid TAML tags" in err.message
        assert isinstance(err, TamlParseError)

    def test_unclosed_tag(self):
        err = UnclosedTagError("red", 0, 1, 1)
        assert err.tag_name == "red"
        assert "Expected '</red>' before end of input" in err.message
        assert err.source is None

    def test_mismatched_tag(self):
        err = MismatchedTagError("italic", "bold", 20, 3, 10)
        assert err.expected == "italic"
        assert err.actual == "bold"
        assert "Expected '</italic>' but found '</bold>'" in err.message

    def test_malformed_tag(self):
        err = MalformedTagError("<>", 0, 1, 1)
        assert err.content == "<>"
        assert "Malformed tag '<>'" in err.message

    def test_unexpected_end_with_context(self):
        err = UnexpectedEndOfInputError(10, 2, 5, "source", "parsing tag")
        assert err.message == "Unexpected end of input at line 2, column 5 while parsing tag."

    def test_unexpected_end_without_context(self):
        err = UnexpectedEndOfInputError(10, 2, 5, "source")
        assert "while" not in err.message

    def test_unexpected_character(self):
        err = UnexpectedCharacterError("@", 5, 1, 6, "source", "letter")
        assert err.character == "@"
        assert "Unexpected character '@' at line 1, column 6." in err.message
        assert "Expected letter." in err.message

    def test_unexpected_character_without_expected(self):
        err = UnexpectedCharacterError("@", 5, 1, 6)
        assert "Expected" not in err.message

    def test_str_is_message(self):
        err = UnclosedTagError("red", 0, 1, 1)
        assert str(err) == err.message

    def test_max_depth_is_not_a_parse_error(self):
        err = MaxDepthExceededError(100)
        assert not isinstance(err, TamlParseError)
        assert err.max_depth == 100
        assert "100" in str(err)


class TestCreateErrorAtPosition:
    def test_computes_line_and_column(self):
        source = "line 1\nline 2 error here\nline 3"
        err = create_error_at_position(InvalidTagError, source, 15, "badTag")
        assert isinstance(err, InvalidTagError)
        assert (err.position, err.line, err.column) == (15, 2, 9)
        assert err.source == source
        assert err.tag_name == "badTag"

    def test_two_variant_arguments(self):
        err = create_error_at_position(MismatchedTagError, "test source", 5, "red", "blue")
        assert isinstance(err, MismatchedTagError)
        assert (err.expected, err.actual) == ("red", "blue")

    def test_keyword_extras(self):
        err = create_error_at_position(
            UnexpectedEndOfInputError, "<red", 4, context="parsing tag"
        )
        assert err.message.endswith("while parsing tag.")
        assert (err.line, err.column) == (1, 5)


class TestDetailedMessage:
    def test_without_source_is_message(self):
        err = UnclosedTagError("red", 0, 1, 1)
        assert err.detailed_message() == err.message

    def test_layout(self):
        source = "<bold>text</italic>"
        err = create_error_at_position(MismatchedTagError, source, 10, "bold", "italic")
        assert err.detailed_message() == (
            f"{err.message}\n"
            "\n"
            "1 | <bold>text</italic>\n"
            "  |           ^\n"
            "\n"
            "Position: line 1, column 11"
        )

    def test_picks_the_error_line(self):
        source = "first\nsecond <red\nthird"
        err = create_error_at_position(UnclosedTagError, source, 13, "red")
        detail = err.detailed_message()
        assert "2 | second <red" in detail
        assert "first" not in detail.split("\n")[2]

    def test_crlf_line_rendered_as_split(self):
        source = "one\r\ntwo <red"
        err = create_error_at_position(UnclosedTagError, source, 9, "red")
        assert "2 | two <red\n" in err.detailed_message()
        first = create_error_at_position(UnclosedTagError, source, 0, "red")
        assert "1 | one\r\n" in first.detailed_message()

    def test_line_out_of_range_is_empty(self):
        err = UnclosedTagError("red", 0, 99, 3, "one line")
        detail = err.detailed_message()
        assert "99 | \n" in detail
        assert "   |   ^" in detail
        assert detail.endswith("Position: line 99, column 3")


class TestErrorFormatting:
    def test_format_contains_line(self):
        with pytest.raises(TamlParseError) as exc_info:
            tokenize("some text <bad> more text")
        formatted = exc_info.value.format()
        assert "some text <bad> more text" in formatted

    def test_format_contains_error_prefix(self):
        with pytest.raises(TamlParseError) as exc_info:
            tokenize("<>")
        assert exc_info.value.format().startswith("error:")

    def test_format_contains_position(self):
        with pytest.raises(TamlParseError) as exc_info:
            tokenize("ok\n<nope>")
        formatted = exc_info.value.format("test.taml")
        assert "--> test.taml:2:1" in formatted
        assert "^" in formatted
