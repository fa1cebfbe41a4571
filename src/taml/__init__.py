"""TAML (Terminal ANSI Markup Language) parser."""

from __future__ import annotations

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
from taml.parser import ParseOptions, ParseResult, Parser, parse, parse_safe, validate_syntax
from taml.tokenizer import Tokenizer, tokenize
from taml.validator import (
    ValidationResult,
    Validator,
    validate_nesting,
    validate_source,
    validate_tag_closure,
    validate_tag_name,
    validate_tokens,
)

__version__ = "0.1.0"

__all__ = [
    "InvalidTagError",
    "MalformedTagError",
    "MaxDepthExceededError",
    "MismatchedTagError",
    "ParseOptions",
    "ParseResult",
    "Parser",
    "TamlParseError",
    "Tokenizer",
    "UnclosedTagError",
    "UnexpectedCharacterError",
    "UnexpectedEndOfInputError",
    "ValidationResult",
    "Validator",
    "calculate_position",
    "create_error_at_position",
    "parse",
    "parse_safe",
    "tokenize",
    "validate_nesting",
    "validate_source",
    "validate_syntax",
    "validate_tag_closure",
    "validate_tag_name",
    "validate_tokens",
]
