"""Top-level package for plain_text_data."""

__author__ = """???"""
__email__ = "???"

from .plain_text_data import (
    DuplicateKey,
    Forgiving,
    ParseError,
    ParseOptions,
    ShapeMismatch,
    dump,
    load,
    normalize_lines,
    parse,
    split_pair,
)

__all__ = [
    "DuplicateKey",
    "Forgiving",
    "ParseError",
    "ParseOptions",
    "ShapeMismatch",
    "dump",
    "load",
    "normalize_lines",
    "parse",
    "split_pair",
]
