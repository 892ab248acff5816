"""
nginx Log Format Parser

A Python library that compiles nginx ``log_format`` templates into
matchers and extracts named fields from access log lines.
"""

__version__ = "1.0.0"
__author__ = "nginx Log Format Parser"

from .errors import (
    FormatParserError,
    CompilationFailed,
    StringConversionError,
    EmptyPlaceholderError,
    InvalidPlaceholderError,
    UnknownPresetError,
)
from .format import Format, Entry, PRESET_FORMATS
from .models import Literal, Placeholder, Segment, SegmentKind, ParsedLine
from .tokenizer import tokenize
from .io_utils import JSONLWriter, ParseReport

__all__ = [
    "Format",
    "Entry",
    "PRESET_FORMATS",
    "Literal",
    "Placeholder",
    "Segment",
    "SegmentKind",
    "ParsedLine",
    "tokenize",
    "FormatParserError",
    "CompilationFailed",
    "StringConversionError",
    "EmptyPlaceholderError",
    "InvalidPlaceholderError",
    "UnknownPresetError",
    "JSONLWriter",
    "ParseReport",
]
