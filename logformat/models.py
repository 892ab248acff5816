"""
Core data models for log format compilation and matching.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Union
from dataclasses_json import dataclass_json, config
from enum import Enum


class SegmentKind(Enum):
    """Kinds of segments a format template is split into."""
    LITERAL = "literal"
    PLACEHOLDER = "placeholder"

    def __str__(self) -> str:
        return self.value


@dataclass_json
@dataclass(frozen=True)
class Literal:
    """Fixed text that must appear verbatim in a log line."""
    text: str
    kind: SegmentKind = field(default=SegmentKind.LITERAL, metadata=config(
        encoder=lambda x: x.value,
        decoder=lambda x: SegmentKind(x)
    ))

    def __str__(self) -> str:
        return self.text


@dataclass_json
@dataclass(frozen=True)
class Placeholder:
    """A named field reference, written as ``$name`` in a template."""
    name: str
    kind: SegmentKind = field(default=SegmentKind.PLACEHOLDER, metadata=config(
        encoder=lambda x: x.value,
        decoder=lambda x: SegmentKind(x)
    ))

    def __str__(self) -> str:
        return f"${self.name}"


Segment = Union[Literal, Placeholder]


def segment_from_dict(data: Dict) -> Segment:
    """
    Rebuild a segment from the dict produced by ``to_dict``.

    Raises:
        ValueError: ``kind`` is missing or unknown.
        KeyError, TypeError: the text or name is missing or not a string.
    """
    kind = SegmentKind(data.get("kind"))
    if kind is SegmentKind.LITERAL:
        segment = Literal.from_dict(data)
        value = segment.text
    else:
        segment = Placeholder.from_dict(data)
        value = segment.name
    if not isinstance(value, str):
        raise TypeError(f"{kind} segment holds {type(value).__name__}, not str")
    return segment


@dataclass_json
@dataclass
class ParsedLine:
    """Result of applying a format to one line of an input file."""
    line_number: int
    line: str
    matched: bool
    fields: Dict[str, Optional[str]] = field(default_factory=dict)

    def __str__(self) -> str:
        status = "match" if self.matched else "no match"
        return f"ParsedLine(line_number={self.line_number}, {status})"
