"""
Byte-level state machine splitting a format template into segments.

A template such as ``$remote_addr [$time_local] "$request"`` is read one
byte at a time. Each byte moves the machine between three states:

    Start     nothing read yet
    Variable  inside a ``$name`` placeholder
    Fixed     inside a run of literal text

A segment is emitted whenever a transition crosses a segment boundary and
once more at the end of input for whatever segment is still open.
"""

import logging
from dataclasses import dataclass
from typing import List, Union

from .errors import EmptyPlaceholderError, StringConversionError
from .models import Literal, Placeholder, Segment

logger = logging.getLogger(__name__)

DOLLAR = ord("$")


@dataclass(frozen=True)
class Start:
    """Initial state, before the first byte."""


@dataclass(frozen=True)
class Variable:
    """Reading a placeholder name occupying ``bytes[start:end]``."""
    start: int
    end: int


@dataclass(frozen=True)
class Fixed:
    """Reading literal text occupying ``bytes[start:end]``."""
    start: int
    end: int


ParserState = Union[Start, Variable, Fixed]


def is_var_char(byte: int) -> bool:
    """Check if a byte may appear in a placeholder name."""
    return (
        ord("a") <= byte <= ord("z")
        or ord("A") <= byte <= ord("Z")
        or byte == ord("_")
    )


def read_byte(byte: int, index: int, state: ParserState) -> ParserState:
    """
    Compute the state after reading ``byte`` at position ``index``.

    Pure function of its arguments; emitting segments is left to the
    caller, which compares the old and new state.
    """
    if isinstance(state, Variable):
        if is_var_char(byte):
            return Variable(state.start, index + 1)
        if byte == DOLLAR:
            return Variable(index + 1, index + 1)
        return Fixed(index, index + 1)

    if isinstance(state, Fixed):
        if byte == DOLLAR:
            return Variable(index + 1, index + 1)
        return Fixed(state.start, index + 1)

    # Start
    if byte == DOLLAR:
        return Variable(index + 1, index + 1)
    return Fixed(index, index + 1)


def _decode(data: bytes, start: int, end: int) -> str:
    try:
        return data[start:end].decode("utf-8")
    except UnicodeDecodeError as e:
        raise StringConversionError(e) from e


def _close(data: bytes, state: ParserState) -> Segment:
    """Build the segment for a state that is being left."""
    if isinstance(state, Variable):
        if state.start == state.end:
            # state.start points just past the '$'
            raise EmptyPlaceholderError(state.start - 1)
        return Placeholder(_decode(data, state.start, state.end))
    return Literal(_decode(data, state.start, state.end))


def _crosses_boundary(old: ParserState, new: ParserState) -> bool:
    if isinstance(old, Variable):
        if isinstance(new, Fixed):
            return True
        # '$' directly after a name starts a fresh placeholder
        return isinstance(new, Variable) and new.start > old.start
    if isinstance(old, Fixed):
        return isinstance(new, Variable)
    return False


def tokenize(template: Union[str, bytes]) -> List[Segment]:
    """
    Split a format template into literal and placeholder segments.

    Args:
        template: Template text. A ``str`` is encoded as UTF-8 first.

    Returns:
        Segments in template order. Adjacent placeholders such as
        ``$a$b`` are returned separately.

    Raises:
        StringConversionError: a segment is not valid UTF-8.
        EmptyPlaceholderError: a ``$`` is not followed by a name.
    """
    if isinstance(template, str):
        try:
            data = template.encode("utf-8")
        except UnicodeEncodeError as e:
            raise StringConversionError(e) from e
    else:
        data = bytes(template)

    segments: List[Segment] = []
    state: ParserState = Start()

    for index, byte in enumerate(data):
        new_state = read_byte(byte, index, state)
        if _crosses_boundary(state, new_state):
            segments.append(_close(data, state))
        state = new_state

    if not isinstance(state, Start):
        segments.append(_close(data, state))

    logger.debug("Tokenized %d bytes into %d segments", len(data), len(segments))
    return segments
