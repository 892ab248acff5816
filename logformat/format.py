"""
Compiled log formats and the entries they produce.

A Format is built once from an nginx ``log_format`` style template and
reused for every line of a log file:

    >>> fmt = Format("$remote_addr [$time_local] $request")
    >>> entry = fmt.parse("1.2.3.4 [11/Sep/2018:08:44:17 +0000] GET / HTTP/1.1")
    >>> entry.get("request")
    'GET / HTTP/1.1'
    >>> fmt.parse("this does not work") is None
    True
"""

import logging
import re
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .compiler import compile_pattern
from .errors import FormatParserError, UnknownPresetError
from .models import Placeholder, Segment, segment_from_dict
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

PRESET_FORMATS: Dict[str, str] = {
    # nginx's built-in format
    "combined": (
        '$remote_addr - $remote_user [$time_local] '
        '"$request" $status $body_bytes_sent '
        '"$http_referer" "$http_user_agent"'
    ),
    # the format shipped in the default nginx.conf
    "main": (
        '$remote_addr - $remote_user [$time_local] '
        '"$request" $status $body_bytes_sent '
        '"$http_referer" "$http_user_agent" "$http_x_forwarded_for"'
    ),
}


class Entry:
    """
    A single log line successfully matched against a Format.

    Values are slices of the line the entry was parsed from.
    """

    def __init__(self, match: re.Match):
        self._match = match

    @property
    def line(self) -> str:
        """The input line this entry was parsed from."""
        return self._match.string

    def get(self, key: str) -> Optional[str]:
        """
        Access the value of a named field.

        Returns None if ``key`` is not a field of the format or did not
        take part in the match. An empty string is a valid value.
        """
        if key not in self._match.re.groupindex:
            return None
        return self._match.group(key)

    def has(self, key: str) -> bool:
        """Check if the line has a value for the field ``key``."""
        return self.get(key) is not None

    def span(self, key: str) -> Optional[Tuple[int, int]]:
        """Position of the field's value within the line."""
        if not self.has(key):
            return None
        return self._match.span(key)

    def as_dict(self) -> Dict[str, Optional[str]]:
        """All fields of the entry, in template order."""
        return self._match.groupdict()

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __repr__(self) -> str:
        return f"Entry({self.as_dict()!r})"


class Format:
    """
    The parsed form of an nginx log format template.

    Holds the template's segments and the regular expression compiled from
    them. Instances are never modified after construction and can be shared
    between threads.
    """

    def __init__(self, template: Union[str, bytes],
                 field_patterns: Optional[Mapping[str, str]] = None):
        """
        Read a format template and compile it.

        Args:
            template: Template such as ``$remote_addr [$time_local] $request``.
            field_patterns: Extra or replacement regex fragments, keyed by
                field name, used instead of the built-in field table.

        Raises:
            FormatParserError: the template could not be tokenized or the
                resulting pattern did not compile.
        """
        try:
            segments = tokenize(template)
        except FormatParserError as e:
            logger.warning("Invalid format template %r: %s", template, e)
            raise
        self._init_from_segments(segments, field_patterns)

    def _init_from_segments(self, segments: Sequence[Segment],
                            field_patterns: Optional[Mapping[str, str]]) -> None:
        self._segments: Tuple[Segment, ...] = tuple(segments)
        self._field_patterns = dict(field_patterns) if field_patterns else {}
        self._re: re.Pattern = compile_pattern(self._segments, self._field_patterns)
        logger.debug("Created format with %d segments", len(self._segments))

    @classmethod
    def from_str(cls, template: Union[str, bytes]) -> "Format":
        """Create a format from a template string."""
        return cls(template)

    new = from_str

    @classmethod
    def from_parts(cls, segments: Sequence[Segment],
                   field_patterns: Optional[Mapping[str, str]] = None) -> "Format":
        """Create a format from already tokenized segments."""
        instance = cls.__new__(cls)
        instance._init_from_segments(segments, field_patterns)
        return instance

    @classmethod
    def from_dict(cls, data: Mapping) -> "Format":
        """
        Recreate a format from the output of ``to_dict``.

        Raises:
            FormatParserError: a segment is malformed, a placeholder name is
                invalid, or the pattern did not compile.
        """
        try:
            segments = [segment_from_dict(item) for item in data.get("segments", [])]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Invalid format description: %s", e)
            raise FormatParserError(f"malformed segment in format description: {e}", e) from e
        return cls.from_parts(segments, data.get("field_patterns"))

    @classmethod
    def preset(cls, name: str) -> "Format":
        """
        Create one of the predefined nginx formats.

        Raises:
            UnknownPresetError: no preset is registered under ``name``.
        """
        try:
            template = PRESET_FORMATS[name]
        except KeyError:
            raise UnknownPresetError(name) from None
        return cls(template)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    @property
    def pattern(self) -> str:
        """Source of the compiled regular expression."""
        return self._re.pattern

    @property
    def field_names(self) -> List[str]:
        """Placeholder names, in template order."""
        return [s.name for s in self._segments if isinstance(s, Placeholder)]

    def parse(self, line: str) -> Optional[Entry]:
        """
        Read an input line, returning an Entry with the parsed result.

        The whole line must fit the format. Returns None when it does not;
        an unmatched line is not an error.
        """
        match = self._re.fullmatch(line)
        if match is None:
            return None
        return Entry(match)

    def to_dict(self) -> Dict:
        """JSON-friendly description of the format."""
        result = {
            "segments": [segment.to_dict() for segment in self._segments],
            "pattern": self.pattern,
        }
        if self._field_patterns:
            result["field_patterns"] = dict(self._field_patterns)
        return result

    def __str__(self) -> str:
        return "".join(str(segment) for segment in self._segments)

    def __repr__(self) -> str:
        return f"Format({str(self)!r})"
