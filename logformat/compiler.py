"""
Build a regular expression from a sequence of template segments.

Literal segments are escaped so that any text in a template, including
regex metacharacters, matches itself. Placeholders become named groups
whose inner pattern is looked up by field name.
"""

import logging
import re
from typing import Dict, Iterable, Mapping, Optional

from .errors import CompilationFailed, InvalidPlaceholderError
from .models import Literal, Placeholder, Segment

logger = logging.getLogger(__name__)

# Fields known to be numeric. Any other name matches the default pattern.
FIELD_PATTERNS: Dict[str, str] = {
    "status": r"\d{3}",
    "body_bytes_sent": r"\d+",
}

DEFAULT_FIELD_PATTERN = ".*"

PLACEHOLDER_NAME_RE = re.compile(r"[A-Za-z_]+")


def field_pattern(name: str, overrides: Optional[Mapping[str, str]] = None) -> str:
    """Return the inner pattern used to capture the field ``name``."""
    if overrides and name in overrides:
        return overrides[name]
    return FIELD_PATTERNS.get(name, DEFAULT_FIELD_PATTERN)


def segment_pattern(segment: Segment,
                    overrides: Optional[Mapping[str, str]] = None) -> str:
    """
    Translate a single segment into a regex fragment.

    Raises:
        InvalidPlaceholderError: a placeholder name is empty or holds
            anything but ASCII letters and underscores.
    """
    if isinstance(segment, Placeholder):
        if not isinstance(segment.name, str) or not PLACEHOLDER_NAME_RE.fullmatch(segment.name):
            raise InvalidPlaceholderError(segment.name)
        return f"(?P<{segment.name}>{field_pattern(segment.name, overrides)})"
    if isinstance(segment, Literal):
        return re.escape(segment.text)
    raise TypeError(f"not a segment: {segment!r}")


def build_pattern(segments: Iterable[Segment],
                  overrides: Optional[Mapping[str, str]] = None) -> str:
    """Concatenate the fragments of all segments, in order."""
    return "".join(segment_pattern(segment, overrides) for segment in segments)


def compile_pattern(segments: Iterable[Segment],
                    overrides: Optional[Mapping[str, str]] = None) -> re.Pattern:
    """
    Build and compile the pattern for ``segments``.

    Raises:
        CompilationFailed: ``re`` rejected the pattern, e.g. because a
            field name occurs twice or a custom field pattern is invalid.
    """
    pattern = build_pattern(segments, overrides)
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        logger.warning("Could not compile pattern %r: %s", pattern, e)
        raise CompilationFailed(e, pattern) from e

    logger.debug("Compiled pattern %r with %d groups", pattern, compiled.groups)
    return compiled
