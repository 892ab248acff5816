"""
Exceptions raised while turning a format template into a Format.

Every error here is raised at construction time. Matching a line never
raises; a line that does not fit the format simply yields no Entry.
"""

from typing import Optional


class FormatParserError(Exception):
    """Base class for template tokenizing and compilation failures."""

    def __init__(self, message: str, inner: Optional[BaseException] = None):
        super().__init__(message)
        self.inner = inner


class CompilationFailed(FormatParserError):
    """The regular expression built from the segments did not compile."""

    def __init__(self, inner: BaseException, pattern: str = ""):
        super().__init__(
            f"compiling the regular expression failed: {inner}", inner
        )
        self.pattern = pattern


class StringConversionError(FormatParserError):
    """A segment of the template is not valid UTF-8."""

    def __init__(self, inner: UnicodeError):
        super().__init__(f"cannot convert bytes to string: {inner}", inner)


class EmptyPlaceholderError(FormatParserError):
    """A ``$`` is not followed by any name character."""

    def __init__(self, position: int):
        super().__init__(
            f"placeholder at byte {position} has an empty name"
        )
        self.position = position


class InvalidPlaceholderError(FormatParserError):
    """A placeholder name is not made of ASCII letters and underscores."""

    def __init__(self, name: object):
        super().__init__(f"invalid placeholder name: {name!r}")
        self.name = name


class UnknownPresetError(FormatParserError, KeyError):
    """No predefined format is registered under the requested name."""

    def __init__(self, name: str):
        FormatParserError.__init__(self, f"unknown preset format: {name!r}")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]
