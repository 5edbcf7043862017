"""
Region extraction

Applies a boundary to fetched bytes. Patterns are matched against the whole
byte stream (not line by line) so they can span lines or pick out part of a
line. Every pattern is compiled with POSIX leftmost-longest semantics, and
the first (leftmost) match always wins.

Pattern syntax is that of the regex package (Perl class escapes and
lookarounds are accepted), not strict POSIX ERE. No multiline flag is set:
^ and $ anchor at the start and end of the content unless a pattern turns
on (?m) itself.
"""

import regex

from ..models.directive import BoundarySpec, WholeFile, SinglePattern, StartEnd, StartToEOF
from .errors import BadPattern, NoMatch
from .log import LOG


def pattern_compile(pattern: str) -> "regex.Pattern[bytes]":
    """
    Compile a boundary pattern for matching raw bytes

    Raises:
        BadPattern: If the pattern is not a valid regular expression
    """
    try:
        return regex.compile(pattern.encode("utf-8"), flags=regex.POSIX)
    except regex.error as exc:
        raise BadPattern(pattern, str(exc)) from exc


def match_find(content: bytes, pattern: str) -> "regex.Match[bytes]":
    """
    Find the first match of pattern in content

    Raises:
        BadPattern: If the pattern does not compile
        NoMatch: If nothing matches
    """
    match = pattern_compile(pattern).search(content)
    if match is None:
        raise NoMatch(pattern)
    return match


def region_extract(content: bytes, boundary: BoundarySpec) -> bytes:
    """
    Return the sub-range of content selected by boundary

    Args:
        content: Raw fetched bytes
        boundary: One of WholeFile, SinglePattern, StartEnd, StartToEOF

    Returns:
        A contiguous slice of content

    Raises:
        BadPattern: If a pattern does not compile
        NoMatch: If a pattern matches nothing

    Example:
        >>> region_extract(b"a START x b END x c", StartEnd("START x", "END x"))
        b'START x b END x'
    """
    if isinstance(boundary, WholeFile):
        return content

    if isinstance(boundary, SinglePattern):
        match = match_find(content, boundary.pattern)
        return content[match.start():match.end()]

    if isinstance(boundary, StartEnd):
        start = match_find(content, boundary.start)
        content = content[start.start():]
        end = match_find(content, boundary.end)
        LOG(f"Region /{boundary.start}/../{boundary.end}/ spans {end.end()} bytes", level=3)
        return content[:end.end()]

    if isinstance(boundary, StartToEOF):
        start = match_find(content, boundary.start)
        return content[start.start():]

    raise TypeError(f"Unknown boundary type: {type(boundary).__name__}")
