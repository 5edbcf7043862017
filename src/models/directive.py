"""
Directive and boundary models

A Directive is the decoded form of one ``[embedmd]:# (...)`` line. Its
boundary is one of four variants selecting which part of the fetched
content gets embedded:

    WholeFile()               (file.go)
    SinglePattern(p)          (file.go /p/)
    StartEnd(start, end)      (file.go /start/ /end/)
    StartToEOF(start)         (file.go /start/ $)
"""

from dataclasses import dataclass, field
from typing import Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ..lib.fetcher import Fetcher


@dataclass(frozen=True)
class WholeFile:
    """Embed the fetched content unchanged"""
    pass


@dataclass(frozen=True)
class SinglePattern:
    """
    Embed exactly the first match of a pattern

    Attributes:
        pattern: Regular expression matched against the raw content
    """
    pattern: str


@dataclass(frozen=True)
class StartEnd:
    """
    Embed from the first match of start through the first later match of end

    Both matched spans are included in the result. The end pattern is only
    searched in content that begins at the start match.

    Attributes:
        start: Pattern locating the first byte of the region
        end: Pattern locating the last byte of the region
    """
    start: str
    end: str

    @classmethod
    def sample(cls, name: str) -> "StartEnd":
        """
        Boundary for a named sample delimited by marker comments

        Example:
            >>> StartEnd.sample("test")
            StartEnd(start='START test', end='END test')
        """
        return cls(start=f"START {name}", end=f"END {name}")


@dataclass(frozen=True)
class StartToEOF:
    """
    Embed from the first match of start to the end of the content

    Attributes:
        start: Pattern locating the first byte of the region
    """
    start: str


BoundarySpec = Union[WholeFile, SinglePattern, StartEnd, StartToEOF]


@dataclass(frozen=True)
class Directive:
    """
    A parsed embed command

    Attributes:
        reference: Relative path (forward slashes) or http(s) URL
        language: Language tag for the opening fence, always resolved
        boundary: Which region of the content to embed
        line_number: Line of the directive in its document (0 when unknown)
    """
    reference: str
    language: str
    boundary: BoundarySpec = field(default_factory=WholeFile)
    line_number: int = 0


@dataclass(frozen=True)
class ProcessOptions:
    """
    Per-invocation configuration for the document processor

    Attributes:
        base_dir: Directory relative references are resolved against
        fetcher: Content source; DefaultFetcher when None
        keep_directives: Keep directive lines and replace the fenced block
                         following them instead of replacing the directive
    """
    base_dir: str = "."
    fetcher: Optional["Fetcher"] = None
    keep_directives: bool = False
