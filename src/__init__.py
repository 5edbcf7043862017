"""
embedmd - Embed code snippets from files and URLs into Markdown

Replaces [embedmd]:# (file.go /start/ /end/) directives with fenced code
blocks extracted from the referenced file.
"""

__version__ = "1.0.0"

from .lib import (
    process,
    process_text,
    Processor,
    DirectiveParser,
    DefaultFetcher,
    CachingFetcher,
    EmbedError,
    MalformedDirective,
    FetchError,
    BadPattern,
    NoMatch,
    LOG,
    state_connectToLogger,
)
from .models import ProcessOptions, Directive, WholeFile, SinglePattern, StartEnd, StartToEOF

__all__ = [
    "process",
    "process_text",
    "Processor",
    "DirectiveParser",
    "DefaultFetcher",
    "CachingFetcher",
    "EmbedError",
    "MalformedDirective",
    "FetchError",
    "BadPattern",
    "NoMatch",
    "ProcessOptions",
    "Directive",
    "WholeFile",
    "SinglePattern",
    "StartEnd",
    "StartToEOF",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
