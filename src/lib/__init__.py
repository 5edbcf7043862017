"""
embedmd - Embed code snippets from files and URLs into Markdown

Core engine: directive parsing, fetching, region extraction, indentation
normalization and document rewriting.
"""

__version__ = "1.0.0"

from .errors import EmbedError, MalformedDirective, FetchError, ExtractionError, BadPattern, NoMatch
from .fetcher import Fetcher, DefaultFetcher, CachingFetcher
from .extractor import region_extract
from .normalizer import indent_normalize, markerLines_drop
from .parser import DirectiveParser, directive_parse
from .processor import Processor, process, process_text
from .log import LOG, state_connectToLogger, document_context

__all__ = [
    "EmbedError",
    "MalformedDirective",
    "FetchError",
    "ExtractionError",
    "BadPattern",
    "NoMatch",
    "Fetcher",
    "DefaultFetcher",
    "CachingFetcher",
    "region_extract",
    "indent_normalize",
    "markerLines_drop",
    "DirectiveParser",
    "directive_parse",
    "Processor",
    "process",
    "process_text",
    "LOG",
    "state_connectToLogger",
    "document_context",
    "__version__",
]
