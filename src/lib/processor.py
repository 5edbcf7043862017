"""
Document processor

Rewrites a document by replacing each [embedmd]:# directive with a fenced
code block holding the referenced content.

Each line is either copied verbatim or, when it is a directive, substituted
by running the pipeline:

    fetch -> region_extract -> split lines -> drop marker lines
          -> indent_normalize -> fenced block

Directives are independent of each other. Lines inside fenced code blocks
are never treated as directives; fences follow CommonMark (backtick or tilde
runs of three or more, indented by at most three spaces, closed by a run of
the same character that is at least as long). Output is assembled in
memory and only handed to the caller once the whole document succeeded.
"""

import io
import re
from typing import Iterable, List, Optional, TextIO

from ..models.directive import Directive, ProcessOptions
from .errors import EmbedError, FetchError, MalformedDirective
from .extractor import region_extract
from .fetcher import DefaultFetcher, Fetcher
from .log import LOG
from .normalizer import indent_normalize, markerLines_drop
from .parser import DirectiveParser

FENCE = "```"

FENCE_OPEN = re.compile(r" {0,3}(`{3,}|~{3,})(.*)")
FENCE_CLOSE = re.compile(r" {0,3}(`{3,}|~{3,})[ \t]*")


def lines_split(content: bytes) -> List[str]:
    """
    Split extracted bytes into lines without line terminators

    A final newline is implied when missing; a carriage return before a
    newline is dropped. Bytes that are not UTF-8 are kept as surrogate
    escapes, so writing with errors="surrogateescape" restores them.

    Example:
        >>> lines_split(b"a\\r\\nb")
        ['a', 'b']
    """
    text = content.decode("utf-8", errors="surrogateescape")
    if text and not text.endswith("\n"):
        text += "\n"
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")[:-1]]


def fence_open(line: str) -> Optional[str]:
    """
    Return the fence run opening a code block on line, or None

    Example:
        >>> fence_open("  ~~~~python\\n")
        '~~~~'
    """
    match = FENCE_OPEN.fullmatch(line.rstrip("\r\n"))
    if match is None:
        return None
    fence, info = match.groups()
    if fence[0] == "`" and "`" in info:
        return None
    return fence


def fence_closes(line: str, fence: str) -> bool:
    """Check whether line closes the block opened by fence"""
    match = FENCE_CLOSE.fullmatch(line.rstrip("\r\n"))
    if match is None:
        return False
    closing = match.group(1)
    return closing[0] == fence[0] and len(closing) >= len(fence)


def block_render(language: str, lines: List[str]) -> str:
    """Render lines as a fenced code block tagged with language"""
    body = "".join(f"{line}\n" for line in lines)
    return f"{FENCE}{language}\n{body}{FENCE}\n"


class Processor:
    """
    Rewrites documents containing embed directives

    Responsibilities:
    - Find directive lines outside fenced code
    - Run fetch/extract/normalize for each directive
    - Render fenced blocks in place of directives
    - Keep all other text byte-for-byte
    """

    def __init__(self, options: Optional[ProcessOptions] = None, parser: Optional[DirectiveParser] = None) -> None:
        """
        Initialize processor

        Args:
            options: Base directory, fetcher and directive handling mode
            parser: Directive parser; a default DirectiveParser when None
        """
        self.options = options or ProcessOptions()
        self.fetcher: Fetcher = self.options.fetcher or DefaultFetcher()
        self.parser = parser or DirectiveParser()
        self.directive_count = 0

    def document_process(self, source: Iterable[str]) -> str:
        """
        Rewrite a document

        Args:
            source: Document lines, each with its line terminator

        Returns:
            The rewritten document

        Raises:
            EmbedError: If any directive fails; no partial result is returned
        """
        lines = list(source)
        output: List[str] = []
        fence: Optional[str] = None
        self.directive_count = 0

        pos = 0
        while pos < len(lines):
            line = lines[pos]
            line_number = pos + 1

            if fence is not None:
                if fence_closes(line, fence):
                    fence = None
                output.append(line)
                pos += 1
                continue

            fence = fence_open(line)
            if fence is not None:
                output.append(line)
                pos += 1
                continue

            directive = self.parser.directive_parse(line, line_number)
            if directive is None:
                output.append(line)
                pos += 1
                continue

            try:
                block = self.directive_render(directive)
            except EmbedError as err:
                err.located(directive.reference, line_number)
                raise

            pos += 1
            if self.options.keep_directives:
                output.append(line if line.endswith("\n") else line + "\n")
                pos = self.block_skip(lines, pos, directive)
            output.append(block)
            self.directive_count += 1

        LOG(f"Processed {self.directive_count} directive(s) in {len(lines)} lines", level=2)
        return "".join(output)

    def directive_render(self, directive: Directive) -> str:
        """
        Run the embed pipeline for one directive

        Returns:
            Fenced code block text, ending with a newline

        Raises:
            FetchError: If the reference cannot be fetched
            ExtractionError: If the boundary cannot be applied
        """
        LOG(f"Embedding {directive.reference} ({type(directive.boundary).__name__})", level=2)

        try:
            content = self.fetcher.fetch(self.options.base_dir, directive.reference)
        except OSError as exc:
            raise FetchError(f"could not read: {exc}", reference=directive.reference) from exc

        region = region_extract(content, directive.boundary)
        LOG(f"Extracted {len(region)} of {len(content)} bytes from {directive.reference}", level=3)

        code = indent_normalize(markerLines_drop(lines_split(region)))
        return block_render(directive.language, code)

    def block_skip(self, lines: List[str], pos: int, directive: Directive) -> int:
        """
        Skip a previously rendered block directly after a kept directive

        Args:
            lines: Document lines
            pos: Index of the line after the directive

        Returns:
            Index of the first line after the old block (pos if there is none)

        Raises:
            MalformedDirective: If the old block is never closed
        """
        fence = fence_open(lines[pos]) if pos < len(lines) else None
        if fence is None:
            return pos

        for end in range(pos + 1, len(lines)):
            if fence_closes(lines[end], fence):
                return end + 1

        raise MalformedDirective(
            "unbalanced code section after directive",
            reference=directive.reference,
            line_number=pos + 1,
        )


def process(out: TextIO, source: Iterable[str], options: Optional[ProcessOptions] = None) -> int:
    """
    Rewrite the document read from source into out

    Nothing is written to out when processing fails.

    Args:
        out: Writable text sink
        source: Document lines (an open text file, io.StringIO, a list)
        options: Base directory, fetcher and directive handling mode

    Returns:
        Number of directives expanded

    Raises:
        EmbedError: On the first failing directive
    """
    processor = Processor(options)
    out.write(processor.document_process(source))
    return processor.directive_count


def process_text(text: str, options: Optional[ProcessOptions] = None) -> str:
    """Rewrite a document held in a string"""
    return Processor(options).document_process(io.StringIO(text))
