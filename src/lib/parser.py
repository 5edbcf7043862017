"""
Parser for [embedmd]:# directives

Recognizes directive lines and decodes their argument lists into Directive
objects.

Syntax:
    [embedmd]:# (reference [language] [/start/] [/end/|$])

The marker is a Markdown link reference definition, so directives are
invisible when the document is rendered.

Example:
    >>> parser = DirectiveParser()
    >>> d = parser.directive_parse("[embedmd]:# (hello.go /func main/ $)")
    >>> d.reference, d.language, d.boundary
    ('hello.go', 'go', StartToEOF(start='func main'))
    >>> parser.directive_parse("Just some text") is None
    True
"""

from typing import List, NoReturn, Optional

from ..models.directive import (
    BoundarySpec,
    Directive,
    SinglePattern,
    StartEnd,
    StartToEOF,
    WholeFile,
)
from ..models.parser import ArgumentToken, TokenKind
from .errors import MalformedDirective
from .language import language_fromReference

DIRECTIVE_MARKER = "[embedmd]:#"


class DirectiveParser:
    """
    Decoder for single directive lines

    Handles:
    - Quoted references ("path with spaces.go")
    - Optional language tag, defaulting from the file extension
    - Zero, one or two /pattern/ tokens, with \\/ for a literal slash
    - The $ end-of-content marker as second boundary
    """

    def __init__(self, lexer_aliases: Optional[bool] = None):
        """
        Initialize the parser

        Args:
            lexer_aliases: Resolve omitted languages through Pygments lexer
                           aliases. Defaults to the EMBEDMD_LEXER_ALIASES setting.
        """
        if lexer_aliases is None:
            from ..config import appsettings
            lexer_aliases = appsettings.lexer_aliases
        self.lexer_aliases = lexer_aliases

    def directive_is(self, line: str) -> bool:
        """Check if a document line carries the directive marker"""
        return line.startswith(DIRECTIVE_MARKER)

    def directive_parse(self, line: str, line_number: int = 0) -> Optional[Directive]:
        """
        Decode a document line into a Directive

        Args:
            line: One document line (trailing newline allowed)
            line_number: Line position in the document, for error reporting

        Returns:
            Directive, or None if the line is not a directive

        Raises:
            MalformedDirective: If the line has the marker but its argument
                                list cannot be decoded
        """
        line = line.rstrip("\r\n")
        if not self.directive_is(line):
            return None

        args = line[len(DIRECTIVE_MARKER):].strip()
        if len(args) < 2 or args[0] != "(" or args[-1] != ")":
            self.error("argument list should be in parenthesis", line_number)

        tokens = self.arguments_tokenize(args[1:-1], line_number)
        if not tokens or tokens[0].kind == TokenKind.PATTERN or not tokens[0].text:
            self.error("missing file name", line_number)

        reference = tokens[0].text
        rest = tokens[1:]

        language = None
        if rest and rest[0].kind != TokenKind.PATTERN and not rest[0].eof_is():
            language = rest[0].text
            rest = rest[1:]

        boundary = self.boundary_build(rest, reference, line_number)

        if language is None:
            language = language_fromReference(reference, lexer_aliases=self.lexer_aliases)
            if not language:
                self.error("language is required when file has no extension", line_number, reference)

        return Directive(
            reference=reference,
            language=language,
            boundary=boundary,
            line_number=line_number,
        )

    def arguments_tokenize(self, args: str, line_number: int = 0) -> List[ArgumentToken]:
        """
        Split an argument list into word, quoted and pattern tokens

        Args:
            args: Text between the directive's parentheses

        Returns:
            Tokens in source order

        Raises:
            MalformedDirective: On an unterminated quote or pattern

        Example:
            Input: '"my file.go" go /start/ /end/'
            Output texts: ['my file.go', 'go', 'start', 'end']
        """
        tokens: List[ArgumentToken] = []
        pos = 0

        while pos < len(args):
            if args[pos].isspace():
                pos += 1
                continue

            if args[pos] == "/":
                close = self.delimiter_findClosing(args, pos, "/")
                if close == -1:
                    self.error(f"unbalanced / in {args[pos:]!r}", line_number)
                text = args[pos + 1:close].replace("\\/", "/")
                tokens.append(ArgumentToken(kind=TokenKind.PATTERN, text=text, position=pos))
                pos = close + 1
            elif args[pos] == '"':
                close = self.delimiter_findClosing(args, pos, '"')
                if close == -1:
                    self.error(f"unbalanced quote in {args[pos:]!r}", line_number)
                text = args[pos + 1:close].replace('\\"', '"').replace("\\\\", "\\")
                tokens.append(ArgumentToken(kind=TokenKind.QUOTED, text=text, position=pos))
                pos = close + 1
            else:
                end = pos
                while end < len(args) and not args[end].isspace():
                    end += 1
                tokens.append(ArgumentToken(kind=TokenKind.WORD, text=args[pos:end], position=pos))
                pos = end

        return tokens

    def delimiter_findClosing(self, args: str, start_pos: int, delimiter: str) -> int:
        """
        Find the unescaped delimiter closing the token opened at start_pos

        A backslash escapes the character after it.

        Returns:
            Position of the closing delimiter, or -1 if there is none
        """
        pos = start_pos + 1
        while pos < len(args):
            if args[pos] == "\\":
                pos += 2
                continue
            if args[pos] == delimiter:
                return pos
            pos += 1
        return -1

    def boundary_build(self, tokens: List[ArgumentToken], reference: str, line_number: int = 0) -> BoundarySpec:
        """
        Build a boundary from the tokens following reference and language

        Raises:
            MalformedDirective: On stray tokens, misplaced $, or more than
                                two patterns
        """
        if len(tokens) > 2:
            self.error("too many arguments", line_number, reference)

        for index, token in enumerate(tokens):
            if token.eof_is():
                if index != 1:
                    self.error("$ can only follow a start pattern", line_number, reference)
            elif token.kind != TokenKind.PATTERN:
                self.error(f"unexpected argument {token.text!r}, expected /pattern/", line_number, reference)

        if not tokens:
            return WholeFile()
        if len(tokens) == 1:
            return SinglePattern(tokens[0].text)
        if tokens[1].eof_is():
            return StartToEOF(tokens[0].text)
        return StartEnd(tokens[0].text, tokens[1].text)

    def error(self, message: str, line_number: int = 0, reference: Optional[str] = None) -> NoReturn:
        """
        Report a malformed directive

        Raises:
            MalformedDirective: Always
        """
        raise MalformedDirective(message, reference=reference, line_number=line_number or None)


def directive_parse(line: str, line_number: int = 0) -> Optional[Directive]:
    """Parse one line with a default DirectiveParser"""
    return DirectiveParser().directive_parse(line, line_number)
