"""
Parser-specific data models

Type-safe structures for parser operations and return values.
"""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """
    Kinds of argument tokens inside a directive's parentheses
    """
    WORD = "word"          # main.go, python, $
    QUOTED = "quoted"      # "path with spaces.go"
    PATTERN = "pattern"    # /func main/


@dataclass
class ArgumentToken:
    """
    One token of a directive argument list

    Returned by DirectiveParser.arguments_tokenize().

    Attributes:
        kind: How the token was delimited in the source
        text: Token value with delimiters removed and escapes resolved
              (quotes stripped for QUOTED, slashes stripped for PATTERN)
        position: Character offset of the token in the argument list

    Example:
        For arguments "main.go /func main/ $":
        [ArgumentToken(kind=TokenKind.WORD, text="main.go", position=0),
         ArgumentToken(kind=TokenKind.PATTERN, text="func main", position=8),
         ArgumentToken(kind=TokenKind.WORD, text="$", position=20)]
    """
    kind: TokenKind
    text: str
    position: int

    def eof_is(self) -> bool:
        """Check if this token is the bare end-of-content marker '$'"""
        return self.kind == TokenKind.WORD and self.text == "$"
