"""
Language tag resolution for directives that omit one

By default the tag is the reference's file extension (main.go -> go). That
works for languages named after their extension but not for e.g. README.md,
whose Pygments/GitHub name is markdown; with lexer aliases enabled the
extension is mapped through Pygments' lexer registry instead.
"""

import posixpath
from typing import Optional
from urllib.parse import urlsplit

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

from .fetcher import url_is


def extension_get(reference: str) -> str:
    """
    File extension of a reference without the dot, or '' if none

    URLs use the extension of their path component, ignoring query and
    fragment. A leading dot (dotfile) is not an extension.

    Example:
        >>> extension_get("https://example.com/src/main.go?raw=1")
        'go'
    """
    path = urlsplit(reference).path if url_is(reference) else reference
    name = posixpath.basename(path)
    _, ext = posixpath.splitext(name)
    return ext[1:]


def lexerAlias_get(reference: str) -> Optional[str]:
    """Primary Pygments alias of the lexer matching the reference's filename"""
    path = urlsplit(reference).path if url_is(reference) else reference
    try:
        lexer = get_lexer_for_filename(posixpath.basename(path))
    except ClassNotFound:
        return None
    return lexer.aliases[0] if lexer.aliases else None


def language_fromReference(reference: str, lexer_aliases: bool = False) -> str:
    """
    Derive a fence language tag from a reference

    Args:
        reference: Directive path or URL
        lexer_aliases: Prefer the Pygments lexer alias over the raw extension

    Returns:
        Language tag, or '' if the reference has no extension
    """
    ext = extension_get(reference)
    if not ext:
        return ""
    if lexer_aliases:
        return lexerAlias_get(reference) or ext
    return ext
