"""
Line filtering and indentation normalization for extracted code
"""

from typing import List

MARKERS = ("START", "END")


def markerLines_drop(lines: List[str]) -> List[str]:
    """Remove author annotation lines (anything containing START or END)"""
    return [line for line in lines if not any(marker in line for marker in MARKERS)]


def indent_normalize(lines: List[str]) -> List[str]:
    """
    Strip the tab indentation shared by all non-empty lines

    Depth i succeeds when every non-empty line has a tab at index i. Depths
    are tried from 0 upward until one fails; with indent the last depth that
    succeeded, each non-empty line loses its first indent + 1 characters.
    Space indentation is left alone.

    Args:
        lines: Lines without trailing newlines

    Returns:
        New list of normalized lines

    Example:
        >>> indent_normalize(["\\tfoo", "\\t\\tbar", ""])
        ['foo', '\\tbar', '']
    """
    content = [line for line in lines if line != ""]
    if not content:
        return list(lines)

    indent = -1
    while all(len(line) > indent + 1 and line[indent + 1] == "\t" for line in content):
        indent += 1

    if indent == -1:
        return list(lines)
    return [line[indent + 1:] if line != "" else line for line in lines]
