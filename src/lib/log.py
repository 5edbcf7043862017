"""
Logging for embedmd, built on Loguru.

Messages are tagged with the document being processed, so a batch run reads
as one line per document or directive:

    12:01:07 │ INFO  │ docs/README.md     ║ 2 directive(s)
    12:01:07 │ DEBUG │ docs/README.md     ║ Embedding hello.go (StartEnd)

LOG() levels map onto Loguru levels and are filtered by the verbosity of the
connected ProgramState:

    level 1 -> INFO   (default)
    level 2 -> DEBUG  (-v)
    level 3 -> TRACE  (-vv)

Library code logs through LOG() as well; without a connected state the
verbosity is 0 and nothing is emitted.
"""

import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator

from loguru import logger

LEVELS = {1: "INFO", 2: "DEBUG", 3: "TRACE"}

_verbosity: ContextVar[int] = ContextVar("embedmd_verbosity", default=0)

logger.remove()
logger.configure(extra={"document": "-"})
logger.add(
    sys.stderr,
    level="TRACE",
    format=(
        "<green>{time:HH:mm:ss}</green> │ "
        "<level>{level: <5}</level> │ "
        "<cyan>{extra[document]: <18}</cyan> ║ "
        "<level>{message}</level>"
    ),
)


def state_connectToLogger(state: Any) -> None:
    """Take the LOG() threshold from a ProgramState's verbosity"""
    _verbosity.set(getattr(state, "verbosity", 0))


@contextmanager
def document_context(document: Any) -> Iterator[None]:
    """Tag every LOG() call inside the block with the document's path"""
    with logger.contextualize(document=str(document)):
        yield


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected verbosity allows.

    Args:
        message: Log message to display
        level: 1 (INFO), 2 (DEBUG) or 3 (TRACE); higher levels clamp to TRACE
        **kwargs: Format arguments passed through to loguru
    """
    if _verbosity.get() < level:
        return
    logger.opt(depth=1).log(LEVELS[min(max(level, 1), 3)], message, **kwargs)
