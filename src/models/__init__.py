"""
Models package for embedmd

Contains data structures and type definitions for the embedding pipeline.
"""

from .state import ProgramState, pipeline
from .directive import (
    BoundarySpec,
    Directive,
    ProcessOptions,
    SinglePattern,
    StartEnd,
    StartToEOF,
    WholeFile,
)
from .parser import ArgumentToken, TokenKind

__all__ = [
    "ProgramState",
    "pipeline",
    "BoundarySpec",
    "Directive",
    "ProcessOptions",
    "SinglePattern",
    "StartEnd",
    "StartToEOF",
    "WholeFile",
    "ArgumentToken",
    "TokenKind",
]
