"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the embedding pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as processing progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, pattern, baseDir, check,
          keepDirectives
        - env_check: envOK
        - documents_discover: documents
        - documents_process: originals, rendered, changed, failures,
          directiveCount
        - documents_write: (no additions, writes files or prints diffs)
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the Markdown documents
        outputdir: Directory rewritten documents are written to
        verbosity: Logging verbosity level (1-3)
        pattern: Glob selecting documents, relative to inputdir
        baseDir: Directory for relative references; each document's own
                 directory when None
        check: Report documents that would change instead of writing them
        keepDirectives: Keep directive lines above their rendered blocks
        envOK: Environment validation passed
        documents: Discovered document paths
        originals: Text read per document path
        rendered: Rewritten text per document path
        changed: Documents whose rewritten text differs from the original
        failures: Error message per document that could not be processed
        directiveCount: Total directives expanded
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    pattern: str = field(default="**/*.md")
    baseDir: Optional[str] = field(default=None)
    check: bool = field(default=False)
    keepDirectives: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    documents: List[Path] = field(default_factory=list)
    originals: Dict[Path, str] = field(default_factory=dict)
    rendered: Dict[Path, str] = field(default_factory=dict)
    changed: List[Path] = field(default_factory=list)
    failures: Dict[Path, str] = field(default_factory=dict)
    directiveCount: int = field(default=0)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (pattern, check, etc.)
            inputdir: Directory containing source documents
            outputdir: Directory for rewritten documents

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Filter options_dict to only include fields that exist in ProgramState
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            documents_discover,
            documents_process,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
