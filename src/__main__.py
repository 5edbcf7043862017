#!/usr/bin/env python3
"""
embedmd - Embed code snippets from files and URLs into Markdown

Keeps documentation code samples in sync with the real source by expanding
directives like

    [embedmd]:# (hello.go /func main/ $)

into fenced code blocks extracted from the referenced file or URL.

As with our other tools, the command line follows the ChRIS "plugin"
convention of an input directory and an output directory.

Usage:
    embedmd inputdir/ outputdir/ [--pattern GLOB] [--check]

    Every document matching --pattern under inputdir is rewritten to the
    same relative path under outputdir. Passing the same directory twice
    rewrites documents in place.

Examples:
    # Rewrite docs in place
    embedmd docs/ docs/

    # Only the top-level README, references relative to the repo root
    embedmd . . --pattern README.md --baseDir .

    # CI: fail (exit 1) and show a diff if any document is stale
    embedmd docs/ docs/ --check --keepDirectives
"""

import difflib
import io
import sys
from pathlib import Path
from typing import Tuple
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Processor, CachingFetcher, DefaultFetcher, EmbedError, __version__, LOG, state_connectToLogger, document_context
from .models import ProgramState, ProcessOptions, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="embedmd - embed code snippets from files and URLs into Markdown",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--pattern",
    default=appsettings.document_glob,
    type=str,
    help="Glob selecting documents to process (relative to inputdir)",
)

parser.add_argument(
    "--baseDir",
    default=None,
    type=str,
    help="Directory relative references are resolved against. Defaults to each document's directory",
)

parser.add_argument(
    "--check",
    action="store_true",
    help="Do not write anything; print a diff and exit 1 if any document would change",
)

parser.add_argument(
    "--keepDirectives",
    action="store_true",
    help="Keep directive lines and refresh the code block following each one",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate input, output and base directories.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with envOK set

    Exits:
        1 if inputdir or baseDir is not a directory
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if state.baseDir is not None and not Path(state.baseDir).is_dir():
        print(f"Error: Base directory not found: {state.baseDir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    if not state.check and state.outputdir is not None:
        state.outputdir.mkdir(parents=True, exist_ok=True)
        LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def directories_get(state: ProgramState) -> Tuple[Path, Path]:
    """
    Input and output directories of a state that passed env_check.

    Exits:
        1 if either directory is missing
    """
    if state.inputdir is None or state.outputdir is None:
        print("Error: inputdir and outputdir are required", file=sys.stderr)
        sys.exit(1)
    return state.inputdir, state.outputdir


def diff_printable(line: str) -> str:
    """Show undecodable source bytes (kept as surrogates) as U+FFFD in diffs"""
    return line.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def documents_discover(inputstate: ProgramState) -> ProgramState:
    """
    Find the documents to process.

    Returns:
        ProgramState with added field:
            - documents: Sorted files under inputdir matching pattern
    """
    state = inputstate.copy()

    inputdir, _ = directories_get(state)
    state.documents = sorted(p for p in inputdir.glob(state.pattern) if p.is_file())

    if not state.documents:
        LOG(f"No documents match {state.pattern} in {inputdir}", level=1)
    else:
        LOG(f"Found {len(state.documents)} document(s)", level=2)
    return state


def documents_process(inputstate: ProgramState) -> ProgramState:
    """
    Expand directives in every discovered document.

    A failing document, whether unreadable, not UTF-8, or holding a bad
    directive, does not stop the others; its error is recorded and reported
    at the end.

    Returns:
        ProgramState with added fields:
            - originals: Text read per document
            - rendered: Rewritten text per document
            - changed: Documents whose text changes
            - failures: Error message per failed document
            - directiveCount: Directives expanded across all documents
    """
    state = inputstate.copy()
    state.originals = {}
    state.rendered = {}
    state.changed = []
    state.failures = {}
    state.directiveCount = 0

    fetcher = CachingFetcher(DefaultFetcher())

    for document in state.documents:
        options = ProcessOptions(
            base_dir=state.baseDir if state.baseDir is not None else str(document.parent),
            fetcher=fetcher,
            keep_directives=state.keepDirectives,
        )
        processor = Processor(options)

        with document_context(document):
            try:
                with open(document, encoding="utf-8", newline="") as f:
                    original = f.read()
                rendered = processor.document_process(io.StringIO(original))
            except (OSError, UnicodeDecodeError, EmbedError) as e:
                state.failures[document] = str(e)
                print(f"{document}: {e}", file=sys.stderr)
                continue

            state.originals[document] = original
            state.rendered[document] = rendered
            state.directiveCount += processor.directive_count
            if rendered != original:
                state.changed.append(document)
            LOG(f"{processor.directive_count} directive(s)", level=1)

    return state


def documents_write(inputstate: ProgramState) -> ProgramState:
    """
    Write rewritten documents, or print diffs in check mode.

    When writing in place, unchanged documents are left untouched. Embedded
    bytes that are not UTF-8 are written back unchanged.
    """
    state = inputstate.copy()

    inputdir, outputdir = directories_get(state)
    in_place = inputdir.resolve() == outputdir.resolve()
    for document, rendered in state.rendered.items():
        relative = document.relative_to(inputdir)
        if document not in state.changed and (in_place or state.check):
            continue

        if state.check:
            diff = difflib.unified_diff(
                state.originals[document].splitlines(keepends=True),
                rendered.splitlines(keepends=True),
                fromfile=f"a/{relative.as_posix()}",
                tofile=f"b/{relative.as_posix()}",
            )
            sys.stdout.writelines(diff_printable(line) for line in diff)
            continue

        target = outputdir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(rendered)
        with document_context(document):
            LOG(f"Wrote {target}", level=2)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Summarize the run and map it to an exit status.

    Exits:
        1 if any document failed, or if check mode found stale documents
    """
    state: ProgramState = inputstate.copy()

    LOG(f"{len(state.documents)} document(s), {state.directiveCount} directive(s), "
        f"{len(state.changed)} changed, {len(state.failures)} failed", level=1)

    if state.failures:
        sys.exit(1)
    if state.check and state.changed:
        print(f"{len(state.changed)} document(s) out of date", file=sys.stderr)
        sys.exit(1)
    return state


@chris_plugin(
    parser=parser,
    title="embedmd - embed code snippets into Markdown",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - expand embed directives in Markdown documents.

    Orchestrates the pipeline:
        1. env_check: Validate directories
        2. documents_discover: Glob documents under inputdir
        3. documents_process: Expand directives
        4. documents_write: Write results (or print diffs with --check)
        5. results_report: Summarize and set exit status

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, documents_discover, documents_process, documents_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
