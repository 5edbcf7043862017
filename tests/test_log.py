"""
Logging tests

Checks that LOG() follows the connected verbosity, maps its levels onto
Loguru levels and tags records with the current document.
"""

import pytest
from loguru import logger

from embedmd.lib.log import LOG, state_connectToLogger, document_context
from embedmd.models import ProgramState


@pytest.fixture
def records():
    """Collect emitted Loguru records; verbosity is reset afterwards"""
    collected = []
    sink_id = logger.add(lambda message: collected.append(message.record), level="TRACE")
    yield collected
    logger.remove(sink_id)
    state_connectToLogger(ProgramState(verbosity=0))


class TestVerbosity:
    """Test LOG() filtering"""

    def test_silent_without_connected_state(self, records):
        state_connectToLogger(ProgramState(verbosity=0))
        LOG("not shown", level=1)
        assert records == []

    def test_levels_up_to_verbosity(self, records):
        state_connectToLogger(ProgramState(verbosity=2))
        LOG("info", level=1)
        LOG("debug", level=2)
        LOG("trace", level=3)

        assert [(r["level"].name, r["message"]) for r in records] == [
            ("INFO", "info"),
            ("DEBUG", "debug"),
        ]

    def test_trace_at_highest_verbosity(self, records):
        state_connectToLogger(ProgramState(verbosity=3))
        LOG("cache hit", level=3)
        assert records[0]["level"].name == "TRACE"


class TestDocumentContext:
    """Test per-document tagging"""

    def test_records_tagged_with_document(self, records):
        state_connectToLogger(ProgramState(verbosity=1))
        with document_context("docs/README.md"):
            LOG("2 directive(s)")
        LOG("done")

        assert records[0]["extra"]["document"] == "docs/README.md"
        assert records[1]["extra"]["document"] == "-"

    def test_caller_is_reported(self, records):
        state_connectToLogger(ProgramState(verbosity=1))
        LOG("here")
        assert records[0]["function"] == "test_caller_is_reported"
