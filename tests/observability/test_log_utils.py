"""Tests for logging helpers and correlation-aware formatting."""

import logging

import pytest
from langchain_core.documents import Document

from standup_digest.observability.correlation import correlation_scope, get_correlation_id
from standup_digest.observability.log_utils import (
    describe_documents,
    log_exception_with_context,
    log_with_context,
    to_log_value,
)
from standup_digest.observability.logger import CorrelationIdFilter, configure_logging


def _doc(source: str, text: str = "standup") -> Document:
    return Document(page_content=text, metadata={"source": source})


class TestToLogValue:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "None"),
            ([1, 2, 3], "list(3 items)"),
            ({"a": 1}, "dict(1 keys)"),
            (42, "42"),
        ],
    )
    def test_summaries(self, value, expected: str) -> None:
        assert to_log_value(value) == expected

    def test_long_model_output_truncated(self) -> None:
        result = to_log_value("x" * 600, max_length=100)
        assert result.startswith("x" * 100)
        assert result.endswith("(truncated, 600 total)")

    def test_single_document(self) -> None:
        assert to_log_value(_doc("slack", "hello")) == "Document(source=slack, chars=5)"

    def test_document_batch_uses_source_breakdown(self) -> None:
        docs = [_doc("slack"), _doc("github"), _doc("slack")]
        assert to_log_value(docs) == "3 documents (github=1, slack=2)"


class TestDescribeDocuments:
    def test_empty(self) -> None:
        assert describe_documents([]) == "0 documents"

    def test_missing_source(self) -> None:
        assert describe_documents([Document(page_content="x")]) == "1 documents (unknown=1)"


class TestStructuredLogging:
    def test_context_attached_as_extras(self, caplog) -> None:
        logger = logging.getLogger("tests.log_utils")
        with caplog.at_level(logging.INFO, logger="tests.log_utils"):
            log_with_context(logger, logging.INFO, "collapse round", round=2, groups=[1, 2])

        record = caplog.records[-1]
        assert record.round == "2"
        assert record.groups == "list(2 items)"

    def test_exception_fields(self, caplog) -> None:
        logger = logging.getLogger("tests.log_utils")
        with caplog.at_level(logging.ERROR, logger="tests.log_utils"):
            log_exception_with_context(logger, "publish failed", KeyError("id"), doc_name="Week 33")

        record = caplog.records[-1]
        assert record.error_type == "KeyError"
        assert record.doc_name == "Week 33"


class TestCorrelationScope:
    def test_scope_binds_and_restores(self) -> None:
        assert get_correlation_id() == ""
        with correlation_scope("outer"):
            with correlation_scope("inner") as inner:
                assert inner == "inner"
                assert get_correlation_id() == "inner"
            assert get_correlation_id() == "outer"
        assert get_correlation_id() == ""

    def test_scope_generates_id_when_missing(self) -> None:
        with correlation_scope(None) as correlation_id:
            assert len(correlation_id) == 32
            assert get_correlation_id() == correlation_id


class TestCorrelationIdFilter:
    def test_filter_injects_current_id(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        with correlation_scope("req-42"):
            CorrelationIdFilter().filter(record)
        assert record.correlation_id == "req-42"

    def test_filter_placeholder_without_id(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        CorrelationIdFilter().filter(record)
        assert record.correlation_id == "-"


class TestConfigureLogging:
    @pytest.fixture
    def root_logger(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        yield root
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    def test_single_correlated_stdout_handler(self, root_logger) -> None:
        configure_logging("debug")
        configure_logging("debug")

        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 1
        assert any(isinstance(f, CorrelationIdFilter) for f in root_logger.handlers[0].filters)
        assert logging.getLogger("httpx").level == logging.WARNING
