"""Tests for wren.diagnostics — error formatting and the default reporter."""

import logging

import pytest

from wren.diagnostics import DiagnosticsSink, Reporter, format_error
from wren.errors import (
    CollectionQueryError,
    FieldResolutionError,
    PageCreatorError,
    QueryShapeError,
    ReconciliationError,
    TemplateSyntaxError,
)


class TestFormatError:
    def test_generic(self) -> None:
        assert format_error(PageCreatorError("boom")) == "PageCreator: boom"

    def test_query_shape(self) -> None:
        text = format_error(QueryShapeError("{ allPost { id } }"))
        assert "...CollectionPagesQueryFragment" in text
        assert text.endswith("Offending query: { allPost { id } }")

    def test_empty_collection(self) -> None:
        text = format_error(CollectionQueryError("a.py", ("first", "second")))
        assert "came back empty" in text
        assert text.endswith("first\nsecond")

    def test_field_resolution(self) -> None:
        text = format_error(FieldResolutionError("{Post.slug}!", "slug"))
        assert "for key {Post.slug}! (transformed to slug)" in text

    def test_template_syntax(self) -> None:
        text = format_error(TemplateSyntaxError("x{Post.slug}"))
        assert text.endswith("The problematic part is: x{Post.slug}.")


class TestReporter:
    def test_is_sink(self) -> None:
        assert isinstance(Reporter(), DiagnosticsSink)

    def test_error_logged_and_recorded(self, caplog: pytest.LogCaptureFixture) -> None:
        reporter = Reporter()
        err = TemplateSyntaxError("x{Post.slug}")
        with caplog.at_level(logging.ERROR, logger="wren.pages"):
            reporter.error(err)
        assert reporter.history == [err]
        assert caplog.records[0].levelno == logging.ERROR
        assert "[5]" in caplog.text

    def test_panic_logged_critical(self, caplog: pytest.LogCaptureFixture) -> None:
        reporter = Reporter()
        err = ReconciliationError("about.js", ValueError("boom"))
        with caplog.at_level(logging.CRITICAL, logger="wren.pages"):
            reporter.panic(err)
        assert caplog.records[0].levelno == logging.CRITICAL
        assert "boom" in caplog.text

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        reporter = Reporter(logging.getLogger("myapp.pages"))
        with caplog.at_level(logging.ERROR, logger="myapp.pages"):
            reporter.error(PageCreatorError("x"))
        assert caplog.records[0].name == "myapp.pages"
