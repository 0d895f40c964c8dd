"""Tests for structured logging."""

import json
import logging

import pytest
import structlog

from skillshift.observability.logging import (
    add_correlation_id,
    bound_correlation_id,
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    new_correlation_id,
    set_correlation_id,
    setup_logging,
)


class TestStructuredLogging:
    """Tests for structured logging setup."""

    def test_setup_logging_with_json_format(self) -> None:
        """setup_logging should configure JSON logging."""
        setup_logging(log_level="INFO", json_logs=True)
        logger = get_logger(__name__)
        assert logger is not None

    def test_setup_logging_with_console_format(self) -> None:
        """setup_logging should configure console logging."""
        setup_logging(log_level="debug", json_logs=False)
        logger = get_logger(__name__)
        assert hasattr(logger, "info")
        assert hasattr(logger, "error")

    def test_stdlib_records_carry_correlation_id(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Plain stdlib loggers are rendered with the current run id."""
        setup_logging(log_level="INFO", json_logs=True)
        run_id = new_correlation_id()

        logging.getLogger("skillshift.generation.planner").warning(
            "Falling back to default plan: x"
        )
        clear_correlation_id()

        lines = [line for line in capsys.readouterr().err.splitlines() if "Falling back" in line]
        payload = json.loads(lines[-1])
        assert payload["correlation_id"] == run_id
        assert payload["event"] == "Falling back to default plan: x"
        assert payload["logger"] == "skillshift.generation.planner"
        assert payload["level"] == "warning"

    def test_setup_logging_replaces_its_handler(self) -> None:
        """Repeated setup installs a single formatting handler."""
        setup_logging(log_level="INFO")
        setup_logging(log_level="INFO")

        handlers = [
            h
            for h in logging.getLogger().handlers
            if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
        ]
        assert len(handlers) == 1


class TestCorrelationId:
    """Tests for correlation ID management."""

    def test_set_and_get_correlation_id(self) -> None:
        """Should be able to set and retrieve correlation ID."""
        set_correlation_id("run-abc")

        assert get_correlation_id() == "run-abc"
        clear_correlation_id()

    def test_clear_correlation_id_removes_id(self) -> None:
        """clear_correlation_id should remove the correlation ID."""
        set_correlation_id("run-123")
        clear_correlation_id()

        assert get_correlation_id() is None

    def test_new_correlation_id_is_current_and_unique(self) -> None:
        """Each run gets a fresh id that becomes current."""
        first = new_correlation_id()
        second = new_correlation_id()

        assert first.startswith("run-")
        assert first != second
        assert get_correlation_id() == second
        clear_correlation_id()

    def test_processor_adds_current_id(self) -> None:
        """The processor copies the current id into the event."""
        set_correlation_id("run-xyz")

        event = add_correlation_id(logging.getLogger("test"), "info", {"event": "x"})

        assert event["correlation_id"] == "run-xyz"
        clear_correlation_id()

    def test_processor_without_id_leaves_event_alone(self) -> None:
        """Without a current id the event is unchanged."""
        clear_correlation_id()

        event = add_correlation_id(logging.getLogger("test"), "info", {"event": "x"})

        assert event == {"event": "x"}

    def test_bound_correlation_id_restores_previous(self) -> None:
        """A bound id is current inside the block only."""
        set_correlation_id("run-outer")

        with bound_correlation_id("run-inner") as bound:
            assert bound == "run-inner"
            assert get_correlation_id() == "run-inner"

        assert get_correlation_id() == "run-outer"
        clear_correlation_id()

    def test_bound_correlation_id_generates_when_omitted(self) -> None:
        """Without an explicit id a fresh run id is bound."""
        clear_correlation_id()

        with bound_correlation_id() as bound:
            assert bound.startswith("run-")
            assert get_correlation_id() == bound

        assert get_correlation_id() is None
