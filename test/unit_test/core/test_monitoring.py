"""
Unit tests for the Logfire monitoring module.

This test suite covers:
- Logfire initialization with various configurations
- Feature flag handling for each instrumentation
- Business event helpers with Logfire on and off
- Graceful degradation when Logfire calls fail
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

import celestial_crystals.core.monitoring as monitoring

MODULE = "celestial_crystals.core.monitoring"


@pytest.fixture(autouse=True)
def _reset_active_flag():
    monitoring._logfire_active = False
    yield
    monitoring._logfire_active = False


@pytest.fixture
def enabled():
    with (
        patch(f"{MODULE}.LOGFIRE_ENABLED", True),
        patch(f"{MODULE}.LOGFIRE_TOKEN", "test-token"),
        patch(f"{MODULE}.logfire") as mock_logfire,
    ):
        yield mock_logfire


class TestInitializeLogfire:
    def test_disabled_does_nothing(self):
        with patch(f"{MODULE}.LOGFIRE_ENABLED", False), patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.initialize_logfire()

        mock_logfire.configure.assert_not_called()
        assert not monitoring.is_logfire_active()

    def test_enabled_without_token_warns(self, caplog):
        with (
            patch(f"{MODULE}.LOGFIRE_ENABLED", True),
            patch(f"{MODULE}.LOGFIRE_TOKEN", ""),
            patch(f"{MODULE}.logfire") as mock_logfire,
            caplog.at_level(logging.WARNING, logger=MODULE),
        ):
            monitoring.initialize_logfire()

        mock_logfire.configure.assert_not_called()
        assert "LOGFIRE_TOKEN is not set" in caplog.text
        assert not monitoring.is_logfire_active()

    def test_configures_and_instruments(self, enabled):
        app = MagicMock()
        monitoring.initialize_logfire(app)

        enabled.configure.assert_called_once_with(
            token="test-token",
            service_name=monitoring.LOGFIRE_SERVICE_NAME,
            service_version=monitoring.LOGFIRE_SERVICE_VERSION,
            environment=monitoring.LOGFIRE_ENVIRONMENT,
        )
        enabled.instrument_pydantic_ai.assert_called_once()
        enabled.instrument_sqlalchemy.assert_called_once()
        enabled.instrument_httpx.assert_called_once()
        enabled.instrument_fastapi.assert_called_once_with(app=app)
        assert monitoring.is_logfire_active()

    def test_fastapi_needs_an_app(self, enabled):
        monitoring.initialize_logfire()

        enabled.instrument_fastapi.assert_not_called()

    def test_feature_flags_skip_instrumentation(self, enabled):
        with (
            patch(f"{MODULE}.LOGFIRE_TRACE_PYDANTIC_AI", False),
            patch(f"{MODULE}.LOGFIRE_TRACE_SQLALCHEMY", False),
            patch(f"{MODULE}.LOGFIRE_TRACE_HTTPX", False),
        ):
            monitoring.initialize_logfire()

        enabled.instrument_pydantic_ai.assert_not_called()
        enabled.instrument_sqlalchemy.assert_not_called()
        enabled.instrument_httpx.assert_not_called()

    def test_configure_failure_leaves_logfire_off(self, enabled):
        enabled.configure.side_effect = RuntimeError("bad token")

        monitoring.initialize_logfire()

        assert not monitoring.is_logfire_active()
        enabled.instrument_sqlalchemy.assert_not_called()

    def test_instrumentation_failure_is_tolerated(self, enabled):
        enabled.instrument_httpx.side_effect = RuntimeError("missing extra")

        monitoring.initialize_logfire()

        assert monitoring.is_logfire_active()
        enabled.instrument_sqlalchemy.assert_called_once()


class TestEventHelpers:
    def test_events_log_at_debug_when_inactive(self, caplog):
        with patch(f"{MODULE}.logfire") as mock_logfire, caplog.at_level(logging.DEBUG, logger=MODULE):
            monitoring.log_order_created("CC12345678", 54.0, "webhook")

        mock_logfire.info.assert_not_called()
        assert "Order created" in caplog.text
        assert "CC12345678" in caplog.text

    def test_events_go_to_logfire_when_active(self):
        monitoring._logfire_active = True
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.log_webhook_event("payment_intent.succeeded", "evt_1", "created")
            monitoring.log_email_sent("newsletter", 3, False)
            monitoring.log_content_generated("crystalGuide", used_llm=True)
            monitoring.log_api_request("GET", "/health", 200, 1.5)

        mock_logfire.info.assert_any_call(
            "Stripe webhook handled", event_type="payment_intent.succeeded", event_id="evt_1", outcome="created"
        )
        mock_logfire.info.assert_any_call("Email sent", email_type="newsletter", recipients=3, simulated=False)
        mock_logfire.info.assert_any_call("Blog content generated", template="crystalGuide", used_llm=True)
        assert mock_logfire.info.call_count == 4

    def test_log_error_uses_error_level_with_context(self):
        monitoring._logfire_active = True
        with patch(f"{MODULE}.logfire") as mock_logfire:
            monitoring.log_error("ValueError", "boom", {"path": "/api/v1/checkout/quote"})

        mock_logfire.error.assert_called_once_with(
            "Error occurred", error_type="ValueError", error_message="boom", path="/api/v1/checkout/quote"
        )

    def test_logfire_failure_is_swallowed(self):
        monitoring._logfire_active = True
        with patch(f"{MODULE}.logfire") as mock_logfire:
            mock_logfire.info.side_effect = RuntimeError("exporter down")
            monitoring.log_email_sent("welcome", 1, True)

    def test_log_error_message_does_not_clash_with_event_name(self, caplog):
        with caplog.at_level(logging.DEBUG, logger=MODULE):
            monitoring.log_error("RuntimeError", "boom", {"path": "/api/v1/orders/track"})

        assert "Error occurred" in caplog.text
        assert "'error_message': 'boom'" in caplog.text
