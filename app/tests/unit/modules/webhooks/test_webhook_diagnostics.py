"""Unit tests for webhook connectivity diagnostics."""

import json

import httpx
import pytest

from infrastructure.configuration import WebhookDeliverySettings
from modules.webhooks.diagnostics import probe_webhook_url, run_diagnostics, server_info
from tests.factories import GENERIC_URL


@pytest.fixture
def diagnostics_settings():
    return WebhookDeliverySettings(WEBHOOK_DEPLOYMENT_REGION="ca-central-1")


@pytest.mark.unit
class TestServerInfo:
    """Tests for server_info."""

    def test_contains_region(self, diagnostics_settings):
        info = server_info(diagnostics_settings)

        assert info["region"] == "ca-central-1"
        assert info["timestamp"].endswith("Z")
        assert info["python_version"]


@pytest.mark.unit
class TestProbeWebhookUrl:
    """Tests for probe_webhook_url."""

    @pytest.mark.asyncio
    async def test_successful_probe(self, recording_transport, diagnostics_settings):
        transport = recording_transport(
            httpx.Response(204, headers={"X-Request-Id": "abc"})
        )
        client = httpx.AsyncClient(transport=transport)

        result = await probe_webhook_url(GENERIC_URL, client, diagnostics_settings)

        assert result.success is True
        assert result.status_code == 204
        assert result.error is None
        assert result.response_headers["x-request-id"] == "abc"
        request = transport.requests[0]
        assert request.headers["User-Agent"] == "WebhookNotifier-Diagnostics/1.0"
        document = json.loads(request.content)
        assert document["test"] is True
        assert document["diagnostics"]["region"] == "ca-central-1"

    @pytest.mark.asyncio
    async def test_error_response_reports_body(
        self, recording_transport, diagnostics_settings
    ):
        transport = recording_transport(httpx.Response(401, text="Invalid Webhook Token"))
        client = httpx.AsyncClient(transport=transport)

        result = await probe_webhook_url(GENERIC_URL, client, diagnostics_settings)

        assert result.success is False
        assert result.status_code == 401
        assert result.error == "Invalid Webhook Token"

    @pytest.mark.asyncio
    async def test_network_failure_reports_status_zero(
        self, recording_transport, diagnostics_settings
    ):
        transport = recording_transport(httpx.ConnectError("Name or service not known"))
        client = httpx.AsyncClient(transport=transport)

        result = await probe_webhook_url(GENERIC_URL, client, diagnostics_settings)

        assert result.success is False
        assert result.status_code == 0
        assert result.error == "Name or service not known"


@pytest.mark.unit
class TestRunDiagnostics:
    """Tests for run_diagnostics."""

    @pytest.mark.asyncio
    async def test_report(self, recording_transport, diagnostics_settings):
        client = httpx.AsyncClient(transport=recording_transport(200))

        report = await run_diagnostics(
            GENERIC_URL,
            client,
            diagnostics_settings,
            request_info={"client_ip": "10.0.0.1"},
        )

        assert report.server_info["region"] == "ca-central-1"
        assert report.request_info == {"client_ip": "10.0.0.1"}
        assert report.connectivity_test.success is True
