"""Tests for SlackNotifier — fire-and-forget webhook posts."""

import json
from datetime import date

import httpx
import pytest

from salesops.models.common import TeamRole
from salesops.notifications.slack import ReportNotification, SlackNotifier, build_payload

WEBHOOK = "https://hooks.slack.example/services/T000/B000/XXX"


@pytest.fixture
def note() -> ReportNotification:
    return ReportNotification(
        role=TeamRole.CLOSER,
        member_name="Riley",
        report_date=date(2026, 3, 12),
        cash_collected=12500.0,
        key_metric_label="Deals Closed",
        key_metric_value=3,
    )


class TestBuildPayload:
    def test_header(self, note: ReportNotification) -> None:
        payload = build_payload(note)
        header = payload["blocks"][0]["text"]["text"]
        assert "Closer EOD Report" in header
        assert "*Riley*" in header
        assert "2026-03-12" in header

    def test_fields(self, note: ReportNotification) -> None:
        fields = build_payload(note)["blocks"][1]["fields"]
        assert fields[0]["text"] == "*Cash Collected:*\n$12,500"
        assert fields[1]["text"] == "*Deals Closed:*\n3"

    def test_cents_kept(self, note: ReportNotification) -> None:
        payload = build_payload(note.model_copy(update={"cash_collected": 99.5}))
        assert payload["blocks"][1]["fields"][0]["text"].endswith("$99.50")


class TestSlackNotifier:
    @pytest.mark.anyio
    async def test_posts_payload(self, note: ReportNotification) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="ok")

        notifier = SlackNotifier(WEBHOOK, transport=httpx.MockTransport(handler))
        assert await notifier.notify_report(note) is True
        assert len(seen) == 1
        assert str(seen[0].url) == WEBHOOK
        body = json.loads(seen[0].content)
        assert body["text"].endswith("*EOD Report Submitted*")

    @pytest.mark.anyio
    async def test_no_webhook_skips(self, note: ReportNotification) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("should not post")

        notifier = SlackNotifier("", transport=httpx.MockTransport(handler))
        assert notifier.enabled is False
        assert await notifier.notify_report(note) is False

    @pytest.mark.anyio
    async def test_server_error_swallowed(self, note: ReportNotification) -> None:
        notifier = SlackNotifier(
            WEBHOOK, transport=httpx.MockTransport(lambda r: httpx.Response(500)),
        )
        assert await notifier.notify_report(note) is False

    @pytest.mark.anyio
    async def test_connection_error_swallowed(self, note: ReportNotification) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        notifier = SlackNotifier(WEBHOOK, transport=httpx.MockTransport(handler))
        assert await notifier.notify_report(note) is False

    @pytest.mark.anyio
    async def test_trailing_carriage_return_stripped(self, note: ReportNotification) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="ok")

        notifier = SlackNotifier(f"{WEBHOOK}\r\n", transport=httpx.MockTransport(handler))
        assert await notifier.notify_report(note) is True
        assert str(seen[0].url) == WEBHOOK

    @pytest.mark.anyio
    async def test_blank_url_disabled(self, note: ReportNotification) -> None:
        notifier = SlackNotifier("  \r\n")
        assert notifier.enabled is False
        assert await notifier.notify_report(note) is False

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "url",
        [
            "https://hooks.slack.example/x\ry",
            "https://hooks.slack.example/x\x07",
        ],
    )
    async def test_malformed_url_swallowed(
        self, note: ReportNotification, url: str,
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="ok")

        notifier = SlackNotifier(url, transport=httpx.MockTransport(handler))
        assert await notifier.notify_report(note) is False
