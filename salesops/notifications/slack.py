"""SlackNotifier — posts EOD submission notices to an incoming webhook.

Fire-and-forget: a missing webhook URL skips the post, and any HTTP
failure or malformed URL is logged and swallowed so a report submission
never fails because chat is down. Surrounding whitespace (a stray CR from
a CRLF .env file) is stripped from the configured URL.
"""

import logging
from datetime import date

import httpx

from salesops.models.common import SalesOpsBase, TeamRole

logger = logging.getLogger(__name__)

_EMOJI = {TeamRole.SETTER: ":telephone_receiver:", TeamRole.CLOSER: ":handshake:"}


class ReportNotification(SalesOpsBase):
    """What a submitted EOD report announces."""

    role: TeamRole
    member_name: str
    report_date: date
    cash_collected: float
    key_metric_label: str
    key_metric_value: float


def _money(amount: float) -> str:
    if float(amount).is_integer():
        return f"${int(amount):,}"
    return f"${amount:,.2f}"


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_payload(note: ReportNotification) -> dict:
    """Slack block-kit body for ``note``."""
    emoji = _EMOJI[note.role]
    role_label = note.role.value.capitalize()
    return {
        "text": f"{emoji} *EOD Report Submitted*",
        "blocks": [
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": (
                        f"{emoji} *{role_label} EOD Report*\n"
                        f"*{note.member_name}* submitted their report for "
                        f"*{note.report_date.isoformat()}*"
                    ),
                },
            },
            {
                "type": "section",
                "fields": [
                    {
                        "type": "mrkdwn",
                        "text": f"*Cash Collected:*\n{_money(note.cash_collected)}",
                    },
                    {
                        "type": "mrkdwn",
                        "text": (
                            f"*{note.key_metric_label}:*\n"
                            f"{_number(note.key_metric_value)}"
                        ),
                    },
                ],
            },
        ],
    }


class SlackNotifier:
    """Posts ``ReportNotification`` messages with httpx.

    ``transport`` lets tests substitute ``httpx.MockTransport``.
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._webhook_url = webhook_url.strip()
        self._timeout = timeout
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self._webhook_url)

    async def notify_report(self, note: ReportNotification) -> bool:
        """Post ``note``. Returns True only when Slack accepted it."""
        if not self.enabled:
            logger.info("Slack webhook URL not configured; skipping notification")
            return False

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport,
            ) as client:
                resp = await client.post(self._webhook_url, json=build_payload(note))
                resp.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning(
                "Slack notification failed for %s report by %s: %s",
                note.role.value,
                note.member_name,
                exc,
            )
            return False
        return True
