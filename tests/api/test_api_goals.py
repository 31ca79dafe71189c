"""Tests for the goal endpoints."""

import pytest
from httpx import AsyncClient
from uuid_extensions import uuid7

from salesops.db.tables import ClientRow

MEMBER = "00000000-0000-7000-8000-0000000000b1"


class TestGoalEndpoints:

    @pytest.mark.anyio
    async def test_default_goal(self, client: AsyncClient) -> None:
        resp = await client.get(f"/v1/users/{uuid7()}/goals/monthly")
        assert resp.status_code == 200
        data = resp.json()
        assert data["is_default"] is True
        assert data["assumptions"]["goal_amount"] == 50000.0

    @pytest.mark.anyio
    async def test_put_then_get(self, client: AsyncClient) -> None:
        user_id = uuid7()
        body = {"goal_amount": 75000, "target_aov": 5000, "target_close_rate": 0.4}
        resp = await client.put(f"/v1/users/{user_id}/goals/monthly", json=body)
        assert resp.status_code == 200
        assert resp.json()["is_default"] is False

        data = (await client.get(f"/v1/users/{user_id}/goals/monthly")).json()
        assert data["is_default"] is False
        assert data["assumptions"]["goal_amount"] == 75000.0
        assert data["assumptions"]["target_close_rate"] == 0.4

    @pytest.mark.anyio
    async def test_rate_out_of_range(self, client: AsyncClient) -> None:
        resp = await client.put(
            f"/v1/users/{uuid7()}/goals/monthly", json={"target_show_rate": 1.2},
        )
        assert resp.status_code == 422

    @pytest.mark.anyio
    async def test_unknown_goal_type(self, client: AsyncClient) -> None:
        resp = await client.get(f"/v1/users/{uuid7()}/goals/yearly")
        assert resp.status_code == 422


class TestPaceEndpoint:

    @pytest.mark.anyio
    async def test_closer_pace(self, client: AsyncClient, client_row: ClientRow) -> None:
        cid = client_row.id
        await client.post(f"/v1/clients/{cid}/eod/closer", json={
            "client_id": str(cid),
            "team_member_id": MEMBER,
            "member_name": "Riley",
            "report_date": "2026-03-05",
            "cash_collected": 20000,
        })
        user_id = uuid7()
        await client.put(
            f"/v1/users/{user_id}/goals/monthly",
            json={"goal_amount": 31000, "target_aov": 3000,
                  "target_close_rate": 0.3, "target_show_rate": 0.65},
        )
        resp = await client.get(
            f"/v1/users/{user_id}/goals/monthly/pace",
            params={"client_id": str(cid), "member_id": MEMBER,
                    "role": "closer", "today": "2026-03-10"},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["days_in_period"] == 31
        assert data["days_elapsed"] == 10
        assert data["pace"]["current"] == 20000.0
        assert data["pace"]["pace_status"] == "ahead"
        assert data["pace"]["remaining"] == 11000.0
        # 11000 / 3000 -> 4 deals; 4 / 0.3 -> 14 shows; 14 / 0.65 -> 22 bookings
        assert data["needs"] == {"deals_needed": 4, "shows_needed": 14, "bookings_needed": 22}

    @pytest.mark.anyio
    async def test_setter_needs(self, client: AsyncClient, client_row: ClientRow) -> None:
        resp = await client.get(
            f"/v1/users/{uuid7()}/goals/weekly/pace",
            params={"client_id": str(client_row.id), "member_id": MEMBER,
                    "role": "setter", "today": "2026-03-10"},
        )
        data = resp.json()
        assert data["days_in_period"] == 7
        assert set(data["needs"]) == {
            "bookings_needed", "conversations_needed", "responses_needed", "dms_needed",
        }

    @pytest.mark.anyio
    async def test_zero_target_is_422(self, client: AsyncClient, client_row: ClientRow) -> None:
        user_id = uuid7()
        await client.put(
            f"/v1/users/{user_id}/goals/monthly", json={"target_close_rate": 0},
        )
        resp = await client.get(
            f"/v1/users/{user_id}/goals/monthly/pace",
            params={"client_id": str(client_row.id), "member_id": MEMBER, "role": "closer"},
        )
        assert resp.status_code == 422
        assert resp.json()["detail"]["field"] == "target_close_rate"

    @pytest.mark.anyio
    async def test_custom_without_dates_is_422(
        self, client: AsyncClient, client_row: ClientRow,
    ) -> None:
        resp = await client.get(
            f"/v1/users/{uuid7()}/goals/custom/pace",
            params={"client_id": str(client_row.id), "member_id": MEMBER},
        )
        assert resp.status_code == 422
