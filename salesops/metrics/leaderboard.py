"""Team leaderboard: members ranked by cash collected.

Deterministic -- pure functions, no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from salesops.metrics.comparison import PeriodComparison, compare
from salesops.metrics.reducer import CLOSER_FIELDS, SETTER_FIELDS, reduce_rows, row_values
from salesops.models.common import TeamRole


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked team member.

    ``volumes`` holds the role's activity counts: setters report
    ``bookings`` and ``conversations``, closers ``deals`` and ``shows``.
    """

    rank: int
    member_id: str
    name: str
    cash: float
    previous_cash: float
    cash_change: PeriodComparison
    volumes: dict[str, int] = field(default_factory=dict)


def _volumes(role: TeamRole, rows: Sequence[Any]) -> dict[str, int]:
    if role == TeamRole.SETTER:
        totals = reduce_rows(rows, fields=SETTER_FIELDS).with_sums(
            {"bookings": ("calls_booked_dms", "calls_booked_dials")}
        )
        return {
            "bookings": totals.value("bookings"),
            "conversations": totals.value("conversations"),
        }
    totals = reduce_rows(rows, fields=CLOSER_FIELDS)
    return {"deals": totals.value("deals_closed"), "shows": totals.value("shows")}


def _by_member(rows: Iterable[Any]) -> dict[str, list[Any]]:
    grouped: dict[str, list[Any]] = {}
    for row in rows:
        member_id = row_values(row).get("team_member_id")
        if member_id:
            grouped.setdefault(str(member_id), []).append(row)
    return grouped


def build_leaderboard(
    current_rows: Iterable[Any],
    previous_rows: Iterable[Any],
    role: TeamRole,
) -> list[LeaderboardEntry]:
    """Rank members of ``role`` by cash collected in the current window.

    Rows without a team member are ignored. Previous-window cash is only
    attributed to members who also appear in the current window.
    """
    current = _by_member(current_rows)
    previous = _by_member(previous_rows)

    unranked: list[tuple[str, str, float, float, dict[str, int]]] = []
    for member_id, rows in current.items():
        cash = reduce_rows(rows, fields=("cash_collected",)).value("cash_collected")
        prev_cash = reduce_rows(
            previous.get(member_id, []), fields=("cash_collected",),
        ).value("cash_collected")
        name = row_values(rows[0]).get("member_name") or ""
        unranked.append((member_id, name, cash, prev_cash, _volumes(role, rows)))

    unranked.sort(key=lambda entry: entry[2], reverse=True)
    return [
        LeaderboardEntry(
            rank=position,
            member_id=member_id,
            name=name,
            cash=cash,
            previous_cash=prev_cash,
            cash_change=compare("cash_collected", cash, prev_cash),
            volumes=volumes,
        )
        for position, (member_id, name, cash, prev_cash, volumes) in enumerate(
            unranked, start=1
        )
    ]


def rank_of(entries: Iterable[LeaderboardEntry], member_id: str | None) -> int:
    """Rank of ``member_id``, or 0 when the member is not on the board."""
    if member_id is None:
        return 0
    for entry in entries:
        if entry.member_id == str(member_id):
            return entry.rank
    return 0
