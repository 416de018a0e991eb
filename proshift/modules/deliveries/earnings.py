# proshift/modules/deliveries/earnings.py
"""
Rider earning rule and day bucketing.

A delivery inside one service center (sender and receiver center match)
pays the rider 80% of the parcel cost, an inter-center delivery pays 40%.
Amounts are whole currency units, rounded half up.
"""
import math
from datetime import date, datetime, timedelta
from typing import Any, Dict, Iterable, List, Optional

SAME_CENTER_RATE = 0.8
OTHER_CENTER_RATE = 0.4
REPORT_DAYS = 7


def earning_rate(sender_center: Optional[str], receiver_center: Optional[str]) -> float:
    return SAME_CENTER_RATE if sender_center == receiver_center else OTHER_CENTER_RATE


def round_amount(value: Optional[float]) -> int:
    """Nearest integer, halves go up"""
    if value is None:
        return 0
    return int(math.floor(value + 0.5))


def calculate_earning(parcel: Dict[str, Any]) -> int:
    cost = parcel.get("totalCost") or 0
    return round_amount(cost * earning_rate(parcel.get("sender_center"), parcel.get("receiver_center")))


def summarize_earnings(rows: Iterable[Dict[str, Any]], today: date) -> Dict[str, int]:
    """
    Totals from the earnings pipeline rows.

    Each row carries the raw `earning` computed by the database plus
    `delivered_at` and `cashout_status`.
    """
    summary = {
        "total_earning": 0,
        "today_earning": 0,
        "cashed_out": 0,
        "pending_cashout": 0,
        "available": 0,
        "delivered_count": 0,
        "today_count": 0
    }
    for row in rows:
        earning = round_amount(row.get("earning"))
        summary["total_earning"] += earning
        summary["delivered_count"] += 1

        delivered_at = row.get("delivered_at")
        if isinstance(delivered_at, datetime) and delivered_at.date() == today:
            summary["today_earning"] += earning
            summary["today_count"] += 1

        cashout_status = row.get("cashout_status") or "none"
        if cashout_status == "cashed_out":
            summary["cashed_out"] += earning
        elif cashout_status == "pending":
            summary["pending_cashout"] += earning
        else:
            summary["available"] += earning
    return summary


def report_window(today: date, days: int = REPORT_DAYS) -> List[date]:
    """The trailing calendar days ending today, oldest first"""
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def bucket_by_day(timestamps: Iterable[datetime], window: List[date]) -> List[Dict[str, Any]]:
    counts = {day: 0 for day in window}
    for moment in timestamps:
        day = moment.date()
        if day in counts:
            counts[day] += 1
    return [{"date": day.isoformat(), "count": counts[day]} for day in window]
