# expiry.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, List, Literal, Optional

from paths import SOON_DAYS

Status = Literal["expired", "soon", "ok"]


@dataclass(frozen=True)
class ExpiryStatus:
    status: Status
    days_left: int


def parse_date(s: str) -> date:
    """YYYY-MM-DD -> date (ValueError otherwise)."""
    return datetime.strptime((s or "").strip(), "%Y-%m-%d").date()


def days_until(expiration: date, today: Optional[date] = None) -> int:
    return (expiration - (today or date.today())).days


def classify(
    expiration: date, today: Optional[date] = None, soon_days: int = SOON_DAYS
) -> ExpiryStatus:
    days = days_until(expiration, today)
    if days < 0:
        return ExpiryStatus("expired", days)
    if days <= soon_days:
        return ExpiryStatus("soon", days)
    return ExpiryStatus("ok", days)


def alerts(
    items: Iterable[dict], today: Optional[date] = None, soon_days: int = SOON_DAYS
) -> List[dict]:
    """Items (with an `expiration_date`) that are expired or expiring soon, soonest first."""
    out = []
    for it in items:
        st = classify(it["expiration_date"], today, soon_days)
        if st.status != "ok":
            out.append({**it, "status": st.status, "days_left": st.days_left})
    out.sort(key=lambda x: x["expiration_date"])
    return out
